"""
CLI commands for the virtual machine configuration.

Thin wrappers over ``vmdeps.core.services.vm_settings``.
"""

from __future__ import annotations

import sys

import click

from vmdeps.core.errors import VmdepsError

UPDATED_MESSAGE = "Configurations have been successfully updated."
UNCHANGED_MESSAGE = (
    "Input values were unchanged from the configuration file, so changes were not applied."
)


@click.group()
def vm() -> None:
    """Virtual machine — resource settings."""


@vm.command()
@click.option(
    "--cpus",
    type=int,
    default=0,
    help="vCPUs to dedicate to the virtual machine (restart the VM to apply).",
)
@click.option(
    "--memory",
    default="",
    help="Memory to dedicate to the virtual machine, e.g. 4GiB (restart the VM to apply).",
)
@click.pass_context
def settings(ctx: click.Context, cpus: int, memory: str) -> None:
    """Configure the virtual machine instance."""
    from vmdeps.core.services.vm_settings import apply_vm_settings

    try:
        changed = apply_vm_settings(ctx.obj["settings_path"], cpus=cpus, memory=memory)
    except (VmdepsError, OSError) as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    click.echo(UPDATED_MESSAGE if changed else UNCHANGED_MESSAGE)
