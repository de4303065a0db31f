"""
vmdeps — CLI entrypoint.

Usage:
    python -m vmdeps.main --help
    python -m vmdeps.main credhelpers install
    python -m vmdeps.main vm settings --cpus 4 --memory 8GiB
"""

from __future__ import annotations

import os
from pathlib import Path

import click

from vmdeps import __version__
from vmdeps.core.config.loader import default_home, settings_path
from vmdeps.core.observability.logging_config import setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="vmdeps")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--home",
    "home_dir",
    type=click.Path(file_okay=False),
    default=None,
    help="vmdeps home directory (default: $VMDEPS_HOME or ~/.vmdeps).",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path to settings.yaml (default: <home>/settings.yaml).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    home_dir: str | None,
    config_path: str | None,
) -> None:
    """vmdeps — provision VM helper binaries and keep their config in sync."""
    ctx.ensure_object(dict)
    home = Path(home_dir).expanduser().resolve() if home_dir else default_home()
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["home"] = home
    ctx.obj["settings_path"] = (
        Path(config_path).expanduser().resolve() if config_path else settings_path(home)
    )

    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get("VMDEPS_LOG_LEVEL", "WARNING")

    setup_logging(
        level=level,
        log_file=os.environ.get("VMDEPS_LOG_FILE"),
        log_file_level=os.environ.get("VMDEPS_LOG_FILE_LEVEL"),
    )


# ── Register sub-command groups from vmdeps/ui/cli/ ───────────────

from vmdeps.ui.cli.credhelpers import credhelpers  # noqa: E402
from vmdeps.ui.cli.vm import vm  # noqa: E402

cli.add_command(credhelpers)
cli.add_command(vm)


if __name__ == "__main__":
    cli()
