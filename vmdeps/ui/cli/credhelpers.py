"""
CLI commands for credential helpers.

Thin wrappers over ``vmdeps.core.services.credhelper``,
``dependency_group`` and ``config_refresh``.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from vmdeps.core.errors import VmdepsError
from vmdeps.core.services.credhelper import SUPPORTED_ARCHES


def _default_arch() -> str | None:
    from vmdeps.core.services.credhelper import host_architecture

    try:
        return host_architecture()
    except VmdepsError:
        return None


def _resolve_arch(arch: str | None) -> str:
    if arch:
        return arch
    detected = _default_arch()
    if detected is None:
        click.secho(
            f"❌ Cannot detect a supported architecture; pass --arch ({'|'.join(SUPPORTED_ARCHES)})",
            fg="red",
        )
        sys.exit(1)
    return detected


def _make_installer(ctx: click.Context):
    from vmdeps.adapters.net.fetch import UrllibFetcher
    from vmdeps.core.services.binary_installer import BinaryInstaller

    fetcher = ctx.obj.get("fetcher") or UrllibFetcher()
    return BinaryInstaller(fetcher)


def _credential_store(ctx: click.Context) -> Path:
    from vmdeps.core.config.loader import credential_store_path

    return credential_store_path(ctx.obj["home"])


def _fail(error: Exception) -> None:
    click.secho(f"❌ {error}", fg="red")
    sys.exit(1)


_arch_option = click.option(
    "--arch",
    type=click.Choice(SUPPORTED_ARCHES),
    default=None,
    help="Target architecture (default: this host).",
)


@click.group()
def credhelpers() -> None:
    """Credential helpers — list, install, verify, refresh config.json."""


# ── List ────────────────────────────────────────────────────────


@credhelpers.command("list")
@_arch_option
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def list_helpers(ctx: click.Context, arch: str | None, as_json: bool) -> None:
    """Show the known credential helpers and which are configured."""
    from vmdeps.core.config.loader import load_settings
    from vmdeps.core.services.credhelper import HELPER_CATALOG

    arch = _resolve_arch(arch)
    try:
        settings = load_settings(ctx.obj["settings_path"])
    except VmdepsError as e:
        _fail(e)

    rows = [
        {
            "name": spec.name,
            "binary": spec.binary_name,
            "version": spec.version,
            "url": spec.url_for(arch),
            "hash": spec.hash_for(arch),
            "configured": spec.name in settings.creds_helpers,
        }
        for spec in HELPER_CATALOG.values()
    ]

    if as_json:
        click.echo(json.dumps({"arch": arch, "helpers": rows}, indent=2))
        return

    click.secho(f"🔑 Credential helpers ({arch})", fg="cyan", bold=True)
    for row in rows:
        marker = " ✓ configured" if row["configured"] else ""
        click.echo(f"   • {row['name']} v{row['version']} → {row['binary']}{marker}")
        if ctx.obj.get("verbose"):
            click.echo(f"     {row['url']}")
            click.echo(f"     {row['hash']}")
    click.echo()


# ── Install ─────────────────────────────────────────────────────


@credhelpers.command()
@_arch_option
@click.option("--strict", is_flag=True, help="Fail on helper names that are not in the catalog.")
@click.pass_context
def install(ctx: click.Context, arch: str | None, strict: bool) -> None:
    """Install the helpers listed under creds_helpers in settings.yaml."""
    from vmdeps.core.config.loader import load_settings
    from vmdeps.core.services.config_refresh import refresh_config_file
    from vmdeps.core.services.credhelper import new_dependency_group
    from vmdeps.core.services.dependency_group import install_group

    arch = _resolve_arch(arch)
    home: Path = ctx.obj["home"]
    quiet = ctx.obj.get("quiet", False)

    try:
        settings = load_settings(ctx.obj["settings_path"])
        group = new_dependency_group(settings, home, arch, strict=strict)
        if group.is_noop:
            if not quiet:
                click.secho("   No credential helpers configured", fg="yellow")
        else:
            if not quiet:
                click.secho(f"⏳ {group.description}...", fg="cyan")
            install_group(group, _make_installer(ctx))
            if not quiet:
                for dep in group.binaries:
                    click.secho(f"   ✓ {dep.binary_name}", fg="green", nl=False)
                    click.echo(f"  → {dep.target_path}")
        refresh_config_file(ctx.obj["settings_path"], _credential_store(ctx))
    except (VmdepsError, OSError) as e:
        _fail(e)


# ── Verify ──────────────────────────────────────────────────────


@credhelpers.command()
@_arch_option
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def verify(ctx: click.Context, arch: str | None, as_json: bool) -> None:
    """Check installed helpers against their expected digests."""
    from vmdeps.core.config.loader import load_settings
    from vmdeps.core.services.credhelper import new_dependency_group
    from vmdeps.core.services.dependency_group import verify_group

    arch = _resolve_arch(arch)
    try:
        settings = load_settings(ctx.obj["settings_path"])
        group = new_dependency_group(settings, ctx.obj["home"], arch)
    except VmdepsError as e:
        _fail(e)

    missing = verify_group(group, _make_installer(ctx))

    if as_json:
        click.echo(json.dumps({
            "ok": not missing,
            "checked": [d.binary_name for d in group.binaries],
            "failed": [d.binary_name for d in missing],
        }, indent=2))
        if missing:
            sys.exit(1)
        return

    for dep in group.binaries:
        if dep in missing:
            click.secho(f"   ✗ {dep.binary_name}", fg="red", nl=False)
            click.echo(f"  (missing or digest mismatch) → {dep.target_path}")
        else:
            click.secho(f"   ✓ {dep.binary_name}", fg="green")

    if missing:
        sys.exit(1)
    if group.is_noop:
        click.secho("   No credential helpers configured", fg="yellow")


# ── Refresh ─────────────────────────────────────────────────────


@credhelpers.command()
@click.pass_context
def refresh(ctx: click.Context) -> None:
    """Bring config.json in line with settings.yaml."""
    from vmdeps.core.services.config_refresh import refresh_config_file

    try:
        changed = refresh_config_file(ctx.obj["settings_path"], _credential_store(ctx))
    except (VmdepsError, OSError) as e:
        _fail(e)

    if ctx.obj.get("quiet"):
        return
    if changed:
        click.secho("✅ config.json refreshed", fg="green")
    else:
        click.echo("config.json already up to date")
