"""
macOS R toolchain installer: CLI entrypoint.

Usage:
    macrtools-postinstall             # what the installer package runs
    macrtools install
    macrtools status
    macrtools history
    macrtools config check
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from macrtools import __version__
from macrtools.core.observability.logging_config import resolve_level, setup_from_env


def _run_install(config_path: Path | None, sudo_password: str = "") -> None:
    """Load config, run the install, exit non-zero on any fatal error."""
    from macrtools.core.config.loader import ConfigError, load_config
    from macrtools.core.services.toolchain.domain.errors import InstallError
    from macrtools.core.services.toolchain.orchestration.orchestrator import install_toolchain

    try:
        config = load_config(config_path)
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)

    try:
        record = install_toolchain(config, sudo_password=sudo_password, progress=click.echo)
    except InstallError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(e.exit_code)

    click.secho(f"✅ Done (run {record.run_id})", fg="green", bold=True)


@click.group()
@click.version_option(version=__version__, prog_name="macrtools")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to an installer override file (YAML).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """macOS R toolchain installer: Command Line Tools and gfortran."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    setup_from_env(resolve_level(debug=debug, verbose=verbose, quiet=quiet))


@cli.command()
@click.pass_context
def install(ctx: click.Context) -> None:
    """Install Command Line Tools and gfortran (needs root)."""
    sudo_password = ""
    if os.geteuid() != 0:
        sudo_password = click.prompt("Password (sudo)", hide_input=True)
    _run_install(ctx.obj.get("config_path"), sudo_password=sudo_password)


@click.command()
def postinstall() -> None:
    """Installer package entry point. Runs as root, takes no options."""
    setup_from_env(resolve_level(default="INFO"))
    _run_install(None)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def status(ctx: click.Context, as_json: bool) -> None:
    """Show what an install run would do on this machine."""
    from macrtools.core.use_cases.status import get_status

    result = get_status(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    click.secho("\n🍎 macOS R toolchain", fg="cyan", bold=True)
    if result.os_version:
        support = "supported" if result.supported else "unsupported"
        click.echo(f"   macOS: {result.os_version} ({support})")

    clt = "installed" if result.base_toolchain_installed else "missing"
    click.echo(f"   Command Line Tools: {clt}")

    if result.compiler and result.config:
        click.echo(f"   gfortran: {result.compiler.version} ({result.compiler.os_name})")
        click.echo(f"     → {result.compiler.url(result.config.compiler_base_url)}")

    for path, present in result.config_files.items():
        marker = "present, will be backed up" if present else "absent"
        click.echo(f"   {path}: {marker}")

    if result.last_run:
        run = result.last_run
        color = "green" if run.status == "ok" else "red"
        click.echo("   Last run: ", nl=False)
        click.secho(f"{run.status} ({run.ended_at or run.started_at})", fg=color)
        if run.error:
            click.echo(f"     {run.error.splitlines()[0]}")

    if result.error:
        click.echo()
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    click.echo()


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option("-n", "count", default=10, type=click.IntRange(min=1), help="Number of runs to show.")
@click.pass_context
def history(ctx: click.Context, as_json: bool, count: int) -> None:
    """Show recent install runs."""
    from macrtools.core.config.loader import ConfigError, load_config
    from macrtools.core.persistence.ledger import InstallLedger

    try:
        config = load_config(ctx.obj.get("config_path"))
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    records = InstallLedger(config.ledger_path).read_recent(count)

    if as_json:
        click.echo(json.dumps([r.model_dump(mode="json") for r in records], indent=2))
        return

    if not records:
        click.echo("No install runs recorded.")
        return

    for run in records:
        color = "green" if run.status == "ok" else "red"
        click.secho(f"   {run.run_id} {run.status:<7}", fg=color, nl=False)
        click.echo(f" {run.started_at}  macOS {run.os_version or '?'}  stage={run.stage.value}")
        if run.error:
            click.echo(f"     {run.error.splitlines()[0]}")


@cli.group()
def config() -> None:
    """Installer configuration commands."""


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, as_json: bool) -> None:
    """Validate the installer override file."""
    from macrtools.core.use_cases.config_check import check_config

    result = check_config(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)

    if result.valid:
        source = result.config_path or "defaults"
        click.secho("✅ Configuration is valid", fg="green", bold=True)
        click.echo(f"   Source: {source}")
    else:
        click.secho("❌ Configuration errors:", fg="red", bold=True)
        for err in result.errors:
            click.echo(f"   • {err}")

    if result.warnings:
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        for warn in result.warnings:
            click.echo(f"   • {warn}")

    if not result.valid:
        click.echo()
        sys.exit(1)

    click.echo()


if __name__ == "__main__":
    cli()
