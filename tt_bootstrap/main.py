"""
tt-bootstrap — CLI entrypoint.

Usage:
    tt-bootstrap --help
    tt-bootstrap ee search
    tt-bootstrap ee download --dir ./distfiles
    tt-bootstrap config check
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from tt_bootstrap import __version__
from tt_bootstrap.core.observability.logging_config import setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="tt-bootstrap")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to tt.yaml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """tt-bootstrap — provision a local Tarantool environment."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get("TT_BOOTSTRAP_LOG_LEVEL", "WARNING")

    setup_logging(
        level=level,
        log_file=os.environ.get("TT_BOOTSTRAP_LOG_FILE"),
        log_file_level=os.environ.get("TT_BOOTSTRAP_LOG_FILE_LEVEL"),
        crawl_level=os.environ.get("TT_BOOTSTRAP_CRAWL_LOG_LEVEL"),
    )


@cli.group()
def config() -> None:
    """Configuration commands."""


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, as_json: bool) -> None:
    """Validate tt.yaml configuration."""
    from tt_bootstrap.core.use_cases.config_check import check_config

    result = check_config(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)
        return

    if result.valid:
        assert result.opts is not None
        click.secho("✅ Configuration is valid", fg="green", bold=True)
        click.echo(f"   Config: {result.config_path}")
        click.echo(f"   Credentials file: {result.opts.ee.credential_path or '(env)'}")
        click.echo(f"   Distfiles: {result.opts.repo.distfiles or '(unset)'}")
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


# ── Register sub-command groups from tt_bootstrap/ui/cli/ ─────────

from tt_bootstrap.ui.cli.ee import ee  # noqa: E402

cli.add_command(ee)


if __name__ == "__main__":
    cli()
