"""
CLI commands for Tarantool Enterprise SDK bundles.

Thin wrappers over ``tt_bootstrap.core.use_cases.search`` / ``.download``.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click


@click.group("ee")
def ee() -> None:
    """Enterprise — search and download Tarantool Enterprise SDK bundles."""


@ee.command("search")
@click.option("--dev", is_flag=True, help="Include dev builds.")
@click.option("--debug-builds", "debug_builds", is_flag=True, help="Include debug builds.")
@click.option("--local-repo", is_flag=True, help="List bundles in repo.distfiles instead of the origin.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def search(
    ctx: click.Context,
    dev: bool,
    debug_builds: bool,
    local_repo: bool,
    as_json: bool,
) -> None:
    """List available SDK bundle versions, oldest first."""
    from tt_bootstrap.core.use_cases.search import search_ee

    result = search_ee(
        config_path=ctx.obj.get("config_path"),
        dev=dev,
        debug=debug_builds,
        local_repo=local_repo,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(1 if result.error else 0)
        return

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    if not result.versions:
        click.secho(f"⚠️  No bundles found in {result.source}", fg="yellow")
        return

    if not ctx.obj.get("quiet"):
        click.secho(f"📦 {len(result.versions)} bundle(s) — {result.source}", fg="cyan", bold=True)
    for ee_version in result.versions:
        info = ee_version.version_info
        click.echo(f"   {info.display:<32} {ee_version.path}")
        if ctx.obj.get("verbose"):
            click.echo(f"      release: {info.release}  revision: {info.revision}")


@ee.command("download")
@click.argument("version", required=False)
@click.option(
    "--dir",
    "dst",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Destination directory (default: current directory).",
)
@click.option("--dev", is_flag=True, help="Consider dev builds.")
@click.option("--debug-builds", "debug_builds", is_flag=True, help="Consider debug builds.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def download(
    ctx: click.Context,
    version: str | None,
    dst: Path | None,
    dev: bool,
    debug_builds: bool,
    as_json: bool,
) -> None:
    """Download an SDK bundle (latest when VERSION is omitted).

    Examples:

        tt-bootstrap ee download

        tt-bootstrap ee download 2.11.1-0-r563 --dir ./distfiles
    """
    from tt_bootstrap.core.use_cases.download import download_ee

    result = download_ee(
        version=version,
        dst=dst,
        config_path=ctx.obj.get("config_path"),
        dev=dev,
        debug=debug_builds,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(1 if result.error else 0)
        return

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    assert result.version is not None
    click.secho(f"✅ {result.version.version_info.display}", fg="green", bold=True)
    click.echo(f"   → {result.path}")
