"""
Download use case — pick a bundle from the catalog and fetch it.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from tt_bootstrap.core.config.loader import ConfigError, load_config
from tt_bootstrap.core.models.version import EEVersion
from tt_bootstrap.core.services.install_ee import (
    EE_SOURCE,
    EEError,
    SearchOptions,
    download_bundle,
    fetch_versions,
)


@dataclass
class DownloadResult:
    """Outcome of a bundle download."""

    version: EEVersion | None = None
    path: Path | None = None
    error: str | None = None

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error}
        return {
            "version": self.version.to_dict() if self.version else None,
            "path": str(self.path) if self.path else None,
        }


def select_version(versions: list[EEVersion], wanted: str | None) -> EEVersion | None:
    """Find ``wanted`` by version string or tarball name; latest when None."""
    if not versions:
        return None
    if not wanted:
        return versions[-1]
    for ee_version in reversed(versions):
        if wanted in (ee_version.version_info.display, ee_version.tarball):
            return ee_version
    return None


def download_ee(
    version: str | None = None,
    dst: Path | None = None,
    config_path: Path | None = None,
    dev: bool = False,
    debug: bool = False,
    source: str = EE_SOURCE,
) -> DownloadResult:
    """Download one Enterprise SDK bundle into ``dst`` (default: cwd).

    Args:
        version: Version string or tarball filename; latest when None.
        dst: Destination directory, which must already exist.
        config_path: Optional explicit path to tt.yaml.
        dev: Consider dev builds.
        debug: Consider debug builds.
        source: Origin URL.
    """
    result = DownloadResult()

    try:
        cli_opts = load_config(config_path)
    except ConfigError as e:
        result.error = str(e)
        return result

    try:
        versions = fetch_versions(SearchOptions(dev=dev, debug=debug), cli_opts, source=source)
        chosen = select_version(versions, version)
        if chosen is None:
            result.error = f"Version not found: {version}"
            return result
        result.version = chosen
        result.path = download_bundle(
            chosen.tarball,
            chosen.prefix,
            dst or Path.cwd(),
            cli_opts=cli_opts,
            source=source,
        )
    except EEError as e:
        result.error = str(e)
    return result
