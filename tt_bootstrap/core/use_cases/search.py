"""
Search use case — list the Enterprise SDK bundles available for this host.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from tt_bootstrap.core.config.loader import ConfigError, load_config
from tt_bootstrap.core.models.version import EEVersion
from tt_bootstrap.core.services.install_ee import (
    EE_SOURCE,
    EEError,
    SearchOptions,
    fetch_versions,
    fetch_versions_local,
)


@dataclass
class SearchResult:
    """Version catalog, oldest first."""

    versions: list[EEVersion] = field(default_factory=list)
    source: str = ""
    error: str | None = None

    @property
    def latest(self) -> EEVersion | None:
        return self.versions[-1] if self.versions else None

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error}
        return {
            "source": self.source,
            "count": len(self.versions),
            "versions": [v.to_dict() for v in self.versions],
        }


def search_ee(
    config_path: Path | None = None,
    dev: bool = False,
    debug: bool = False,
    local_repo: bool = False,
    source: str = EE_SOURCE,
) -> SearchResult:
    """Collect available versions from the origin or from the local repo.

    Args:
        config_path: Optional explicit path to tt.yaml.
        dev: Include dev builds.
        debug: Include debug builds.
        local_repo: Read bundle names from ``repo.distfiles`` instead of crawling.
        source: Origin URL.
    """
    result = SearchResult()

    try:
        cli_opts = load_config(config_path)
    except ConfigError as e:
        result.error = str(e)
        return result

    if local_repo:
        distfiles = cli_opts.repo.distfiles
        if not distfiles or not os.path.isdir(distfiles):
            result.error = f"Local repository not found: {distfiles or '(repo.distfiles unset)'}"
            return result
        result.source = distfiles
        try:
            result.versions = fetch_versions_local(sorted(os.listdir(distfiles)))
        except EEError as e:
            result.error = str(e)
        return result

    result.source = source
    try:
        result.versions = fetch_versions(
            SearchOptions(dev=dev, debug=debug),
            cli_opts,
            source=source,
        )
    except EEError as e:
        result.error = str(e)
    return result
