"""
Domain models for tt-bootstrap.

    from tt_bootstrap.core.models import CliOpts, EEVersion, Version
"""

from tt_bootstrap.core.models.config import CliOpts, EEOpts, RepoOpts
from tt_bootstrap.core.models.version import (
    EEVersion,
    Release,
    ReleaseType,
    Version,
    VersionFormatError,
    parse_version,
    sort_ee_versions,
)

__all__ = [
    # config.py
    "CliOpts",
    "EEOpts",
    "RepoOpts",
    # version.py
    "EEVersion",
    "Release",
    "ReleaseType",
    "Version",
    "VersionFormatError",
    "parse_version",
    "sort_ee_versions",
]
