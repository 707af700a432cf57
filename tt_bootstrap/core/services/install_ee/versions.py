"""
Bundle catalog — turn bundle paths into a sorted list of versions.

The filename grammar depends on the host: only bundles built for the
running OS and CPU architecture match.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable

from tt_bootstrap.core.models.config import CliOpts
from tt_bootstrap.core.models.version import (
    EEVersion,
    VersionFormatError,
    parse_version,
    sort_ee_versions,
)
from tt_bootstrap.core.services.install_ee.credentials import get_creds
from tt_bootstrap.core.services.install_ee.crawler import (
    EE_SOURCE,
    collect_bundle_references,
)
from tt_bootstrap.core.services.install_ee.errors import (
    NoPackagesError,
    VersionParseError,
)
from tt_bootstrap.core.services.install_ee.host import OS_LINUX, get_arch, get_os
from tt_bootstrap.core.services.install_ee.links import SearchOptions

logger = logging.getLogger(__name__)

_SHORT_VERSION_RE = re.compile(r"\d\.\d+")


def compile_version_regexp(os_type: str | None = None, arch: str | None = None) -> re.Pattern:
    """Build the bundle filename pattern for the host (or the given OS/arch).

    Groups: 1 — directory prefix (None for bare filenames),
    2 — tarball filename, 3 — version string.
    """
    os_type = os_type or get_os()
    arch = re.escape(arch or get_arch())

    if os_type == OS_LINUX:
        return re.compile(
            r"(.*/)?(tarantool-enterprise-(?:sdk|bundle)-(?:(?:no)?gc64)?-?"
            r"(.*r[0-9]{3})?(?:(?:[-.](?:no)?gc64)?(?:\.linux\.)?"
            + arch
            + r")?\.tar\.gz)"
        )
    return re.compile(
        r"(.*/)?(tarantool-enterprise-(?:sdk|bundle)-(?:(?:no)?gc64)?-?"
        r"(.*r[0-9]{3})[-.]macosx?[-.]"
        + arch
        + r"\.tar\.gz)"
    )


def _to_ee_version(match: re.Match) -> EEVersion | None:
    version_str = match.group(3)
    if not version_str:
        logger.debug("Skipping %s: no version in bundle name", match.group(2))
        return None
    try:
        version = parse_version(version_str)
    except VersionFormatError as e:
        raise VersionParseError(str(e)) from e
    version.tarball = match.group(2)
    return EEVersion(version_info=version, prefix=match.group(1) or "")


def get_versions(data: str) -> list[EEVersion]:
    """Parse every bundle path found in ``data`` (one per line).

    Raises:
        NoPackagesError: Nothing in ``data`` is a bundle for this host.
        VersionParseError: A bundle name carries an unparsable version.
    """
    pattern = compile_version_regexp()
    versions = []
    for match in pattern.finditer(data.strip()):
        ee_version = _to_ee_version(match)
        if ee_version is not None:
            versions.append(ee_version)

    if not versions:
        raise NoPackagesError()
    return sort_ee_versions(versions)


def fetch_versions_local(files: Iterable[str]) -> list[EEVersion]:
    """Build a catalog from local bundle file names, skipping non-bundles.

    A name counts only when the whole name is a bundle, so checksum files
    sitting next to a tarball are ignored.
    """
    pattern = compile_version_regexp()
    versions = []
    for name in files:
        match = pattern.fullmatch(name)
        if match is None:
            continue
        ee_version = _to_ee_version(match)
        if ee_version is not None:
            versions.append(ee_version)
    return sort_ee_versions(versions)


def fetch_versions(
    options: SearchOptions,
    cli_opts: CliOpts | None = None,
    *,
    source: str = EE_SOURCE,
    workers: int | None = None,
) -> list[EEVersion]:
    """Crawl the Enterprise origin and return every bundle version, oldest first."""
    credentials = get_creds(cli_opts)
    references = collect_bundle_references(
        options,
        credentials,
        source=source,
        workers=workers,
    )
    return get_versions("\n".join(references))


def get_short_version_from_bundle_name(bundle_name: str) -> str:
    """Return the ``major.minor`` part of a bundle name, e.g. ``"1.10"``."""
    match = _SHORT_VERSION_RE.search(bundle_name)
    if match is None:
        raise VersionParseError("no version found")
    return match.group(0)
