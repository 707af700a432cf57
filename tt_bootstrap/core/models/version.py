"""
Version model — structured Tarantool Enterprise bundle versions.

A bundle version string looks like::

    1.10.10-52-r419
    2.11.0-rc1-r551
    2.10.0-beta2-91-g08c9b4963-r472
    3.0.0-alpha1-r569-gd1e2f3a

``major.minor.patch`` is followed by an optional pre-release tag, an
optional additional build counter, an optional ``g<hex>`` commit hash
and the mandatory three-digit ``rNNN`` revision.  The hash may also
trail the revision.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field
from typing import Any, Iterable

_VERSION_RE = re.compile(
    r"^(?P<major>\d+)\.(?P<minor>\d+)\.(?P<patch>\d+)"
    r"(?:-(?P<release>alpha|beta|rc)(?P<release_num>\d*))?"
    r"(?:-(?P<additional>\d+))?"
    r"(?:-(?P<late_release>alpha|beta|rc)(?P<late_release_num>\d*))?"
    r"(?:-(?P<hash>g[0-9a-f]+))?"
    r"-r(?P<revision>\d{3})"
    r"(?:-(?P<late_hash>g[0-9a-f]+))?$"
)


class ReleaseType(enum.IntEnum):
    """Build maturity; the integer value is the sort order."""

    ALPHA = 0
    BETA = 1
    RC = 2
    RELEASE = 3


@dataclass(frozen=True)
class Release:
    type: ReleaseType = ReleaseType.RELEASE
    num: int = 0

    def __str__(self) -> str:
        if self.type is ReleaseType.RELEASE:
            return "release"
        return f"{self.type.name.lower()}{self.num}"


@dataclass
class Version:
    """A parsed bundle version plus the tarball it came from."""

    major: int = 0
    minor: int = 0
    patch: int = 0
    additional: int = 0
    revision: int = 0
    release: Release = field(default_factory=Release)
    hash: str = ""
    display: str = ""
    tarball: str = ""

    def sort_key(self) -> tuple[int, ...]:
        return (
            self.major,
            self.minor,
            self.patch,
            int(self.release.type),
            self.release.num,
            self.additional,
            self.revision,
        )


class VersionFormatError(ValueError):
    """Raised when a version string does not follow the bundle grammar."""


def parse_version(version_str: str) -> Version:
    """Decompose a bundle version string into a :class:`Version`.

    Raises:
        VersionFormatError: If ``version_str`` does not follow the grammar.
    """
    m = _VERSION_RE.match(version_str)
    if m is None:
        raise VersionFormatError(f"failed to parse version {version_str!r}")

    if m.group("release") and m.group("late_release"):
        raise VersionFormatError(f"failed to parse version {version_str!r}: two release tags")
    if m.group("hash") and m.group("late_hash"):
        raise VersionFormatError(f"failed to parse version {version_str!r}: two commit hashes")

    rel_name = m.group("release") or m.group("late_release")
    if rel_name:
        rel_num = m.group("release_num") or m.group("late_release_num") or "0"
        release = Release(type=ReleaseType[rel_name.upper()], num=int(rel_num))
    else:
        release = Release()

    return Version(
        major=int(m.group("major")),
        minor=int(m.group("minor")),
        patch=int(m.group("patch")),
        additional=int(m.group("additional") or 0),
        revision=int(m.group("revision")),
        release=release,
        hash=m.group("hash") or m.group("late_hash") or "",
        display=version_str,
    )


@dataclass
class EEVersion:
    """A bundle available on the Enterprise origin.

    ``prefix`` is the directory holding the tarball; ``prefix`` +
    ``version_info.tarball`` is the exact path the bundle is fetched from.
    """

    version_info: Version
    prefix: str = ""

    @property
    def tarball(self) -> str:
        return self.version_info.tarball

    @property
    def path(self) -> str:
        return self.prefix + self.version_info.tarball

    def to_dict(self) -> dict[str, Any]:
        v = self.version_info
        return {
            "version": v.display,
            "major": v.major,
            "minor": v.minor,
            "patch": v.patch,
            "additional": v.additional,
            "revision": v.revision,
            "release": {"type": v.release.type.name.lower(), "num": v.release.num},
            "hash": v.hash,
            "tarball": v.tarball,
            "prefix": self.prefix,
        }


def sort_ee_versions(versions: Iterable[EEVersion]) -> list[EEVersion]:
    """Return ``versions`` oldest first; equal versions keep their input order."""
    return sorted(versions, key=lambda ev: ev.version_info.sort_key())
