"""
Host detection — which OS / CPU architecture bundles must target.

Read-only lookups over :mod:`platform`.
"""

from __future__ import annotations

import platform

from tt_bootstrap.core.services.install_ee.errors import OsDetectionError

OS_LINUX = "linux"
OS_MACOS = "macos"

_OS_MAP: dict[str, str] = {
    "linux": OS_LINUX,
    "darwin": OS_MACOS,
}


def get_os() -> str:
    """Return ``"linux"`` or ``"macos"`` for the running host.

    Raises:
        OsDetectionError: On any other platform.
    """
    system = platform.system()
    os_type = _OS_MAP.get(system.lower())
    if os_type is None:
        raise OsDetectionError(f"unsupported OS: {system or 'unknown'}")
    return os_type


def get_arch() -> str:
    """Return the machine architecture as ``uname -m`` reports it."""
    machine = platform.machine()
    if not machine:
        raise OsDetectionError("unable to determine CPU architecture")
    return machine


def foreign_os(os_type: str) -> str:
    """The OS whose bundles must be skipped on ``os_type``."""
    return OS_MACOS if os_type == OS_LINUX else OS_LINUX
