"""
Error kinds raised by the Enterprise bundle discovery engine.

Every public failure derives from :class:`EEError` so callers can
catch one type and report ``str(exc)``.
"""

from __future__ import annotations


class EEError(Exception):
    """Base class for all Enterprise bundle errors."""


class TransportError(EEError):
    """Network failure contacting the origin (DNS, TCP, TLS, timeout)."""


class HttpError(EEError):
    """The origin answered with a non-200 status."""

    def __init__(self, status: int, reason: str):
        self.status = status
        self.reason = reason
        super().__init__(f"HTTP request error: {reason}")


class NoPackagesError(EEError):
    """The bundle grammar matched nothing for the host OS."""

    def __init__(self, message: str = "no packages for this OS"):
        super().__init__(message)


class VersionParseError(EEError):
    """A bundle matched the filename grammar but its version did not parse."""


class NoCredentialsError(EEError):
    """No credentials could be resolved."""


class CorruptedCredentialsError(EEError):
    """The credentials file exists but does not hold a user/password pair."""

    def __init__(self, message: str = "corrupted credentials"):
        super().__init__(message)


class CredentialsFileError(EEError):
    """The credentials file could not be read."""


class PreconditionError(EEError):
    """The download destination is missing or not a directory."""


class BundleWriteError(EEError):
    """Writing the downloaded bundle to disk failed."""


class OsDetectionError(EEError):
    """The host OS or CPU architecture could not be determined."""
