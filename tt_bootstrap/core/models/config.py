"""
Config model — options loaded from tt.yaml.

Every section is optional; a missing file means all defaults.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class EEOpts(BaseModel):
    """Tarantool Enterprise download settings."""

    model_config = ConfigDict(extra="forbid")

    credential_path: str = ""


class RepoOpts(BaseModel):
    """Local bundle repository."""

    model_config = ConfigDict(extra="forbid")

    distfiles: str = ""


class CliOpts(BaseModel):
    """Root of tt.yaml.

    Relative paths are resolved against the directory holding the file
    by the loader, so consumers always see absolute paths (or empty).
    """

    ee: EEOpts = Field(default_factory=EEOpts)
    repo: RepoOpts = Field(default_factory=RepoOpts)
