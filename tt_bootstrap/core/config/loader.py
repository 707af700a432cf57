"""
Configuration loader — reads tt.yaml into CliOpts.

The file is optional: without one every option keeps its default.
Relative paths inside the file are resolved against its directory.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from tt_bootstrap.core.models.config import CliOpts

logger = logging.getLogger(__name__)

CONFIG_FILE = "tt.yaml"


class ConfigError(Exception):
    """Raised when tt.yaml is unreadable or invalid."""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for tt.yaml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to tt.yaml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def load_config(path: Path | None = None) -> CliOpts:
    """Load and validate tt.yaml.

    Args:
        path: Explicit path to tt.yaml. If None, searches upward and
            falls back to defaults when nothing is found.

    Raises:
        ConfigError: If an explicit file is missing, or any file is invalid.
    """
    if path is None:
        path = find_config_file()
        if path is None:
            logger.debug("No %s found, using defaults", CONFIG_FILE)
            return CliOpts()

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        opts = CliOpts.model_validate(data)
    except Exception as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e

    return _resolve_paths(opts, path.parent.resolve())


def _resolve_paths(opts: CliOpts, base_dir: Path) -> CliOpts:
    if opts.ee.credential_path:
        opts.ee.credential_path = str(base_dir / Path(opts.ee.credential_path).expanduser())
    if opts.repo.distfiles:
        opts.repo.distfiles = str(base_dir / Path(opts.repo.distfiles).expanduser())
    return opts
