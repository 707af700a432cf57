"""
Config check use case — validate tt.yaml and report issues.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from tt_bootstrap.core.config.loader import ConfigError, find_config_file, load_config
from tt_bootstrap.core.models.config import CliOpts
from tt_bootstrap.core.services.install_ee.credentials import ENV_PASSWORD, ENV_USERNAME


@dataclass
class ConfigCheckResult:
    """Result of configuration validation."""

    valid: bool = False
    opts: CliOpts | None = None
    config_path: Path | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "config_path": str(self.config_path) if self.config_path else None,
            "errors": self.errors,
            "warnings": self.warnings,
            "credential_path": self.opts.ee.credential_path if self.opts else None,
            "distfiles": self.opts.repo.distfiles if self.opts else None,
        }


def check_config(config_path: Path | None = None) -> ConfigCheckResult:
    """Validate tt.yaml and report issues.

    Args:
        config_path: Optional explicit path to tt.yaml.
    """
    result = ConfigCheckResult()

    if config_path is None:
        config_path = find_config_file()

    if config_path is None:
        result.errors.append("No tt.yaml found.")
        return result

    result.config_path = config_path

    try:
        opts = load_config(config_path)
        result.opts = opts
    except ConfigError as e:
        result.errors.append(str(e))
        return result

    cred_path = opts.ee.credential_path
    has_env_creds = bool(os.environ.get(ENV_USERNAME) and os.environ.get(ENV_PASSWORD))
    if cred_path and not os.path.isfile(cred_path):
        if has_env_creds:
            result.warnings.append(f"Credentials file not found (env used instead): {cred_path}")
        else:
            result.errors.append(f"Credentials file not found: {cred_path}")
    elif not cred_path and not has_env_creds:
        result.warnings.append(
            f"No ee.credential_path set and {ENV_USERNAME}/{ENV_PASSWORD} are not exported."
        )

    distfiles = opts.repo.distfiles
    if distfiles and not os.path.isdir(distfiles):
        result.warnings.append(f"repo.distfiles directory does not exist: {distfiles}")

    result.valid = len(result.errors) == 0
    return result
