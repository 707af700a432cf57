"""
Credentials provider — who to authenticate as against the Enterprise origin.

Resolution order:
    1. ``TT_EE_USERNAME`` / ``TT_EE_PASSWORD`` environment variables
    2. the credentials file named by ``ee.credential_path`` in tt.yaml

The file holds two lines, the username then the password.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from tt_bootstrap.core.models.config import CliOpts
from tt_bootstrap.core.services.install_ee.errors import (
    CorruptedCredentialsError,
    CredentialsFileError,
    NoCredentialsError,
)
from tt_bootstrap.core.services.install_ee.fetch import Credentials

logger = logging.getLogger(__name__)

ENV_USERNAME = "TT_EE_USERNAME"
ENV_PASSWORD = "TT_EE_PASSWORD"


def get_creds_from_env() -> Credentials:
    username = os.environ.get(ENV_USERNAME, "")
    password = os.environ.get(ENV_PASSWORD, "")
    if not username or not password:
        raise NoCredentialsError("no credentials in environment variables were found")
    return Credentials(username=username, password=password)


def get_creds_from_file(path: str | Path) -> Credentials:
    """Read a two-line credentials file.

    Raises:
        CredentialsFileError: The file cannot be read.
        CorruptedCredentialsError: The content is not exactly a user and a password.
    """
    try:
        raw = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise CredentialsFileError(f"open {path}: {e.strerror or e}") from e

    lines = [line.rstrip() for line in raw.strip().splitlines()]
    if len(lines) != 2 or not lines[0] or not lines[1]:
        raise CorruptedCredentialsError()
    return Credentials(username=lines[0], password=lines[1])


def get_creds(cli_opts: CliOpts | None = None) -> Credentials:
    """Resolve credentials from the environment, then from the configured file."""
    try:
        creds = get_creds_from_env()
    except NoCredentialsError:
        cred_path = cli_opts.ee.credential_path if cli_opts else ""
        if not cred_path:
            raise
    else:
        logger.debug("Using credentials from %s/%s", ENV_USERNAME, ENV_PASSWORD)
        return creds

    logger.debug("Using credentials from %s", cred_path)
    return get_creds_from_file(cred_path)
