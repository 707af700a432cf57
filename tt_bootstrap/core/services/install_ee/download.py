"""
Bundle downloader — fetch one SDK tarball into a local directory.
"""

from __future__ import annotations

import http.client
import logging
import posixpath
from pathlib import Path

from tt_bootstrap.core.models.config import CliOpts
from tt_bootstrap.core.services.install_ee.credentials import get_creds
from tt_bootstrap.core.services.install_ee.crawler import EE_SOURCE
from tt_bootstrap.core.services.install_ee.errors import (
    BundleWriteError,
    PreconditionError,
    TransportError,
)
from tt_bootstrap.core.services.install_ee.fetch import Credentials, open_url, origin_url

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 1024 * 1024


def bundle_url(bundle_name: str, bundle_prefix: str, source: str = EE_SOURCE) -> str:
    """The URL a bundle is downloaded from: origin + prefix + filename."""
    return origin_url(source, posixpath.join(bundle_prefix or "/", bundle_name))


def download_bundle(
    bundle_name: str,
    bundle_prefix: str,
    dst: str | Path,
    *,
    cli_opts: CliOpts | None = None,
    credentials: Credentials | None = None,
    source: str = EE_SOURCE,
) -> Path:
    """Download ``bundle_prefix``/``bundle_name`` into the directory ``dst``.

    The request has no timeout.  On a failed write the partial file is
    left in place.

    Returns:
        Path of the written tarball.

    Raises:
        PreconditionError: ``dst`` is missing or not a directory.
        HttpError / TransportError: The origin did not deliver the bundle.
        BundleWriteError: The tarball could not be written.
    """
    dst = Path(dst)
    if not dst.exists():
        raise PreconditionError(f"directory doesn't exist: {dst}")
    if not dst.is_dir():
        raise PreconditionError(f"incorrect path: {dst}")

    if credentials is None:
        credentials = get_creds(cli_opts)

    url = bundle_url(bundle_name, bundle_prefix, source)
    target = dst / bundle_name
    logger.info("Downloading %s → %s", url, target)

    with open_url(url, credentials, timeout=None) as resp:
        try:
            out = open(target, "wb")
        except OSError as e:
            raise BundleWriteError(f"cannot create {target}: {e}") from e
        with out:
            while True:
                try:
                    chunk = resp.read(_CHUNK_SIZE)
                except (http.client.HTTPException, OSError) as e:
                    raise TransportError(f"{url}: {e}") from e
                if not chunk:
                    break
                try:
                    out.write(chunk)
                except OSError as e:
                    raise BundleWriteError(f"failed to write {target}: {e}") from e

    logger.info("Saved %s (%d bytes)", target, target.stat().st_size)
    return target
