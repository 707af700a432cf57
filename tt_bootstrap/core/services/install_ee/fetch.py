"""
HTTP fetcher — authenticated GET against the bundle origin.
"""

from __future__ import annotations

import base64
import http.client
import logging
import urllib.error
import urllib.request
from dataclasses import dataclass
from http import HTTPStatus
from urllib.parse import quote, urlsplit, urlunsplit

from tt_bootstrap.core.services.install_ee.errors import HttpError, TransportError

logger = logging.getLogger(__name__)

_USER_AGENT = "tt-bootstrap/1.0"


@dataclass(frozen=True)
class Credentials:
    """HTTP Basic credentials for the Enterprise origin."""

    username: str
    password: str

    def __repr__(self) -> str:
        return f"Credentials(username={self.username!r}, password='***')"

    def basic_auth_header(self) -> str:
        token = f"{self.username}:{self.password}".encode("utf-8")
        return "Basic " + base64.b64encode(token).decode("ascii")


def origin_url(origin: str, path: str) -> str:
    """Replace the path of ``origin`` with ``path``, keeping scheme and host.

    ``path`` is percent-encoded; escapes already present are kept.
    """
    parts = urlsplit(origin)
    return urlunsplit((parts.scheme, parts.netloc, quote(path, safe="/%"), "", ""))


def _status_text(code: int) -> str:
    try:
        return HTTPStatus(code).phrase
    except ValueError:
        return str(code)


def open_url(
    url: str,
    credentials: Credentials,
    timeout: float | None = None,
) -> http.client.HTTPResponse:
    """Issue a GET and return the open response.

    The caller owns the response and must close it.

    Raises:
        HttpError: Status other than 200.
        TransportError: The request never got an HTTP answer.
    """
    req = urllib.request.Request(
        url,
        method="GET",
        headers={
            "Authorization": credentials.basic_auth_header(),
            "User-Agent": _USER_AGENT,
        },
    )
    try:
        resp = urllib.request.urlopen(req, timeout=timeout)
    except urllib.error.HTTPError as e:
        e.close()
        raise HttpError(e.code, _status_text(e.code)) from e
    except (urllib.error.URLError, http.client.HTTPException, OSError) as e:
        reason = getattr(e, "reason", e)
        raise TransportError(f"{url}: {reason}") from e

    if resp.status != HTTPStatus.OK:
        resp.close()
        raise HttpError(resp.status, _status_text(resp.status))
    return resp


def http_get(
    origin: str,
    path: str,
    credentials: Credentials,
    timeout: float | None = None,
) -> bytes:
    """Fetch ``path`` under ``origin`` and return the whole body."""
    url = origin_url(origin, path)
    logger.debug("GET %s", url)
    with open_url(url, credentials, timeout=timeout) as resp:
        try:
            return resp.read()
        except (http.client.HTTPException, OSError) as e:
            raise TransportError(f"{url}: {e}") from e
