"""
Shared test fixtures and configuration.
"""

from __future__ import annotations

import platform
import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

from tt_bootstrap.core.services.install_ee.fetch import Credentials

ORIGIN_USER = "toor"
ORIGIN_PASSWORD = "1234"


class FakeOrigin:
    """In-memory origin: path → page body, with HTTP Basic auth."""

    def __init__(self) -> None:
        self.pages: dict[str, str | bytes] = {}
        self.delays: dict[str, float] = {}
        self.requests: list[str] = []
        self.credentials = Credentials(ORIGIN_USER, ORIGIN_PASSWORD)
        self.server: ThreadingHTTPServer | None = None

    @property
    def url(self) -> str:
        assert self.server is not None
        return f"http://127.0.0.1:{self.server.server_address[1]}/"


class _OriginHandler(BaseHTTPRequestHandler):
    def do_GET(self):
        origin: FakeOrigin = self.server.origin
        origin.requests.append(self.path)

        if self.headers.get("Authorization") != origin.credentials.basic_auth_header():
            self.send_response(401)
            self.send_header("WWW-Authenticate", 'Basic realm="enterprise"')
            self.send_header("Content-Length", "0")
            self.end_headers()
            return

        delay = origin.delays.get(self.path)
        if delay:
            time.sleep(delay)

        body = origin.pages.get(self.path)
        if body is None:
            self.send_error(404)
            return

        if isinstance(body, str):
            body = body.encode("utf-8")
            ctype = "text/html"
        else:
            ctype = "application/gzip"
        self.send_response(200)
        self.send_header("Content-Type", ctype)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format, *args):
        pass


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    """Keep host credentials, log settings and proxies out of the tests."""
    for name in (
        "TT_EE_USERNAME",
        "TT_EE_PASSWORD",
        "TT_BOOTSTRAP_LOG_LEVEL",
        "TT_BOOTSTRAP_LOG_FILE",
        "TT_BOOTSTRAP_LOG_FILE_LEVEL",
        "TT_BOOTSTRAP_CRAWL_LOG_LEVEL",
        "http_proxy",
        "HTTP_PROXY",
        "https_proxy",
        "HTTPS_PROXY",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("no_proxy", "127.0.0.1,localhost")


@pytest.fixture
def linux_x86_64(monkeypatch):
    """Pretend the host is Linux on x86_64."""
    monkeypatch.setattr(platform, "system", lambda: "Linux")
    monkeypatch.setattr(platform, "machine", lambda: "x86_64")


@pytest.fixture
def macos_arm64(monkeypatch):
    """Pretend the host is macOS on Apple silicon."""
    monkeypatch.setattr(platform, "system", lambda: "Darwin")
    monkeypatch.setattr(platform, "machine", lambda: "arm64")


@pytest.fixture
def ee_origin():
    """A local HTTP origin serving ``FakeOrigin.pages``."""
    origin = FakeOrigin()
    server = ThreadingHTTPServer(("127.0.0.1", 0), _OriginHandler)
    server.daemon_threads = True
    server.origin = origin
    origin.server = server

    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield origin
    server.shutdown()
    server.server_close()


@pytest.fixture
def env_creds(monkeypatch):
    """Export credentials accepted by ``ee_origin``."""
    monkeypatch.setenv("TT_EE_USERNAME", ORIGIN_USER)
    monkeypatch.setenv("TT_EE_PASSWORD", ORIGIN_PASSWORD)
