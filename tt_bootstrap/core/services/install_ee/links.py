"""
Link classifier — split a directory listing into crawl and bundle links.

Each ``<a href>`` of a page is tested against a fixed set of substring
predicates and lands in one of three buckets:

    Traverse   another listing to crawl
    Download   an SDK bundle for this host
    Discard    everything else (parents, checksums, foreign OS, gated channels)
"""

from __future__ import annotations

import enum
import logging
import posixpath
from dataclasses import dataclass, field
from html.parser import HTMLParser
from urllib.parse import urljoin, urlsplit

from tt_bootstrap.core.services.install_ee.host import foreign_os

logger = logging.getLogger(__name__)


@dataclass
class SearchOptions:
    """Which build channels to include besides release builds."""

    dev: bool = False
    debug: bool = False


class Verdict(enum.Enum):
    TRAVERSE = "traverse"
    DOWNLOAD = "download"
    DISCARD = "discard"


def classify_link(
    href: str,
    options: SearchOptions,
    os_type: str,
    path: str | None = None,
) -> Verdict:
    """Classify a single href for a host running ``os_type``.

    ``path`` is the href resolved against its page.  Parent and self
    links are judged on the href as written; OS and channel gating on
    the resolved path, so a relative ``dev/`` is still a dev link.
    """
    target = path or href
    is_back = "../" in href
    is_self = "./" in href
    is_bundle = ".tar.gz" in target
    is_checksum = ".sha256" in target
    is_wrong_os = f"/{foreign_os(os_type)}/" in target
    is_dev = "/dev/" in target
    is_debug = "/debug/" in target

    if is_dev and not options.dev:
        return Verdict.DISCARD
    if is_debug and not options.debug:
        return Verdict.DISCARD
    if not is_bundle and not is_back and not is_wrong_os and not is_self:
        return Verdict.TRAVERSE
    if is_bundle and not is_back and not is_wrong_os and not is_checksum and not is_self:
        return Verdict.DOWNLOAD
    return Verdict.DISCARD


class _AnchorExtractor(HTMLParser):
    """Collect ``href`` values of ``<a>`` start tags in document order."""

    def __init__(self) -> None:
        super().__init__()
        self.hrefs: list[str] = []

    def handle_starttag(self, tag, attrs):
        if tag != "a":
            return
        for key, value in attrs:
            if key == "href" and value is not None:
                self.hrefs.append(value)
                return


def extract_hrefs(html: str | bytes) -> list[str]:
    """Return every anchor href in ``html``; malformed markup is tolerated."""
    if isinstance(html, bytes):
        html = html.decode("utf-8", errors="replace")
    parser = _AnchorExtractor()
    parser.feed(html)
    parser.close()
    return parser.hrefs


def to_origin_path(href: str, page_path: str) -> str | None:
    """Resolve ``href`` seen on ``page_path`` into an origin-relative path.

    Returns None when the link points at another host or scheme, or is
    not a valid URL at all.
    """
    try:
        parts = urlsplit(href)
        if parts.scheme or parts.netloc:
            return None
        resolved = urlsplit(urljoin(page_path, href)).path
    except ValueError:
        return None
    if not resolved.startswith("/"):
        resolved = posixpath.join("/", resolved)
    return resolved


@dataclass
class PageLinks:
    """Classifier output for one page."""

    traverse: list[str] = field(default_factory=list)
    download: list[str] = field(default_factory=list)


def find_references(
    html: str | bytes,
    options: SearchOptions,
    os_type: str,
    page_path: str = "/",
) -> PageLinks:
    """Classify every link of a listing page.

    Both output lists keep document order and hold origin paths.
    """
    links = PageLinks()
    for href in extract_hrefs(html):
        path = to_origin_path(href, page_path)
        if path is None:
            logger.debug("Skipping off-origin link %s", href)
            continue
        verdict = classify_link(href, options, os_type, path=path)
        if verdict is Verdict.DISCARD:
            continue
        if verdict is Verdict.TRAVERSE:
            links.traverse.append(path)
        else:
            links.download.append(path)
    return links
