"""
Logging setup for tt-bootstrap.

main.py calls :func:`setup_logging` once per invocation; modules log
through ``logging.getLogger(__name__)``.

    console    --debug > --verbose > --quiet > TT_BOOTSTRAP_LOG_LEVEL > WARNING
    crawl      TT_BOOTSTRAP_CRAWL_LOG_LEVEL, else the console level
    file       TT_BOOTSTRAP_LOG_FILE at TT_BOOTSTRAP_LOG_FILE_LEVEL

The crawl loggers get their own threshold because a single search fans
out to dozens of worker threads, each logging every page it fetches.
``--debug`` with ``TT_BOOTSTRAP_CRAWL_LOG_LEVEL=INFO`` keeps the rest of
the debug output readable; ``TT_BOOTSTRAP_CRAWL_LOG_LEVEL=DEBUG`` alone
traces just the crawl.
"""

from __future__ import annotations

import logging
import sys

CRAWL_LOGGERS = (
    "tt_bootstrap.core.services.install_ee.crawler",
    "tt_bootstrap.core.services.install_ee.fetch",
)

# Worker threads are named ee-crawl-N, so the thread column identifies them.
_FMT_DEBUG = "%(asctime)s %(levelname)-5s [%(threadName)s] %(name)s — %(message)s"
_FMT_INFO = "%(asctime)s %(message)s"
_FMT_PLAIN = "%(message)s"
_DATEFMT_CONSOLE = "%H:%M:%S"

_FMT_FILE = "%(asctime)s %(levelname)-5s [%(threadName)s] %(name)s:%(lineno)d — %(message)s"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"


class _SplitLevelFilter(logging.Filter):
    """Apply one threshold to crawl records and another to everything else."""

    def __init__(self, level: int, crawl_level: int) -> None:
        super().__init__()
        self.level = level
        self.crawl_level = crawl_level

    def filter(self, record: logging.LogRecord) -> bool:
        if is_crawl_record(record):
            return record.levelno >= self.crawl_level
        return record.levelno >= self.level


def is_crawl_record(record: logging.LogRecord) -> bool:
    return any(
        record.name == name or record.name.startswith(name + ".")
        for name in CRAWL_LOGGERS
    )


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
    crawl_level: str | None = None,
) -> None:
    """Install the console handler and, optionally, a file handler.

    Args:
        level: Console level name.
        log_file: Path of a log file to append to.
        log_file_level: File level name; defaults to ``level``.
        crawl_level: Console level for the crawl loggers; defaults to ``level``.
    """
    console_level = _parse_level(level)
    crawl = _parse_level(crawl_level) if crawl_level else console_level
    lowest = min(console_level, crawl)

    if lowest <= logging.DEBUG:
        formatter = logging.Formatter(_FMT_DEBUG, datefmt=_DATEFMT_CONSOLE)
    elif lowest <= logging.INFO:
        formatter = logging.Formatter(_FMT_INFO, datefmt=_DATEFMT_CONSOLE)
    else:
        formatter = logging.Formatter(_FMT_PLAIN)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(lowest)
    console.addFilter(_SplitLevelFilter(console_level, crawl))
    console.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        lowest = min(lowest, file_level)

        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FMT_FILE, datefmt=_DATEFMT_FILE))
        root.addHandler(fh)

    root.setLevel(lowest)


def _parse_level(level: str | None) -> int:
    if not level:
        return logging.WARNING
    numeric = logging.getLevelName(level.upper())
    return numeric if isinstance(numeric, int) else logging.WARNING
