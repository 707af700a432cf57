"""
Crawl coordinator — walk the Enterprise directory listings in parallel.

Thread model
────────────
- The coordinator owns ``W`` worker threads.  Each worker has a
  one-slot mailbox (``queue.Queue(maxsize=1)``) and a ``free`` event.
- The coordinator pops a path from the traversal queue for every free
  worker, clears its ``free`` event and drops the path into its mailbox.
- A worker fetches the page, classifies its links, pushes them into the
  traversal / results queues and only then sets ``free`` again.
- The crawl is over when, in one pass, every worker is free and every
  pop attempt hits an empty traversal queue.
- The first worker failure lands in the error queue; the coordinator
  sets the shared cancel event and re-raises it.
"""

from __future__ import annotations

import logging
import os
import queue
import threading
import time
from dataclasses import dataclass, field

from tt_bootstrap.core.services.install_ee.fetch import Credentials, http_get
from tt_bootstrap.core.services.install_ee.host import OS_MACOS, get_os
from tt_bootstrap.core.services.install_ee.links import SearchOptions, find_references
from tt_bootstrap.core.services.install_ee.queue import EmptyQueueError, StringQueue

logger = logging.getLogger(__name__)

EE_SOURCE = "https://download.tarantool.io/"

EE_COMMON_PREFIX = "/enterprise/"
EE_RELEASE_PREFIX = "/enterprise/release/"
EE_DEBUG_PREFIX = "/enterprise/debug/"
EE_DEV_PREFIX = "/enterprise/dev/"
EE_MACOS_OLD_PREFIX = "/enterprise-macos/"

PAGE_TIMEOUT = 25.0
WORKERS_PER_CPU = 5

# Mailbox poll interval; bounds how long a worker takes to notice cancellation.
_POLL_INTERVAL = 0.05
# Coordinator back-off when a pass dispatched nothing.
_IDLE_SLEEP = 0.005


def seed_prefixes(os_type: str) -> list[str]:
    """Root listings to start from on ``os_type``."""
    if os_type == OS_MACOS:
        return [EE_RELEASE_PREFIX, EE_DEBUG_PREFIX, EE_DEV_PREFIX, EE_MACOS_OLD_PREFIX]
    return [EE_COMMON_PREFIX]


def default_worker_count() -> int:
    return WORKERS_PER_CPU * (os.cpu_count() or 1)


@dataclass
class _Worker:
    index: int
    slot: queue.Queue = field(default_factory=lambda: queue.Queue(maxsize=1))
    free: threading.Event = field(default_factory=threading.Event)
    thread: threading.Thread | None = None

    def __post_init__(self) -> None:
        self.free.set()


@dataclass
class _CrawlContext:
    """State shared by every worker of one crawl."""

    source: str
    options: SearchOptions
    credentials: Credentials
    os_type: str
    timeout: float
    traverse_queue: StringQueue
    result_queue: StringQueue
    errors: queue.Queue
    cancel: threading.Event


def _crawl_worker(ctx: _CrawlContext, worker: _Worker) -> None:
    """Serve paths from the worker mailbox until cancelled or failed."""
    while not ctx.cancel.is_set():
        try:
            path = worker.slot.get(timeout=_POLL_INTERVAL)
        except queue.Empty:
            continue

        try:
            body = http_get(ctx.source, path, ctx.credentials, timeout=ctx.timeout)
            links = find_references(body, ctx.options, ctx.os_type, page_path=path)
        except Exception as e:
            logger.warning("Worker %d failed on %s: %s", worker.index, path, e)
            ctx.errors.put(e)
            return

        logger.debug(
            "Worker %d: %s → %d listings, %d bundles",
            worker.index,
            path,
            len(links.traverse),
            len(links.download),
        )
        ctx.traverse_queue.insert_batch(links.traverse)
        ctx.result_queue.insert_batch(links.download)
        worker.free.set()


def collect_bundle_references(
    options: SearchOptions,
    credentials: Credentials,
    *,
    source: str = EE_SOURCE,
    workers: int | None = None,
    timeout: float = PAGE_TIMEOUT,
) -> list[str]:
    """Crawl ``source`` and return the paths of every bundle for this host.

    Args:
        options: Build channels to include.
        credentials: HTTP Basic credentials.
        source: Origin URL; only its scheme and host are used.
        workers: Number of crawl threads (default ``5 × CPUs``).
        timeout: Per-page request timeout in seconds.

    Returns:
        Bundle paths in discovery order (unspecified); empty when none found.

    Raises:
        EEError: The first failure any worker hit.
    """
    os_type = get_os()
    count = workers or default_worker_count()

    ctx = _CrawlContext(
        source=source,
        options=options,
        credentials=credentials,
        os_type=os_type,
        timeout=timeout,
        traverse_queue=StringQueue(seed_prefixes(os_type)),
        result_queue=StringQueue(),
        errors=queue.Queue(),
        cancel=threading.Event(),
    )

    pool = [_Worker(index=i) for i in range(count)]
    for worker in pool:
        worker.thread = threading.Thread(
            target=_crawl_worker,
            args=(ctx, worker),
            name=f"ee-crawl-{worker.index}",
            daemon=True,
        )
        worker.thread.start()

    logger.info("Crawling %s with %d workers", source, count)
    started = time.monotonic()
    visited: set[str] = set()

    try:
        while True:
            try:
                err = ctx.errors.get_nowait()
            except queue.Empty:
                pass
            else:
                raise err

            idle = 0
            dispatched = 0
            for worker in pool:
                if not worker.free.is_set():
                    continue
                path = _next_unvisited(ctx.traverse_queue, visited)
                if path is None:
                    idle += 1
                    continue
                worker.free.clear()
                worker.slot.put(path)
                dispatched += 1

            if idle == count:
                break
            if not dispatched:
                time.sleep(_IDLE_SLEEP)
    finally:
        ctx.cancel.set()

    for worker in pool:
        worker.thread.join(timeout=1.0)

    try:
        found = ctx.result_queue.snapshot()
    except EmptyQueueError:
        found = []

    logger.info(
        "Crawl finished: %d pages, %d bundles in %.1fs",
        len(visited),
        len(found),
        time.monotonic() - started,
    )
    return found


def _next_unvisited(traverse_queue: StringQueue, visited: set[str]) -> str | None:
    """Pop paths until one not crawled yet turns up; None once the queue is empty."""
    while True:
        try:
            path = traverse_queue.pop()
        except EmptyQueueError:
            return None
        if path not in visited:
            visited.add(path)
            return path
