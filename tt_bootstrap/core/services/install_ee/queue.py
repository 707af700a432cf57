"""
Thread-safe FIFO of strings shared by the crawl coordinator and workers.

Two instances exist per crawl: the traversal queue (paths still to
visit) and the results queue (bundle paths found so far).
"""

from __future__ import annotations

import threading
from collections import deque
from typing import Iterable


class EmptyQueueError(Exception):
    """Raised by :meth:`StringQueue.pop` / :meth:`StringQueue.snapshot` on an empty queue."""

    def __init__(self) -> None:
        super().__init__("empty queue")


class StringQueue:
    """Mutex-guarded FIFO of strings."""

    def __init__(self, items: Iterable[str] | None = None) -> None:
        self._lock = threading.Lock()
        self._buf: deque[str] = deque(items or ())

    def insert(self, item: str) -> None:
        with self._lock:
            self._buf.append(item)

    def insert_batch(self, items: Iterable[str]) -> None:
        with self._lock:
            self._buf.extend(items)

    def pop(self) -> str:
        """Remove and return the oldest element."""
        with self._lock:
            if not self._buf:
                raise EmptyQueueError()
            return self._buf.popleft()

    def snapshot(self) -> list[str]:
        """Return the remaining elements without removing them."""
        with self._lock:
            if not self._buf:
                raise EmptyQueueError()
            return list(self._buf)

    def __len__(self) -> int:
        with self._lock:
            return len(self._buf)
