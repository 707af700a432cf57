"""
Tests for the crawl work queue.
"""

import threading

import pytest

from tt_bootstrap.core.services.install_ee.queue import EmptyQueueError, StringQueue


class TestStringQueue:
    def test_insert(self):
        q = StringQueue()
        q.insert("test")
        assert len(q) == 1

    def test_insert_batch_keeps_order(self):
        q = StringQueue()
        q.insert_batch(["test1", "test2"])
        assert q.snapshot() == ["test1", "test2"]

    def test_pop_fifo(self):
        q = StringQueue(["test1", "test2"])
        assert q.pop() == "test1"
        assert q.pop() == "test2"
        assert len(q) == 0

    def test_pop_empty(self):
        q = StringQueue()
        with pytest.raises(EmptyQueueError, match="empty queue"):
            q.pop()

    def test_snapshot_does_not_remove(self):
        q = StringQueue(["a", "b"])
        assert q.snapshot() == ["a", "b"]
        assert len(q) == 2

    def test_snapshot_empty(self):
        with pytest.raises(EmptyQueueError):
            StringQueue().snapshot()

    def test_snapshot_is_a_copy(self):
        q = StringQueue(["a"])
        snap = q.snapshot()
        snap.append("b")
        assert q.snapshot() == ["a"]

    def test_concurrent_inserts(self):
        q = StringQueue()

        def fill(tag: str) -> None:
            for i in range(500):
                q.insert(f"{tag}-{i}")

        threads = [threading.Thread(target=fill, args=(str(n),)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(q) == 8 * 500
        items = q.snapshot()
        assert len(set(items)) == len(items)
        # per-producer order survives interleaving
        ones = [item for item in items if item.startswith("1-")]
        assert ones == [f"1-{i}" for i in range(500)]
