"""Concurrent access to the document cache."""

import threading
from concurrent.futures import ThreadPoolExecutor

from invoicekit.cache.document_cache import DocumentCache
from invoicekit.config.schema import CacheConfig
from invoicekit.types import RenderedDocument


def _doc(pages: int = 1) -> RenderedDocument:
    return RenderedDocument.uniform(pages)


class TestConcurrentAccess:
    def test_concurrent_gets_lose_no_counts(self):
        cache = DocumentCache()
        cache.set("hot", _doc())
        threads = 8
        per_thread = 500
        barrier = threading.Barrier(threads)

        def reader(n: int) -> None:
            barrier.wait()
            for i in range(per_thread):
                cache.get("hot" if i % 2 == 0 else f"cold-{n}")

        workers = [threading.Thread(target=reader, args=(n,)) for n in range(threads)]
        for t in workers:
            t.start()
        for t in workers:
            t.join(timeout=30)

        stats = cache.metrics()
        assert stats.hits == threads * per_thread // 2
        assert stats.misses == threads * per_thread // 2

    def test_mixed_workload_keeps_invariants(self):
        config = CacheConfig(max_total_size_bytes=1_000_000, max_entry_count=10, min_eviction_batch=3)
        cache = DocumentCache(config)
        lookups = 0
        lookups_lock = threading.Lock()

        def worker(n: int) -> None:
            nonlocal lookups
            local = 0
            for i in range(300):
                key = (n * 7 + i) % 25
                if i % 3 == 0:
                    cache.set(key, _doc(1 + i % 4))
                elif i % 11 == 0:
                    cache.remove(key)
                else:
                    cache.get(key)
                    local += 1
            with lookups_lock:
                lookups += local

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(worker, range(8)))

        stats = cache.metrics()
        assert stats.hits + stats.misses == lookups
        assert stats.entries <= config.max_entry_count
        assert stats.size_bytes <= config.max_total_size_bytes
        assert stats.size_bytes == sum(e.size_bytes for e in cache._store.values())

    def test_concurrent_sets_same_key_last_writer_wins(self):
        cache = DocumentCache()
        docs = [_doc(n) for n in range(1, 9)]
        barrier = threading.Barrier(len(docs))

        def writer(doc: RenderedDocument) -> None:
            barrier.wait()
            cache.set("k", doc)

        threads = [threading.Thread(target=writer, args=(d,)) for d in docs]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=30)

        assert len(cache) == 1
        stored = cache.get("k")
        assert stored in docs
        assert cache.total_size_bytes == stored.page_count * 50_000

    def test_get_after_set_observes_value(self):
        cache = DocumentCache()
        doc = _doc(2)
        done = threading.Event()

        def writer() -> None:
            cache.set("k", doc)
            done.set()

        threading.Thread(target=writer).start()
        assert done.wait(timeout=10)
        assert cache.get("k") is doc


class _LookupRecorder(dict):
    """Store that records whether the bookkeeping mutex was held during lookups."""

    def __init__(self, cache: DocumentCache) -> None:
        super().__init__(cache._store)
        self.cache = cache
        self.mutex_held: list[bool] = []

    def get(self, key, default=None):
        self.mutex_held.append(self.cache._access_lock.locked())
        return super().get(key, default)


class TestReadSide:
    def test_lookup_runs_outside_bookkeeping_mutex(self):
        cache = DocumentCache()
        cache.set("a", _doc())
        recorder = _LookupRecorder(cache)
        cache._store = recorder
        assert cache.get("a") is not None
        assert cache.get("missing") is None
        assert recorder.mutex_held == [False, False]

    def test_get_completes_while_another_reader_holds_read_side(self):
        cache = DocumentCache()
        doc = _doc()
        cache.set("a", doc)
        result: list = []

        with cache._lock.read_locked():
            t = threading.Thread(target=lambda: result.append(cache.get("a")))
            t.start()
            t.join(timeout=5)
            assert not t.is_alive()
        assert result == [doc]
        assert cache.metrics().hits == 1
