"""In-memory LRU cache of rendered invoice documents."""

from __future__ import annotations

import itertools
import logging
import threading
from collections.abc import Hashable
from typing import Any

from invoicekit.cache.entry import CacheEntry, CacheStats
from invoicekit.cache.estimator import estimate_document_size
from invoicekit.concurrency.rwlock import ReadWriteLock
from invoicekit.config.schema import CacheConfig

logger = logging.getLogger(__name__)


class DocumentCache:
    """Size- and count-bounded LRU cache with batched eviction.

    Keys are invoice identifiers; values are immutable rendered documents,
    shared by reference. ``get`` calls run concurrently under the read side
    of a readers–writer lock (a short mutex serializes the recency and
    hit/miss bookkeeping); ``set``, ``remove`` and ``clear`` are exclusive.

    A single document whose estimate exceeds ``max_total_size_bytes`` is
    still admitted after everything else has been evicted.
    """

    def __init__(self, config: CacheConfig | None = None) -> None:
        self._config = config or CacheConfig()
        self._store: dict[Hashable, CacheEntry] = {}
        self._current_size_bytes = 0
        self._clock = itertools.count(1)

        self._lock = ReadWriteLock()
        self._access_lock = threading.Lock()

        # Stats
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    @property
    def config(self) -> CacheConfig:
        return self._config

    def get(self, key: Hashable) -> Any | None:
        """Return the cached document for ``key``, or ``None`` on a miss."""
        with self._lock.read_locked():
            entry = self._store.get(key)
            with self._access_lock:
                if entry is None:
                    self._misses += 1
                    return None
                entry.last_accessed = next(self._clock)
                self._hits += 1
            return entry.document

    def set(self, key: Hashable, document: Any) -> None:
        """Insert or replace the document for ``key``, evicting if needed."""
        size = estimate_document_size(document, self._config.size_policy)

        with self._lock.write_locked():
            # Replacing: drop the old entry so its size and slot are freed
            self._remove(key)

            if self._should_evict(size):
                self._evict_lru(size)

            if size > self._config.max_total_size_bytes:
                logger.warning(
                    "Document for %s (%d bytes) exceeds cache ceiling of %d bytes; admitting anyway",
                    key,
                    size,
                    self._config.max_total_size_bytes,
                )

            self._store[key] = CacheEntry(
                key=key,
                document=document,
                size_bytes=size,
                last_accessed=next(self._clock),
            )
            self._current_size_bytes += size

    def remove(self, key: Hashable) -> None:
        """Invalidate ``key``. Absent keys are ignored."""
        with self._lock.write_locked():
            self._remove(key)

    def clear(self) -> None:
        """Drop every entry and reset all counters."""
        with self._lock.write_locked():
            count = len(self._store)
            self._store.clear()
            self._current_size_bytes = 0
            self._hits = 0
            self._misses = 0
            self._evictions = 0
        logger.debug("Cache cleared (%d entries dropped)", count)

    def stats(self) -> tuple[str, int, str]:
        """Return (human-readable size, entry count, hit-rate percentage)."""
        return self.metrics().summary()

    def metrics(self) -> CacheStats:
        """Return a full statistics snapshot."""
        with self._lock.read_locked(), self._access_lock:
            return CacheStats(
                entries=len(self._store),
                size_bytes=self._current_size_bytes,
                hits=self._hits,
                misses=self._misses,
                evictions=self._evictions,
                max_size_bytes=self._config.max_total_size_bytes,
                max_entries=self._config.max_entry_count,
            )

    @property
    def total_size_bytes(self) -> int:
        with self._lock.read_locked():
            return self._current_size_bytes

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._store)

    def __contains__(self, key: object) -> bool:
        # Membership only; does not touch recency or hit/miss counters
        with self._lock.read_locked():
            return key in self._store

    def _remove(self, key: Hashable) -> CacheEntry | None:
        entry = self._store.pop(key, None)
        if entry is not None:
            self._current_size_bytes -= entry.size_bytes
        return entry

    def _size_pressure(self, new_size: int) -> bool:
        return self._current_size_bytes + new_size > self._config.max_total_size_bytes

    def _count_pressure(self) -> bool:
        return len(self._store) >= self._config.max_entry_count

    def _should_evict(self, new_size: int) -> bool:
        return self._size_pressure(new_size) or self._count_pressure()

    def _evict_lru(self, new_size: int) -> None:
        """Evict oldest entries in one batch to make room for ``new_size``.

        Stops once ``min_eviction_batch`` entries are gone and, if the pass was
        triggered by size, ``eviction_size_target`` bytes have been freed, and
        the incoming entry fits within both ceilings.
        """
        size_target = self._config.eviction_size_target if self._size_pressure(new_size) else 0
        candidates = sorted(self._store.values(), key=lambda e: e.last_accessed)

        entries_evicted = 0
        size_evicted = 0
        for entry in candidates:
            batch_done = (
                entries_evicted >= self._config.min_eviction_batch
                and size_evicted >= size_target
            )
            if batch_done and not self._should_evict(new_size):
                break
            self._remove(entry.key)
            entries_evicted += 1
            size_evicted += entry.size_bytes

        self._evictions += entries_evicted
        logger.debug(
            "Evicted %d entries (%d bytes); %d entries (%d bytes) remain",
            entries_evicted,
            size_evicted,
            len(self._store),
            self._current_size_bytes,
        )
