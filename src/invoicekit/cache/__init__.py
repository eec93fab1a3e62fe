"""Cache subsystem — bounded in-memory LRU cache of rendered documents."""

from invoicekit.cache.document_cache import DocumentCache
from invoicekit.cache.entry import CacheEntry, CacheStats
from invoicekit.cache.estimator import estimate_document_size, is_oversized

__all__ = [
    "DocumentCache",
    "CacheEntry",
    "CacheStats",
    "estimate_document_size",
    "is_oversized",
]
