"""Concurrency — locking primitives shared by the cache."""

from invoicekit.concurrency.rwlock import ReadWriteLock

__all__ = ["ReadWriteLock"]
