"""Cache entry and statistics models."""

from __future__ import annotations

from collections.abc import Hashable
from typing import Any

from pydantic import BaseModel, ConfigDict

from invoicekit.utils.format import format_byte_count, format_percentage


class CacheEntry(BaseModel):
    """A cached rendered document."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    key: Hashable
    document: Any
    size_bytes: int
    last_accessed: int  # logical clock tick, not wall time


class CacheStats(BaseModel):
    """Point-in-time cache statistics."""

    entries: int = 0
    size_bytes: int = 0
    hits: int = 0
    misses: int = 0
    evictions: int = 0
    max_size_bytes: int = 0
    max_entries: int = 0

    @property
    def lookups(self) -> int:
        return self.hits + self.misses

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0

    def summary(self) -> tuple[str, int, str]:
        """(human-readable size, entry count, hit-rate percentage)."""
        return (
            format_byte_count(self.size_bytes),
            self.entries,
            format_percentage(self.hit_rate),
        )
