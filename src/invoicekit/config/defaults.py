"""Package-level default configuration values."""

from __future__ import annotations

from typing import Any

# Default cache capacity
DEFAULT_CACHE_MAX_SIZE_BYTES = 50_000_000
DEFAULT_CACHE_MAX_ENTRIES = 20

# Default eviction policy
DEFAULT_CACHE_MIN_EVICTION_BATCH = 5
DEFAULT_CACHE_EVICTION_SIZE_FRACTION = 0.25

# Default size estimate policy
DEFAULT_BYTES_PER_PAGE = 50_000
DEFAULT_OVERSIZED_PAGE_AREA = 880_000.0  # 800 x 1100 points
DEFAULT_OVERSIZED_MULTIPLIER = 1.5

# Log level
DEFAULT_LOG_LEVEL = "WARNING"


def get_defaults() -> dict[str, Any]:
    """Return all defaults as a flat dictionary for merging."""
    return {
        "cache_max_size_bytes": DEFAULT_CACHE_MAX_SIZE_BYTES,
        "cache_max_entries": DEFAULT_CACHE_MAX_ENTRIES,
        "cache_min_eviction_batch": DEFAULT_CACHE_MIN_EVICTION_BATCH,
        "cache_eviction_size_fraction": DEFAULT_CACHE_EVICTION_SIZE_FRACTION,
        "bytes_per_page": DEFAULT_BYTES_PER_PAGE,
        "oversized_page_area": DEFAULT_OVERSIZED_PAGE_AREA,
        "oversized_multiplier": DEFAULT_OVERSIZED_MULTIPLIER,
        "log_level": DEFAULT_LOG_LEVEL,
    }
