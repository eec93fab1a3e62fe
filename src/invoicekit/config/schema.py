"""Pydantic models for cache configuration."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from invoicekit.config import defaults
from invoicekit.errors.exceptions import ConfigError


class SizeEstimatePolicy(BaseModel):
    """Policy for approximating a rendered document's footprint.

    Not a measurement: a fixed per-page budget, scaled up when the first
    page is larger than ``oversized_page_area`` square points.
    """

    model_config = ConfigDict(frozen=True)

    bytes_per_page: int = Field(default=defaults.DEFAULT_BYTES_PER_PAGE, ge=0)
    oversized_page_area: float = Field(default=defaults.DEFAULT_OVERSIZED_PAGE_AREA, ge=0)
    oversized_multiplier: float = Field(default=defaults.DEFAULT_OVERSIZED_MULTIPLIER, ge=1.0)


class CacheConfig(BaseModel):
    """Capacity and eviction settings, fixed for the lifetime of a cache."""

    model_config = ConfigDict(frozen=True)

    max_total_size_bytes: int = Field(default=defaults.DEFAULT_CACHE_MAX_SIZE_BYTES, gt=0)
    max_entry_count: int = Field(default=defaults.DEFAULT_CACHE_MAX_ENTRIES, gt=0)
    min_eviction_batch: int = Field(default=defaults.DEFAULT_CACHE_MIN_EVICTION_BATCH, ge=1)
    eviction_size_fraction: float = Field(
        default=defaults.DEFAULT_CACHE_EVICTION_SIZE_FRACTION, ge=0.0, le=1.0
    )
    size_policy: SizeEstimatePolicy = Field(default_factory=SizeEstimatePolicy)

    @property
    def eviction_size_target(self) -> int:
        """Bytes a size-triggered eviction pass must free before stopping."""
        return int(self.max_total_size_bytes * self.eviction_size_fraction)

    @classmethod
    def from_mapping(cls, config: dict[str, Any]) -> CacheConfig:
        """Build from a flat config dict as returned by ``load_config_hierarchy``.

        Missing keys fall back to package defaults.
        """
        fields = {
            "max_total_size_bytes": config.get("cache_max_size_bytes"),
            "max_entry_count": config.get("cache_max_entries"),
            "min_eviction_batch": config.get("cache_min_eviction_batch"),
            "eviction_size_fraction": config.get("cache_eviction_size_fraction"),
        }
        policy_fields = {
            "bytes_per_page": config.get("bytes_per_page"),
            "oversized_page_area": config.get("oversized_page_area"),
            "oversized_multiplier": config.get("oversized_multiplier"),
        }
        try:
            policy = SizeEstimatePolicy(
                **{k: v for k, v in policy_fields.items() if v is not None}
            )
            return cls(
                size_policy=policy,
                **{k: v for k, v in fields.items() if v is not None},
            )
        except ValidationError as e:
            raise ConfigError(f"Invalid cache configuration: {e}", original=e) from e
