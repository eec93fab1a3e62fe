"""Top-level entry point: InvoiceKit application context."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from invoicekit.cache.document_cache import DocumentCache
from invoicekit.config.hierarchy import load_config_hierarchy
from invoicekit.config.schema import CacheConfig
from invoicekit.errors.exceptions import ConfigError
from invoicekit.render.provider import DocumentProvider, DocumentRenderer

logger = logging.getLogger(__name__)


class InvoiceKit:
    """Owns the process-wide document cache.

    Build one at application startup and pass it (or its ``cache``) to the
    components that render or display invoices. Either hand it a ready
    ``cache_config`` or let it resolve one from ``config_path`` and
    ``overrides``; giving both raises ConfigError.
    """

    def __init__(
        self,
        cache_config: CacheConfig | None = None,
        config_path: str | Path | None = None,
        **overrides: Any,
    ) -> None:
        if cache_config is not None and (
            config_path is not None or any(v is not None for v in overrides.values())
        ):
            raise ConfigError("Pass either cache_config or config_path/overrides, not both")
        if cache_config is None:
            self._settings = load_config_hierarchy(config_path=config_path, **overrides)
            cache_config = CacheConfig.from_mapping(self._settings)
        else:
            self._settings = {}
        self._cache = DocumentCache(cache_config)
        logger.info(
            "Document cache ready: %d bytes, %d entries max",
            cache_config.max_total_size_bytes,
            cache_config.max_entry_count,
        )

    @property
    def cache(self) -> DocumentCache:
        return self._cache

    @property
    def settings(self) -> dict[str, Any]:
        """Resolved flat configuration (empty when built from a CacheConfig)."""
        return dict(self._settings)

    def provider(self, renderer: DocumentRenderer) -> DocumentProvider:
        """Return a get-or-render provider bound to this kit's cache."""
        return DocumentProvider(self._cache, renderer)
