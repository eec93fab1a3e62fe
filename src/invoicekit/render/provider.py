"""Get-or-render façade over the document cache."""

from __future__ import annotations

import logging
from collections.abc import Hashable
from typing import Any, Protocol

from invoicekit.cache.document_cache import DocumentCache
from invoicekit.errors.exceptions import RenderError
from invoicekit.types import PagedDocument

logger = logging.getLogger(__name__)


class DocumentRenderer(Protocol):
    """Turns an invoice snapshot into a rendered document.

    Implementations wrap whatever engine produces the PDF; the cache only
    needs the result's page count and first-page size.
    """

    def render(self, invoice_id: Hashable, invoice: Any) -> PagedDocument: ...


class DocumentProvider:
    """Serves invoice documents from the cache, rendering on a miss.

    The cache cannot tell when an invoice changed: call ``invalidate`` after
    an edit or delete, or ``refresh`` to re-render immediately.
    """

    def __init__(self, cache: DocumentCache, renderer: DocumentRenderer) -> None:
        self._cache = cache
        self._renderer = renderer

    @property
    def cache(self) -> DocumentCache:
        return self._cache

    def get_document(self, invoice_id: Hashable, invoice: Any) -> PagedDocument:
        """Return the cached document for ``invoice_id``, rendering it if absent."""
        document = self._cache.get(invoice_id)
        if document is not None:
            return document
        return self._render_and_store(invoice_id, invoice)

    def invalidate(self, invoice_id: Hashable) -> None:
        """Drop any cached document for ``invoice_id``."""
        self._cache.remove(invoice_id)

    def refresh(self, invoice_id: Hashable, invoice: Any) -> PagedDocument:
        """Discard the cached document and render a fresh one."""
        self._cache.remove(invoice_id)
        return self._render_and_store(invoice_id, invoice)

    def _render_and_store(self, invoice_id: Hashable, invoice: Any) -> PagedDocument:
        logger.debug("Rendering document for invoice %s", invoice_id)
        try:
            document = self._renderer.render(invoice_id, invoice)
        except Exception as e:
            raise RenderError(
                f"Failed to render invoice {invoice_id}: {e}",
                invoice_id=invoice_id,
                original=e,
            ) from e
        self._cache.set(invoice_id, document)
        return document
