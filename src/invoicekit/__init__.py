"""invoicekit — rendered invoice document caching."""

from invoicekit.cache.document_cache import DocumentCache
from invoicekit.config.schema import CacheConfig
from invoicekit.core import InvoiceKit
from invoicekit.render.provider import DocumentProvider, DocumentRenderer
from invoicekit.types import PageSize, RenderedDocument

__all__ = [
    "CacheConfig",
    "DocumentCache",
    "DocumentProvider",
    "DocumentRenderer",
    "InvoiceKit",
    "PageSize",
    "RenderedDocument",
]
