"""Rendering seam — get-or-render access to invoice documents."""

from invoicekit.render.provider import DocumentProvider, DocumentRenderer

__all__ = ["DocumentProvider", "DocumentRenderer"]
