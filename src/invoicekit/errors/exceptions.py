"""Custom exception hierarchy for invoicekit."""

from __future__ import annotations

from typing import Any


class InvoiceKitError(Exception):
    """Base exception for all invoicekit errors."""

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        super().__init__(message)
        self.message = message


class ConfigError(InvoiceKitError):
    """Configuration could not be loaded or failed validation.

    Examples: negative size ceiling, eviction fraction above 1, unreadable YAML.
    """

    def __init__(
        self,
        message: str = "",
        key: str | None = None,
        original: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.key = key
        self.original = original


class RenderError(InvoiceKitError):
    """The rendering collaborator failed to produce a document.

    Nothing is cached for the invoice; callers may retry or surface the error.
    """

    def __init__(
        self,
        message: str = "",
        invoice_id: Any = None,
        original: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.invoice_id = invoice_id
        self.original = original
