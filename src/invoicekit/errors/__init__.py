"""Error handling — exceptions that cross the package boundary."""

from invoicekit.errors.exceptions import (
    ConfigError,
    InvoiceKitError,
    RenderError,
)

__all__ = [
    "InvoiceKitError",
    "ConfigError",
    "RenderError",
]
