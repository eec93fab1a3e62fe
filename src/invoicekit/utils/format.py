"""Human-readable formatting for sizes and ratios."""

from __future__ import annotations

_UNITS = ("KB", "MB", "GB", "TB")


def format_byte_count(num_bytes: int) -> str:
    """Format a byte count with binary (1024) multiples.

    ``0`` → ``"0 bytes"``, ``1`` → ``"1 byte"``, ``100_000`` → ``"97.7 KB"``.
    """
    if abs(num_bytes) < 1024:
        return f"{num_bytes} byte" if num_bytes == 1 else f"{num_bytes} bytes"

    value = float(num_bytes)
    unit = _UNITS[0]
    for unit in _UNITS:
        value /= 1024
        if abs(value) < 1024:
            break
    return f"{value:.1f} {unit}"


def format_percentage(ratio: float) -> str:
    """Format a 0..1 ratio as a percentage with one decimal: ``0.4`` → ``"40.0%"``."""
    return f"{ratio * 100:.1f}%"
