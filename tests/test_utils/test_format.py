"""Tests for human-readable formatting."""

import pytest

from invoicekit.utils.format import format_byte_count, format_percentage


class TestFormatByteCount:
    @pytest.mark.parametrize(
        "num_bytes,expected",
        [
            (0, "0 bytes"),
            (1, "1 byte"),
            (1023, "1023 bytes"),
            (1024, "1.0 KB"),
            (50_000, "48.8 KB"),
            (100_000, "97.7 KB"),
            (1024**2, "1.0 MB"),
            (50_000_000, "47.7 MB"),
            (1024**3, "1.0 GB"),
        ],
    )
    def test_format(self, num_bytes, expected):
        assert format_byte_count(num_bytes) == expected


class TestFormatPercentage:
    def test_zero(self):
        assert format_percentage(0.0) == "0.0%"

    def test_fraction(self):
        assert format_percentage(0.4) == "40.0%"

    def test_rounding(self):
        assert format_percentage(2 / 3) == "66.7%"

    def test_full(self):
        assert format_percentage(1.0) == "100.0%"
