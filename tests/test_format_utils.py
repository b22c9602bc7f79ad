"""Tests for format_utils module."""

from pdfstudio.utils.format_utils import format_file_size, hex_to_rgb


class TestFormatFileSize:
    def test_zero_bytes(self):
        assert format_file_size(0) == "0 B"

    def test_bytes(self):
        assert format_file_size(500) == "500 B"

    def test_kilobytes(self):
        assert format_file_size(1024) == "1.00 KB"
        assert format_file_size(1536) == "1.50 KB"

    def test_megabytes(self):
        assert format_file_size(1024 * 1024) == "1.00 MB"
        assert format_file_size(15 * 1024 * 1024) == "15.0 MB"

    def test_large_values_no_decimals(self):
        assert format_file_size(200 * 1024 * 1024) == "200 MB"

    def test_negative_returns_zero(self):
        assert format_file_size(-1) == "0 B"


class TestHexToRgb:
    def test_black(self):
        assert hex_to_rgb("#000000") == (0.0, 0.0, 0.0)

    def test_white(self):
        assert hex_to_rgb("#ffffff") == (1.0, 1.0, 1.0)

    def test_without_hash_and_uppercase(self):
        assert hex_to_rgb("FF0000") == (1.0, 0.0, 0.0)

    def test_channel_scale(self):
        r, g, b = hex_to_rgb("#336699")
        assert abs(r - 0x33 / 255) < 1e-9
        assert abs(g - 0x66 / 255) < 1e-9
        assert abs(b - 0x99 / 255) < 1e-9

    def test_invalid_is_black(self):
        assert hex_to_rgb("red") == (0.0, 0.0, 0.0)
        assert hex_to_rgb("#fff") == (0.0, 0.0, 0.0)
        assert hex_to_rgb("") == (0.0, 0.0, 0.0)
