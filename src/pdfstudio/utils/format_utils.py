"""
PDF Studio - Format Utilities Module

Shared helpers for formatting sizes and parsing colour values.
"""

import re

_HEX_COLOR_RE = re.compile(r"^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$", re.IGNORECASE)


def format_file_size(size_bytes: int) -> str:
    """Format file size in human-readable format.

    Args:
        size_bytes: Size in bytes

    Returns:
        Formatted size string (e.g., "1.5 MB")
    """
    if size_bytes <= 0:
        return "0 B"

    units = ["B", "KB", "MB", "GB", "TB"]

    size = float(size_bytes)
    unit_index = 0

    while size >= 1024 and unit_index < len(units) - 1:
        size /= 1024
        unit_index += 1

    if unit_index == 0:  # Bytes - no decimals
        return f"{int(size)} {units[unit_index]}"
    elif size >= 100:
        return f"{int(size)} {units[unit_index]}"
    elif size >= 10:
        return f"{size:.1f} {units[unit_index]}"
    else:
        return f"{size:.2f} {units[unit_index]}"


def hex_to_rgb(value: str) -> tuple[float, float, float]:
    """Convert a ``#rrggbb`` colour to an RGB triple in the 0-1 range.

    Anything that is not a six-digit hex colour maps to black.
    """
    match = _HEX_COLOR_RE.match(value.strip()) if value else None
    if not match:
        return (0.0, 0.0, 0.0)
    r, g, b = (int(part, 16) / 255 for part in match.groups())
    return (r, g, b)
