"""
PDF Studio - Numeric Constants

Simple numeric constants with ZERO internal imports to avoid circular dependencies.
For application-level constants (strings, paths), use config.py.
"""

from typing import Final

# ============================================================================
# Size Constants
# ============================================================================

BYTES_PER_MB: Final[int] = 1024 * 1024
DEFAULT_MAX_FILE_MB: Final[int] = 50

# ============================================================================
# Rotation
# ============================================================================

VALID_ROTATIONS: Final[tuple[int, ...]] = (0, 90, 180, 270)
ROTATION_STEPS: Final[tuple[int, ...]] = (-90, 90)

# ============================================================================
# Overlay Defaults (PDF points, top-left origin)
# ============================================================================

DEFAULT_TEXT_SIZE: Final[float] = 24.0
MIN_TEXT_SIZE: Final[float] = 1.0
DEFAULT_TEXT_COLOR: Final[str] = "#000000"
OVERLAY_FONT: Final[str] = "Helvetica"
OVERLAY_FONT_ENCODING: Final[str] = "cp1252"

DEFAULT_IMAGE_WIDTH: Final[float] = 150.0
DEFAULT_IMAGE_HEIGHT: Final[float] = 100.0

DEFAULT_SIGNATURE_X: Final[float] = 50.0
DEFAULT_SIGNATURE_Y: Final[float] = 50.0
DEFAULT_SIGNATURE_WIDTH: Final[float] = 200.0
DEFAULT_SIGNATURE_HEIGHT: Final[float] = 80.0

# ============================================================================
# Merge
# ============================================================================

MIN_MERGE_SOURCES: Final[int] = 2
