#!/usr/bin/env python3
"""
PDF Studio - Configuration Module

Application-level constants: names, output file naming and log format.
Numeric defaults live in constants.py; user settings in ConfigManager.
"""

from typing import Final

from pdfstudio.utils.i18n import _

# ============================================================================
# Application Constants
# ============================================================================

APP_NAME: Final[str] = "PDF Studio"
APP_VERSION: Final[str] = "3.0.0"
APP_DESCRIPTION: Final[str] = _("Reorder, rotate, merge, split and annotate PDF documents")


# ============================================================================
# Output Names
# ============================================================================

SPLIT_NAME_TEMPLATE: Final[str] = "pages_{start}-{end}.pdf"


# ============================================================================
# Logging Configuration
# ============================================================================

LOG_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT: Final[str] = "%H:%M:%S"
