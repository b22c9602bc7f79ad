"""
PDF Studio - Utils Package

Utility modules for the application.
"""

from pdfstudio.utils.config_manager import ConfigManager, get_config_manager
from pdfstudio.utils.i18n import _
from pdfstudio.utils.logger import logger

__all__ = [
    "logger",
    "_",
    "ConfigManager",
    "get_config_manager",
]
