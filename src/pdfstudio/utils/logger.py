"""
PDF Studio - Logger Module

This module sets up logging for the application.
"""

import logging

# Default values if config is not available
DEFAULT_LOG_LEVEL = logging.INFO
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_LOGGER_NAME = "PdfStudio"


def setup_logger(
    log_level: int | None = None,
    log_format: str | None = None,
    logger_name: str | None = None,
) -> logging.Logger:
    """Set up and configure the application logger.

    Args:
        log_level: Logging level to use (default: INFO)
        log_format: Logging format string (default: standard format)
        logger_name: Name for the logger (default: PdfStudio)

    Returns:
        A configured Logger instance
    """
    if log_level is None:
        log_level = DEFAULT_LOG_LEVEL
    if log_format is None:
        log_format = DEFAULT_LOG_FORMAT
    if logger_name is None:
        logger_name = DEFAULT_LOGGER_NAME

    # Configure basic logging settings (no-op if the host already did)
    logging.basicConfig(level=log_level, format=log_format)

    return logging.getLogger(logger_name)


# Create a singleton logger instance
logger = setup_logger()
