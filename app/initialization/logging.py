"""
Initialization - Logging Module.

Configures loguru sinks from settings.
"""

import sys

from loguru import logger


LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} [{level}] {message}"

# Configuration names -> loguru levels
LOG_LEVELS = {
    "error": "ERROR",
    "warn": "WARNING",
    "info": "INFO",
    "debug": "DEBUG",
}


def setup_logging(level: str = "info", log_file: str | None = None) -> None:
    """
    Configure logger.

    Args:
        level: One of error, warn, info, debug
        log_file: Optional path for a rotating file sink
    """
    loguru_level = LOG_LEVELS.get(level.lower(), "INFO")

    logger.remove()
    logger.add(sys.stderr, level=loguru_level, format=LOG_FORMAT, colorize=True)

    if log_file:
        logger.add(
            log_file,
            rotation="1 day",
            retention="7 days",
            level=loguru_level,
            format=LOG_FORMAT,
            encoding="utf-8",
        )

    logger.info("Starting Ethereum Payment Processor...")
