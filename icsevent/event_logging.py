"""
Central logging configuration for icsevent.

Keeps the conversion modules quiet by default while allowing debug output to be
switched on from code, from settings or from the environment when diagnosing a
calendar feed.
"""

import logging
import os
from typing import Optional

PACKAGE_LOGGER = "icsevent"

_LEVEL_NAMES = ("DEBUG", "INFO", "WARNING", "ERROR")


def configure_logging(
    debug_mode: bool = False,
    force_debug: Optional[bool] = None,
    level: Optional[str] = None,
) -> None:
    """
    Configure logging levels for icsevent.

    Args:
        debug_mode: Whether to enable debug logging for icsevent modules
        force_debug: Override debug mode setting (None to use env var detection)
        level: Level name for icsevent and the root logger when debug is off,
            typically ``ConversionSettings.log_level``

    Environment Variables:
        ICSEVENT_DEBUG: Set to '1', 'true', 'yes' to force debug logging
        ICSEVENT_LOG_LEVEL: Override root log level (DEBUG, INFO, WARNING, ERROR)
    """
    env_debug = os.getenv("ICSEVENT_DEBUG", "").lower() in ("1", "true", "yes")
    env_log_level = os.getenv("ICSEVENT_LOG_LEVEL", "").upper()

    if force_debug is not None:
        final_debug = force_debug
    elif env_debug:
        final_debug = True
    else:
        final_debug = debug_mode

    base_level = logging.INFO
    if level is not None and level.upper() in _LEVEL_NAMES:
        base_level = getattr(logging, level.upper())

    package_level = logging.DEBUG if final_debug else base_level
    root_level = package_level
    if env_log_level in _LEVEL_NAMES:
        root_level = getattr(logging, env_log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(root_level)

    # Only add a handler if none exist so host applications keep their own setup
    if not root_logger.handlers:
        handler = logging.StreamHandler()
        handler.setLevel(root_level)
        handler.setFormatter(
            logging.Formatter("[%(asctime)s] %(levelname)s - %(name)s - %(message)s")
        )
        root_logger.addHandler(handler)

    # Submodule loggers inherit from the package logger
    logging.getLogger(PACKAGE_LOGGER).setLevel(package_level)
    logging.getLogger("icalendar").setLevel(logging.WARNING)

    if final_debug:
        root_logger.info("Debug logging enabled for icsevent modules")


def get_logging_status() -> dict[str, str]:
    """
    Get current logging configuration status.

    Returns:
        Dictionary mapping logger names to their effective levels
    """
    status = {"root": logging.getLevelName(logging.getLogger().level)}
    for logger_name in [PACKAGE_LOGGER, "icsevent.event_builder", "icalendar"]:
        status[logger_name] = logging.getLevelName(
            logging.getLogger(logger_name).getEffectiveLevel()
        )
    return status
