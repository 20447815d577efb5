"""Logging setup for programs that use the toolkit.

The library itself only creates module loggers; applications call
configure_logging() once at startup.
"""

import logging
import os
from typing import Optional

from dotenv import load_dotenv

from ..config import get_settings
from ..constants import LOG_FORMAT


def configure_logging(level: Optional[str] = None, load_env_file: bool = True) -> int:
    """Configure root logging for a consuming program.

    Args:
        level: Explicit level name. Falls back to LOG_LEVEL, then to
            CREATIONAL_LOG_LEVEL via settings.
        load_env_file: Load a .env file before reading the environment.

    Returns:
        The numeric log level that was applied.
    """
    if load_env_file:
        load_dotenv()

    level_name = (level or os.getenv("LOG_LEVEL") or get_settings().log_level).upper()
    numeric_level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(level=numeric_level, format=LOG_FORMAT)
    logging.getLogger("creational").setLevel(numeric_level)
    return numeric_level
