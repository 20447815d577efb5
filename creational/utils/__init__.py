"""Utility modules for the creational toolkit."""

from .logging_utils import configure_logging
from .timer_utils import elapsed_ms, Timer

__all__ = [
    "configure_logging",
    "elapsed_ms",
    "Timer",
]
