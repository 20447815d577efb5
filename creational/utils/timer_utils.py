"""Timing helpers for measuring construction and copy costs."""

import time
from typing import Optional


def elapsed_ms(start_time: float) -> float:
    """
    Calculate elapsed time in milliseconds since start_time.

    Args:
        start_time: Start time from time.perf_counter()

    Returns:
        Elapsed time in milliseconds
    """
    return (time.perf_counter() - start_time) * 1000


class Timer:
    """
    Context manager for timing code blocks.

    Usage:
        >>> with Timer() as t:
        ...     instance = expensive_constructor()
        >>> logger.info(f"Built in {t.elapsed_ms:.2f}ms")
    """

    def __init__(self):
        self.start_time: Optional[float] = None
        self._elapsed_ms: Optional[float] = None

    def __enter__(self) -> "Timer":
        self.start_time = time.perf_counter()
        self._elapsed_ms = None
        return self

    def __exit__(self, *args) -> None:
        if self.start_time is not None:
            self._elapsed_ms = elapsed_ms(self.start_time)

    @property
    def elapsed_ms(self) -> float:
        """Elapsed milliseconds; still ticking while the block is running."""
        if self._elapsed_ms is not None:
            return self._elapsed_ms
        if self.start_time is None:
            return 0.0
        return elapsed_ms(self.start_time)

    def __repr__(self) -> str:
        return f"Timer(elapsed_ms={self.elapsed_ms:.2f})"
