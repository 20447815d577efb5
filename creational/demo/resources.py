"""Singleton example: a process-wide connection pool."""

import itertools
import logging
import threading
from typing import List

from ..patterns.singleton import SingletonRegistry

logger = logging.getLogger(__name__)


class ConnectionPool:
    """
    Stand-in for an expensive shared resource.

    Every construction is counted so callers can observe how many pools
    were ever built.
    """

    _constructed = itertools.count(1)

    def __init__(self, size: int = 4, dsn: str = "memory://"):
        if size <= 0:
            raise ValueError(f"pool size must be positive, got {size}")
        self.size = size
        self.dsn = dsn
        self.pool_id = next(self._constructed)
        self._lock = threading.Lock()
        self._leased: List[int] = []
        logger.info(f"ConnectionPool #{self.pool_id} opened for {dsn} (size={size})")

    def acquire(self) -> int:
        """Lease a connection slot; raises RuntimeError when exhausted."""
        with self._lock:
            for slot in range(self.size):
                if slot not in self._leased:
                    self._leased.append(slot)
                    return slot
            raise RuntimeError(f"ConnectionPool #{self.pool_id} exhausted")

    def release(self, slot: int) -> None:
        with self._lock:
            self._leased.remove(slot)

    @property
    def in_use(self) -> int:
        return len(self._leased)


def build_resource_registry(size: int = 4, dsn: str = "memory://", **kwargs) -> SingletonRegistry:
    """Registry with a ConnectionPool constructor bound to the given settings."""
    registry = SingletonRegistry(**kwargs)
    registry.register(ConnectionPool, lambda: ConnectionPool(size=size, dsn=dsn))
    return registry
