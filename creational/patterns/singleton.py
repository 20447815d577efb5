"""Thread-safe singleton registry.

This module provides an explicitly constructed registry that holds at most
one instance per resource type, created lazily with double-checked locking
so that racing first callers never construct twice.
"""

import logging
import threading
from typing import Any, Callable, Dict, List, Optional, Type, TypeVar

from ..config import get_settings
from ..exceptions import ConstructionError, DuplicateRegistrationError
from ..utils.timer_utils import Timer

logger = logging.getLogger(__name__)

T = TypeVar('T')

_EMPTY = object()


class _Slot:
    """Instance slot for one resource type."""

    __slots__ = ("constructor", "instance", "failure", "lock", "owner")

    def __init__(self, constructor: Callable[[], Any]):
        self.constructor = constructor
        self.instance: Any = _EMPTY
        # Constructor exception remembered by a poisoned slot
        self.failure: Optional[Exception] = None
        self.lock = threading.Lock()
        # Thread currently running the constructor
        self.owner: Optional[int] = None

    @property
    def filled(self) -> bool:
        return self.instance is not _EMPTY


class SingletonRegistry:
    """
    Registry guaranteeing a single shared instance per resource type.

    Implements double-checked locking per slot: a lock-free fast path once
    the slot is filled, and an exclusive lock around the check-and-construct
    sequence otherwise. Slots are never replaced or cleared once filled;
    the instances live as long as the registry.

    Usage:
        registry = SingletonRegistry()
        registry.register(ConnectionPool, lambda: ConnectionPool(size=4))

        # Creates on first call, shared afterwards
        pool = registry.get_instance(ConnectionPool)

    Note:
        Instances are shared. Callers must not assume exclusive ownership of
        the returned object.
    """

    def __init__(self, poison_on_failure: Optional[bool] = None):
        """
        Initialize an empty registry.

        Args:
            poison_on_failure: Remember the first constructor failure and
                raise a new ConstructionError chained to it on every later
                call instead of retrying.
                Defaults to CREATIONAL_SINGLETON_POISON_ON_FAILURE.
        """
        if poison_on_failure is None:
            poison_on_failure = get_settings().singleton_poison_on_failure
        self.poison_on_failure = poison_on_failure
        self._slots: Dict[Any, _Slot] = {}
        self._registry_lock = threading.Lock()

    def register(self, resource_type: Type[T], constructor: Optional[Callable[[], T]] = None) -> None:
        """
        Bind a constructor to a resource type.

        Args:
            resource_type: Key identifying the shared resource
            constructor: Zero-argument callable; defaults to resource_type itself

        Raises:
            DuplicateRegistrationError: If the type is already registered or
                its instance has already been created
        """
        with self._registry_lock:
            if resource_type in self._slots:
                raise DuplicateRegistrationError("singleton", _name(resource_type))
            self._slots[resource_type] = _Slot(constructor or resource_type)
        logger.debug(f"Registered singleton constructor for {_name(resource_type)}")

    def get_instance(self, resource_type: Type[T]) -> T:
        """
        Get the shared instance, constructing it on first call.

        Unregistered types are constructed by calling ``resource_type()``.

        Args:
            resource_type: Key identifying the shared resource

        Returns:
            The single shared instance

        Raises:
            ConstructionError: If the constructor raised. The slot stays empty
                and a later call retries, unless poison_on_failure is set.
        """
        slot = self._slots.get(resource_type)
        if slot is None:
            slot = self._get_or_create_slot(resource_type)

        # Fast path: a filled slot is never cleared, and the instance is
        # published only after the constructor returned
        instance = slot.instance
        if instance is not _EMPTY:
            return instance

        if slot.owner == threading.get_ident():
            raise ConstructionError(
                resource_type,
                reason="constructor re-entered get_instance() for the type it is building",
            )

        with slot.lock:
            # Double-check after acquiring lock
            if slot.filled:
                return slot.instance
            if slot.failure is not None:
                raise ConstructionError(resource_type, cause=slot.failure) from slot.failure

            slot.owner = threading.get_ident()
            try:
                with Timer() as timer:
                    instance = slot.constructor()
            except Exception as e:
                error = ConstructionError(resource_type, cause=e)
                logger.warning(f"Singleton construction failed: {error.message}")
                if self.poison_on_failure:
                    slot.failure = e
                raise error from e
            finally:
                slot.owner = None

            slot.instance = instance
            logger.info(
                f"Singleton {_name(resource_type)} constructed in {timer.elapsed_ms:.2f}ms"
            )
            return instance

    def is_initialized(self, resource_type: Any) -> bool:
        """Check whether the instance for a type has been constructed."""
        slot = self._slots.get(resource_type)
        return slot is not None and slot.filled

    def registered_types(self) -> List[Any]:
        """Get all resource types known to the registry."""
        with self._registry_lock:
            return list(self._slots)

    def _get_or_create_slot(self, resource_type: Any) -> _Slot:
        with self._registry_lock:
            slot = self._slots.get(resource_type)
            if slot is None:
                if not callable(resource_type):
                    raise ConstructionError(
                        resource_type,
                        reason="no constructor registered and the key is not callable",
                    )
                slot = _Slot(resource_type)
                self._slots[resource_type] = slot
            return slot

    def __contains__(self, resource_type: Any) -> bool:
        return resource_type in self._slots

    def __len__(self) -> int:
        return len(self._slots)

    def __repr__(self) -> str:
        initialized = sum(1 for slot in list(self._slots.values()) if slot.filled)
        return (
            f"SingletonRegistry(registered={len(self._slots)}, "
            f"initialized={initialized}, "
            f"poison_on_failure={self.poison_on_failure})"
        )


def _name(resource_type: Any) -> str:
    return getattr(resource_type, "__qualname__", None) or repr(resource_type)
