"""
Selection factory.

Maps a runtime discriminator (a type tag, enum member, config string...)
to a creator function, so that callers depend only on the capability set
shared by all products and never on the concrete product classes.
"""

import logging
from typing import Any, Callable, Dict, Generic, Hashable, List, Optional, Type, TypeVar

from ..config import get_settings
from ..exceptions import CapabilityMismatchError, DuplicateRegistrationError, NotFoundError

logger = logging.getLogger(__name__)

P = TypeVar('P')

Creator = Callable[..., P]


class SelectionFactory(Generic[P]):
    """
    Dispatch table from discriminator key to creator function.

    If a capability type is given (an ABC or a ``@runtime_checkable``
    Protocol), every product is checked with ``isinstance`` before it is
    returned.

    Example:
        >>> transports = SelectionFactory(Transport, name="transport")
        >>> transports.register("road", Truck)
        >>> @transports.register("sea")
        ... def make_ship(capacity: int = 1000) -> Ship:
        ...     return Ship(capacity)
        >>> transports.create("sea", capacity=50).deliver("grain")
    """

    def __init__(
        self,
        capability: Optional[Type[Any]] = None,
        allow_overwrite: Optional[bool] = None,
        name: Optional[str] = None,
    ):
        """
        Initialize an empty factory.

        Args:
            capability: Type every product must be an instance of
            allow_overwrite: Let register() replace an existing key.
                Defaults to CREATIONAL_FACTORY_ALLOW_OVERWRITE.
            name: Label used in error messages and logs
        """
        if allow_overwrite is None:
            allow_overwrite = get_settings().factory_allow_overwrite
        self.capability = capability
        self.allow_overwrite = allow_overwrite
        self.name = name or (f"{capability.__name__} key" if capability is not None else "factory key")
        self._creators: Dict[Hashable, Creator] = {}

    def register(self, key: Hashable, creator: Optional[Creator] = None) -> Any:
        """
        Associate a key with a creator.

        Can be called directly (``register("road", Truck)``) or used as a
        decorator (``@register("road")``).

        Raises:
            DuplicateRegistrationError: Key in use and overwrite is disabled
        """
        if creator is None:
            def decorator(func: Creator) -> Creator:
                self._bind(key, func)
                return func
            return decorator

        self._bind(key, creator)
        return creator

    def _bind(self, key: Hashable, creator: Creator) -> None:
        if not callable(creator):
            raise TypeError(f"Creator for '{key}' must be callable")
        if key in self._creators and not self.allow_overwrite:
            raise DuplicateRegistrationError(self.name, key)
        self._creators[key] = creator
        logger.debug(f"Registered creator for {self.name} '{key}'")

    def unregister(self, key: Hashable) -> None:
        """
        Remove a key.

        Raises:
            NotFoundError: Key is not registered
        """
        if key not in self._creators:
            raise NotFoundError(self.name, key, self._creators)
        del self._creators[key]

    def create(self, key: Hashable, *args: Any, **kwargs: Any) -> P:
        """
        Create a product for a key.

        Args:
            key: Registered discriminator
            *args, **kwargs: Passed through to the creator

        Returns:
            The creator's product

        Raises:
            NotFoundError: Key is not registered
            CapabilityMismatchError: Product lacks the required capability
        """
        creator = self._creators.get(key)
        if creator is None:
            raise NotFoundError(self.name, key, self._creators)

        product = creator(*args, **kwargs)
        if self.capability is not None and not isinstance(product, self.capability):
            raise CapabilityMismatchError(key, self.capability, product)
        return product

    def keys(self) -> List[Hashable]:
        """Registered keys in registration order."""
        return list(self._creators)

    def __contains__(self, key: object) -> bool:
        return key in self._creators

    def __len__(self) -> int:
        return len(self._creators)

    def __repr__(self) -> str:
        capability = self.capability.__name__ if self.capability is not None else None
        return (
            f"SelectionFactory(capability={capability}, keys={self.keys()}, "
            f"allow_overwrite={self.allow_overwrite})"
        )
