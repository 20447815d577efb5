"""
Prototype registry.

Stores named template objects and hands out copies on demand. The registry
owns its templates: register() keeps a deep copy of the value it is given,
so later changes to the caller's object never leak into future clones.
"""

import copy
import logging
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Union

from ..config import get_settings
from ..exceptions import DuplicateRegistrationError, NotFoundError

logger = logging.getLogger(__name__)

Copier = Callable[[Any], Any]


class CloneMode(str, Enum):
    """How much of a template is copied by clone()."""
    DEEP = "deep"  # every owned mutable component is copied recursively
    SHALLOW = "shallow"  # top level only; nested data is shared by reference


class _PrototypeEntry:
    __slots__ = ("template", "shared", "deep_copier", "shallow_copier")

    def __init__(self, template: Any, shared: Any, deep_copier: Copier, shallow_copier: Copier):
        self.template = template
        # Source of shallow clones, kept apart from the pristine template
        self.shared = shared
        self.deep_copier = deep_copier
        self.shallow_copier = shallow_copier


class PrototypeRegistry:
    """
    Registry of named prototypes.

    Each entry may carry its own deep and shallow copy functions; when
    omitted, ``copy.deepcopy`` and ``copy.copy`` are used, which honour a
    type's ``__deepcopy__`` / ``__copy__`` hooks.

    Each entry keeps two deep copies of the registered value: a pristine
    template used for deep clones, and a separate shared copy used for
    shallow clones. Shallow clones alias nested mutable data with each
    other (through the shared copy) but never with the pristine template,
    so deep clones always match the value as registered. Types registered
    for shallow cloning should document which of their attributes end up
    shared.

    Not thread-safe: concurrent register()/unregister() calls need external
    locking. clone() on a stable registry is safe from any thread as long
    as the copiers themselves are.

    Example:
        >>> registry = PrototypeRegistry()
        >>> registry.register("circle", Circle(radius=10))
        >>> a = registry.clone("circle")
        >>> b = registry.clone("circle")
        >>> a.radius = 20
        >>> b.radius
        10
    """

    def __init__(
        self,
        allow_overwrite: Optional[bool] = None,
        default_mode: Optional[Union[CloneMode, str]] = None,
    ):
        """
        Initialize an empty registry.

        Args:
            allow_overwrite: Let register() replace an existing name.
                Defaults to CREATIONAL_PROTOTYPE_ALLOW_OVERWRITE.
            default_mode: Clone mode used when clone() gets none.
                Defaults to CREATIONAL_DEFAULT_CLONE_MODE.
        """
        settings = get_settings()
        self.allow_overwrite = (
            settings.prototype_allow_overwrite if allow_overwrite is None else allow_overwrite
        )
        self.default_mode = CloneMode(default_mode or settings.default_clone_mode)
        self._entries: Dict[str, _PrototypeEntry] = {}

    def register(
        self,
        name: str,
        template: Any,
        deep_copier: Optional[Copier] = None,
        shallow_copier: Optional[Copier] = None,
    ) -> None:
        """
        Store a named template.

        Args:
            name: Unique prototype name
            template: Value to copy on clone(); the registry stores its own
                deep copy of it
            deep_copier: Per-type deep copy function
            shallow_copier: Per-type shallow copy function

        Raises:
            DuplicateRegistrationError: Name in use and overwrite is disabled
        """
        if name in self._entries and not self.allow_overwrite:
            raise DuplicateRegistrationError("prototype", name)

        deep_copier = deep_copier or copy.deepcopy
        shallow_copier = shallow_copier or copy.copy
        replaced = name in self._entries
        self._entries[name] = _PrototypeEntry(
            deep_copier(template), deep_copier(template), deep_copier, shallow_copier
        )

        if replaced:
            logger.info(f"Prototype '{name}' overwritten")
        else:
            logger.debug(f"Prototype '{name}' registered ({type(template).__name__})")

    def unregister(self, name: str) -> None:
        """
        Remove a named template.

        Raises:
            NotFoundError: Name is not registered
        """
        if name not in self._entries:
            raise NotFoundError("prototype", name, self._entries)
        del self._entries[name]

    def clone(self, name: str, mode: Optional[Union[CloneMode, str]] = None) -> Any:
        """
        Produce a copy of a named template.

        Args:
            name: Registered prototype name
            mode: CloneMode.DEEP or CloneMode.SHALLOW (default: registry default)

        Returns:
            A new value structurally equal to the template

        Raises:
            NotFoundError: Name is not registered
        """
        entry = self._entries.get(name)
        if entry is None:
            raise NotFoundError("prototype", name, self._entries)

        mode = CloneMode(mode) if mode is not None else self.default_mode
        if mode is CloneMode.SHALLOW:
            return entry.shallow_copier(entry.shared)
        return entry.deep_copier(entry.template)

    def names(self) -> List[str]:
        """Registered prototype names in registration order."""
        return list(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return (
            f"PrototypeRegistry(prototypes={self.names()}, "
            f"default_mode={self.default_mode.value}, "
            f"allow_overwrite={self.allow_overwrite})"
        )
