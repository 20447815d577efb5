"""creational-kit: Singleton, Builder, Prototype and Factory Method building blocks."""

from .config import CreationalSettings, get_settings, reset_settings
from .exceptions import (
    BuilderConsumedError,
    CapabilityMismatchError,
    ConstructionError,
    CreationalError,
    DuplicateRegistrationError,
    FieldValidationError,
    IncompleteStateError,
    NotFoundError,
)
from .patterns import (
    CloneMode,
    PrototypeRegistry,
    SelectionFactory,
    SingletonRegistry,
    StagedBuilder,
)

__version__ = "0.1.0"

__all__ = [
    # Components
    "SingletonRegistry",
    "StagedBuilder",
    "PrototypeRegistry",
    "CloneMode",
    "SelectionFactory",
    # Configuration
    "CreationalSettings",
    "get_settings",
    "reset_settings",
    # Exceptions
    "CreationalError",
    "ConstructionError",
    "FieldValidationError",
    "IncompleteStateError",
    "BuilderConsumedError",
    "NotFoundError",
    "DuplicateRegistrationError",
    "CapabilityMismatchError",
]
