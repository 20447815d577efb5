"""Creational patterns module.

Provides the four object-creation components of the toolkit.
"""

from .builder import StagedBuilder
from .factory import SelectionFactory
from .prototype import CloneMode, PrototypeRegistry
from .singleton import SingletonRegistry

__all__ = [
    "SingletonRegistry",
    "StagedBuilder",
    "PrototypeRegistry",
    "CloneMode",
    "SelectionFactory",
]
