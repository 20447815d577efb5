"""Worked examples for each creational pattern."""

from .meals import Meal, MealBuilder
from .resources import ConnectionPool, build_resource_registry
from .shapes import Circle, Rectangle, Shape, Style, build_shape_registry
from .transport import Airplane, DeliveryMode, Ship, Transport, Truck, build_transport_factory

__all__ = [
    # Singleton
    "ConnectionPool",
    "build_resource_registry",
    # Builder
    "Meal",
    "MealBuilder",
    # Prototype
    "Shape",
    "Style",
    "Circle",
    "Rectangle",
    "build_shape_registry",
    # Factory
    "Transport",
    "Truck",
    "Ship",
    "Airplane",
    "DeliveryMode",
    "build_transport_factory",
]
