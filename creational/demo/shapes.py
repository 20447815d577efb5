"""
Prototype example: cloning pre-configured shapes.

Each concrete shape ships an explicit deep copy function that is
registered next to its template.

Aliasing under shallow clones:
    - ``radius``, ``width``, ``height`` and ``name`` are plain attributes
      holding immutable values, so reassigning them on one clone never
      affects another clone, even for shallow clones.
    - ``style`` is a nested mutable object. Shallow clones share it with
      the template and with each other; deep clones get their own.
"""

import math
from dataclasses import dataclass, field
from typing import List, Protocol, runtime_checkable

from ..patterns.prototype import PrototypeRegistry


@dataclass
class Style:
    """Mutable drawing style owned by a shape."""
    color: str = "black"
    line_width: int = 1
    tags: List[str] = field(default_factory=list)


@runtime_checkable
class Shape(Protocol):
    name: str
    style: Style

    def area(self) -> float: ...

    def describe(self) -> str: ...


@dataclass
class Circle:
    radius: float
    name: str = "circle"
    style: Style = field(default_factory=Style)

    def area(self) -> float:
        return math.pi * self.radius ** 2

    def describe(self) -> str:
        return f"{self.style.color} circle r={self.radius}"


@dataclass
class Rectangle:
    width: float
    height: float
    name: str = "rectangle"
    style: Style = field(default_factory=Style)

    def area(self) -> float:
        return self.width * self.height

    def describe(self) -> str:
        return f"{self.style.color} rectangle {self.width}x{self.height}"


def copy_style(style: Style) -> Style:
    return Style(color=style.color, line_width=style.line_width, tags=list(style.tags))


def deep_copy_circle(circle: Circle) -> Circle:
    return Circle(radius=circle.radius, name=circle.name, style=copy_style(circle.style))


def deep_copy_rectangle(rectangle: Rectangle) -> Rectangle:
    return Rectangle(
        width=rectangle.width,
        height=rectangle.height,
        name=rectangle.name,
        style=copy_style(rectangle.style),
    )


def build_shape_registry(**kwargs) -> PrototypeRegistry:
    """Registry preloaded with a radius-10 circle and a 4x3 rectangle."""
    registry = PrototypeRegistry(**kwargs)
    registry.register(
        "circle",
        Circle(radius=10, style=Style(color="red")),
        deep_copier=deep_copy_circle,
    )
    registry.register(
        "rectangle",
        Rectangle(width=4, height=3, style=Style(color="blue", tags=["box"])),
        deep_copier=deep_copy_rectangle,
    )
    return registry
