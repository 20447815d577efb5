"""Factory example: choosing a transport by delivery mode."""

from abc import ABC, abstractmethod
from enum import Enum

from ..patterns.factory import SelectionFactory


class DeliveryMode(str, Enum):
    ROAD = "road"
    SEA = "sea"
    AIR = "air"


class Transport(ABC):
    """Capability shared by every product of the transport factory."""

    def __init__(self, capacity: int):
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self.capacity = capacity

    @abstractmethod
    def deliver(self, cargo: str) -> str:
        pass


class Truck(Transport):
    def __init__(self, capacity: int = 20):
        super().__init__(capacity)

    def deliver(self, cargo: str) -> str:
        return f"Truck delivers {cargo} by road ({self.capacity}t)"


class Ship(Transport):
    def __init__(self, capacity: int = 5000):
        super().__init__(capacity)

    def deliver(self, cargo: str) -> str:
        return f"Ship delivers {cargo} by sea ({self.capacity}t)"


class Airplane(Transport):
    def __init__(self, capacity: int = 100):
        super().__init__(capacity)

    def deliver(self, cargo: str) -> str:
        return f"Airplane delivers {cargo} by air ({self.capacity}t)"


def build_transport_factory(**kwargs) -> SelectionFactory[Transport]:
    """Factory keyed by DeliveryMode values."""
    factory: SelectionFactory[Transport] = SelectionFactory(Transport, name="delivery mode", **kwargs)
    factory.register(DeliveryMode.ROAD.value, Truck)
    factory.register(DeliveryMode.SEA.value, Ship)
    factory.register(DeliveryMode.AIR.value, Airplane)
    return factory
