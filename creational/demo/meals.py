"""Builder example: assembling a fast-food meal step by step."""

from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from ..patterns.builder import StagedBuilder


class Meal(BaseModel):
    """Immutable meal produced by MealBuilder."""
    model_config = ConfigDict(frozen=True)

    main: str
    drink: str = "Water"
    side: Optional[str] = None
    dessert: Optional[str] = None
    cost: float = Field(default=0.0, ge=0)
    extras: Tuple[str, ...] = ()


def _non_blank(value: str) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _non_negative(value: float) -> bool:
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        raise TypeError(f"cost must be a number, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"cost must not be negative, got {value}")
    return True


class MealBuilder(StagedBuilder[Meal]):
    """
    Fluent builder for Meal.

    Example:
        >>> meal = MealBuilder().main("Burger").side("Fries").cost(8.5).build()
    """

    product_type = Meal
    validators = {
        "main": _non_blank,
        "drink": _non_blank,
        "cost": _non_negative,
    }

    def main(self, name: str) -> "MealBuilder":
        return self.set("main", name)

    def drink(self, name: str) -> "MealBuilder":
        return self.set("drink", name)

    def side(self, name: str) -> "MealBuilder":
        return self.set("side", name)

    def dessert(self, name: str) -> "MealBuilder":
        return self.set("dessert", name)

    def cost(self, amount: float) -> "MealBuilder":
        return self.set("cost", amount)

    def extra(self, name: str) -> "MealBuilder":
        """Append an extra item; may be called repeatedly."""
        current = self.values().get("extras", ())
        return self.set("extras", (*current, name))
