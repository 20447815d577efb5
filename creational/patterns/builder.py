"""
Staged builder for immutable pydantic products.

A builder accumulates field values one setter call at a time, validating
each value as it arrives, and only produces the product once every
required field is present.
"""

import logging
from collections.abc import MutableMapping, MutableSequence, MutableSet
from typing import (
    Any, Callable, ClassVar, Dict, Generic, List, Mapping, Optional, Type, TypeVar,
    get_args, get_origin,
)

from pydantic import BaseModel, ValidationError

from ..config import get_settings
from ..exceptions import BuilderConsumedError, FieldValidationError, IncompleteStateError

logger = logging.getLogger(__name__)

P = TypeVar('P', bound=BaseModel)

# A validator returns a falsy value (or raises ValueError) for an invalid value
FieldValidator = Callable[[Any], bool]

_MUTABLE_CONTAINERS = (MutableSequence, MutableMapping, MutableSet, bytearray)


def _is_mutable_container(annotation: Any) -> bool:
    """Check an annotation, including its type arguments, for mutable containers."""
    origin = get_origin(annotation) or annotation
    if isinstance(origin, type) and issubclass(origin, _MUTABLE_CONTAINERS):
        return True
    return any(_is_mutable_container(arg) for arg in get_args(annotation))


class StagedBuilder(Generic[P]):
    """
    Accumulates field values and builds a frozen pydantic model.

    Required fields are the product's fields without a default. Validators
    run when a value is set and again in build(); a rejected value is never
    stored, so the previous value (if any) stays in place.

    Products must be declared frozen and may not have list, dict, set or
    other mutable container fields; use tuple or frozenset instead.

    Example:
        >>> class Pizza(BaseModel):
        ...     model_config = ConfigDict(frozen=True)
        ...     size: int
        ...     topping: str = "cheese"
        >>> builder = StagedBuilder(Pizza, validators={"size": lambda v: v > 0})
        >>> pizza = builder.set("size", 12).build()

    Subclasses may declare ``product_type`` and ``validators`` as class
    attributes and add fluent setter methods on top of set().
    """

    product_type: ClassVar[Optional[Type[BaseModel]]] = None
    validators: ClassVar[Mapping[str, FieldValidator]] = {}

    def __init__(
        self,
        product_type: Optional[Type[P]] = None,
        validators: Optional[Mapping[str, FieldValidator]] = None,
        reusable: Optional[bool] = None,
    ):
        """
        Initialize builder state.

        Args:
            product_type: Frozen pydantic model to build (overrides class attribute)
            validators: Field name to validator mapping, merged over class validators
            reusable: Allow build() more than once. Defaults to
                CREATIONAL_BUILDER_REUSABLE.
        """
        product_type = product_type or type(self).product_type
        if product_type is None:
            raise TypeError(f"{type(self).__name__} requires a product_type")
        if not product_type.model_config.get("frozen", False):
            raise TypeError(f"{product_type.__name__} must be declared with frozen=True")
        mutable = [
            name for name, info in product_type.model_fields.items()
            if _is_mutable_container(info.annotation)
        ]
        if mutable:
            raise TypeError(
                f"{product_type.__name__} field(s) {mutable} use mutable containers; "
                "use tuple or frozenset instead"
            )

        self._product_type: Type[P] = product_type
        self._validators: Dict[str, FieldValidator] = {**type(self).validators, **(validators or {})}
        unknown = set(self._validators) - set(product_type.model_fields)
        if unknown:
            raise TypeError(
                f"Validators given for unknown {product_type.__name__} field(s): {sorted(unknown)}"
            )

        if reusable is None:
            reusable = get_settings().builder_reusable
        self.reusable = reusable
        self._values: Dict[str, Any] = {}
        self._consumed = False

    @property
    def product_name(self) -> str:
        return self._product_type.__name__

    def set(self, field: str, value: Any) -> "StagedBuilder[P]":
        """
        Set a field value after validating it.

        Args:
            field: Product field name
            value: New value

        Returns:
            The builder, for chaining

        Raises:
            FieldValidationError: Unknown field or value rejected by its validator
            BuilderConsumedError: Single-use builder already built
        """
        self._check_not_consumed()
        if field not in self._product_type.model_fields:
            raise FieldValidationError(field, value, f"{self.product_name} has no such field")

        self._validate(field, value)
        self._values[field] = value
        return self

    def unset(self, field: str) -> "StagedBuilder[P]":
        """Remove a previously set value so the default (or nothing) applies."""
        self._check_not_consumed()
        self._values.pop(field, None)
        return self

    def is_set(self, field: str) -> bool:
        return field in self._values

    def values(self) -> Dict[str, Any]:
        """Get a copy of the values set so far."""
        return dict(self._values)

    def required_fields(self) -> List[str]:
        """Required field names in declaration order."""
        return [
            name for name, info in self._product_type.model_fields.items()
            if info.is_required()
        ]

    def missing_fields(self) -> List[str]:
        """Required fields that have not been set, in declaration order."""
        return [name for name in self.required_fields() if name not in self._values]

    def build(self) -> P:
        """
        Build the immutable product.

        Returns:
            A frozen instance of the product type

        Raises:
            IncompleteStateError: A required field is missing
            FieldValidationError: A value fails its validator or the model's
                own validation
            BuilderConsumedError: Single-use builder already built
        """
        self._check_not_consumed()

        missing = self.missing_fields()
        if missing:
            raise IncompleteStateError(self.product_name, missing)

        for field, value in self._values.items():
            self._validate(field, value)

        try:
            product = self._product_type(**self._values)
        except ValidationError as e:
            error = e.errors()[0]
            field = ".".join(str(part) for part in error.get("loc", ())) or "<model>"
            raise FieldValidationError(field, error.get("input"), error.get("msg", str(e))) from e

        if not self.reusable:
            self._consumed = True
        logger.debug(f"Built {self.product_name} with fields {sorted(self._values)}")
        return product

    def _validate(self, field: str, value: Any) -> None:
        validator = self._validators.get(field)
        if validator is None:
            return
        try:
            ok = validator(value)
        except (ValueError, TypeError) as e:
            raise FieldValidationError(field, value, str(e)) from e
        if ok is not None and not ok:
            raise FieldValidationError(field, value, "rejected by validator")

    def _check_not_consumed(self) -> None:
        if self._consumed:
            raise BuilderConsumedError(self.product_name)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(product={self.product_name}, "
            f"set={sorted(self._values)}, missing={self.missing_fields()})"
        )
