"""
Custom exceptions for the creational pattern toolkit.

Every failure raised by a registry, builder or factory derives from
CreationalError and carries a human-readable message plus a details dict.
"""

from typing import Any, Dict, Iterable, List, Optional


class CreationalError(Exception):
    """Base exception for all creational toolkit errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


def _type_name(resource_type: Any) -> str:
    return getattr(resource_type, "__qualname__", None) or repr(resource_type)


class ConstructionError(CreationalError):
    """
    Raised when a singleton constructor fails.

    The original exception is available as ``cause`` and is also chained
    via ``__cause__`` by the registry.
    """

    def __init__(
        self,
        resource_type: Any,
        cause: Optional[BaseException] = None,
        reason: Optional[str] = None,
    ):
        self.resource_type = resource_type
        self.cause = cause

        type_name = _type_name(resource_type)
        if reason is None:
            reason = f"{type(cause).__name__}: {cause}" if cause is not None else "unknown error"
        super().__init__(
            message=f"Failed to construct {type_name}: {reason}",
            details={"resource_type": type_name, "reason": reason},
        )


class FieldValidationError(CreationalError):
    """Raised when a builder field value violates its constraint."""

    def __init__(self, field: str, value: Any, reason: str):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": repr(value), "reason": reason},
        )


class IncompleteStateError(CreationalError):
    """Raised when build() is called before all required fields are set."""

    def __init__(self, product: str, missing_fields: Iterable[str]):
        self.product = product
        self.missing_fields: List[str] = list(missing_fields)

        missing = ", ".join(f"'{name}'" for name in self.missing_fields)
        super().__init__(
            message=f"Cannot build {product}: missing required field(s) {missing}",
            details={"product": product, "missing_fields": self.missing_fields},
        )


class BuilderConsumedError(CreationalError):
    """Raised when a single-use builder is used after a successful build()."""

    def __init__(self, product: str):
        self.product = product
        super().__init__(
            message=f"{product} builder has already been used to build a product",
            details={"product": product},
        )


class NotFoundError(CreationalError, KeyError):
    """Raised when a prototype name or factory key is not registered."""

    def __init__(self, kind: str, key: Any, available: Optional[Iterable[Any]] = None):
        self.kind = kind
        self.key = key
        self.available = sorted(str(k) for k in available) if available is not None else []

        message = f"Unknown {kind} '{key}'"
        if self.available:
            message += f". Available: {', '.join(self.available)}"
        super().__init__(
            message=message,
            details={"kind": kind, "key": str(key), "available": self.available},
        )

    def __str__(self) -> str:
        # KeyError.__str__ would quote the message
        return self.message


class DuplicateRegistrationError(CreationalError):
    """Raised when a name, key or type is registered twice and overwrite is disabled."""

    def __init__(self, kind: str, key: Any):
        self.kind = kind
        self.key = key
        super().__init__(
            message=f"{kind[:1].upper()}{kind[1:]} '{key}' is already registered",
            details={"kind": kind, "key": str(key)},
        )


class CapabilityMismatchError(CreationalError):
    """Raised when a factory creator returns a value lacking the required capability."""

    def __init__(self, key: Any, capability: Any, product: Any):
        self.key = key
        self.capability = capability
        self.product = product

        capability_name = _type_name(capability)
        product_name = type(product).__name__
        super().__init__(
            message=(
                f"Creator for '{key}' returned {product_name}, "
                f"which does not provide {capability_name}"
            ),
            details={
                "key": str(key),
                "capability": capability_name,
                "product_type": product_name,
            },
        )


__all__ = [
    "CreationalError",
    "ConstructionError",
    "FieldValidationError",
    "IncompleteStateError",
    "BuilderConsumedError",
    "NotFoundError",
    "DuplicateRegistrationError",
    "CapabilityMismatchError",
]
