"""Domain port definitions for collaborators and adapters."""

from __future__ import annotations

from .endpoint import EndpointContext
from .entities import MarshallableEntity, SupportsInvalidFields
from .hooks import AFTER_MARSHAL, BEFORE_MARSHAL, MarshalHooks
from .schema import Coercer, Schema, TypeCoercionRegistry
from .validation import ValidationErrors, ValidatorHandle

__all__ = [
    "AFTER_MARSHAL",
    "BEFORE_MARSHAL",
    "Coercer",
    "EndpointContext",
    "MarshalHooks",
    "MarshallableEntity",
    "Schema",
    "SupportsInvalidFields",
    "TypeCoercionRegistry",
    "ValidationErrors",
    "ValidatorHandle",
]
