"""Public domain model surface."""

from __future__ import annotations

from marshalpy.domain.model.options import (
    DEFAULT_VALIDATOR,
    DefaultValidation,
    ExplicitValidation,
    MarshalOptions,
    NamedValidation,
    NoValidation,
    ValidationMode,
)
from marshalpy.domain.model.resource import ALL_FIELDS, Resource
from marshalpy.domain.model.schema import MappingSchema

__all__ = [
    "ALL_FIELDS",
    "DEFAULT_VALIDATOR",
    "DefaultValidation",
    "ExplicitValidation",
    "MappingSchema",
    "MarshalOptions",
    "NamedValidation",
    "NoValidation",
    "Resource",
    "ValidationMode",
]
