"""Adapters implementing the domain ports with third-party libraries."""

from __future__ import annotations

from .pydantic_types import BUILTIN_TYPES, PydanticTypeRegistry
from .pydantic_validation import PydanticModelValidator, model_validator_for
from .sqlalchemy import TableSchema, column_type_name, primary_key_of

__all__ = [
    "BUILTIN_TYPES",
    "PydanticModelValidator",
    "PydanticTypeRegistry",
    "TableSchema",
    "column_type_name",
    "model_validator_for",
    "primary_key_of",
]
