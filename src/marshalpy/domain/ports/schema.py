"""Ports for schema lookup and type coercion."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

type Coercer = Callable[[Any], Any]


@runtime_checkable
class Schema(Protocol):
    """Declared column types of an endpoint."""

    def column_type(self, name: str) -> str | None:
        """Return the declared type name, or ``None`` for untyped passthrough."""
        ...


@runtime_checkable
class TypeCoercionRegistry(Protocol):
    """Resolves a type name to a function converting raw values to that type."""

    def coercer_for(self, type_name: str) -> Coercer | None: ...
