"""Type coercion registry backed by pydantic ``TypeAdapter``."""

from __future__ import annotations

import logging
from datetime import date, datetime, time
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Final
from uuid import UUID

from pydantic import ConfigDict, TypeAdapter, ValidationError

if TYPE_CHECKING:
    from marshalpy.domain.ports import Coercer

log = logging.getLogger(__name__)

BUILTIN_TYPES: Final[dict[str, Any]] = {
    "string": str,
    "text": str,
    "char": str,
    "integer": int,
    "biginteger": int,
    "smallinteger": int,
    "tinyinteger": int,
    "float": float,
    "decimal": Decimal,
    "boolean": bool,
    "date": date,
    "datetime": datetime,
    "timestamp": datetime,
    "time": time,
    "uuid": UUID,
    "json": Any,
}

_STRING_CONFIG: Final = ConfigDict(coerce_numbers_to_str=True)


class PydanticTypeRegistry:
    """Resolve type names to coercers that convert raw input via pydantic.

    Coercion is lax: ``"12"`` becomes ``12`` for integers, ``"yes"`` becomes
    ``True`` for booleans. ``None`` stays ``None``; ``""`` becomes ``None`` for
    every non-string type. Values pydantic rejects are returned unchanged, leaving
    the decision to validation. Type names are case-insensitive.
    """

    def __init__(self, types: dict[str, Any] | None = None) -> None:
        self._types: dict[str, Any] = dict(BUILTIN_TYPES)
        if types:
            for name, python_type in types.items():
                self._types[name.lower()] = python_type
        self._coercers: dict[str, Coercer] = {}

    def register(self, name: str, python_type: Any) -> None:
        key = name.lower()
        self._types[key] = python_type
        self._coercers.pop(key, None)

    def python_type_for(self, type_name: str) -> Any | None:
        return self._types.get(type_name.lower())

    @property
    def type_names(self) -> tuple[str, ...]:
        return tuple(self._types)

    def coercer_for(self, type_name: str) -> Coercer | None:
        key = type_name.lower()
        coercer = self._coercers.get(key)
        if coercer is not None:
            return coercer
        python_type = self._types.get(key)
        if python_type is None:
            return None
        coercer = _build_coercer(key, python_type)
        self._coercers[key] = coercer
        return coercer


def _build_coercer(name: str, python_type: Any) -> Coercer:
    is_string = python_type is str
    adapter: TypeAdapter[Any] = (
        TypeAdapter(str, config=_STRING_CONFIG) if is_string else TypeAdapter(python_type)
    )

    def coerce(value: Any) -> Any:
        if value is None:
            return None
        if not is_string and isinstance(value, str) and not value:
            return None
        try:
            return adapter.validate_python(value)
        except ValidationError:
            log.debug("Could not coerce %r to %s; keeping raw value", value, name)
            return value

    return coerce
