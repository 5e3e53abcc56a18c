"""Entity capabilities the marshaller relies on."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class MarshallableEntity(Protocol):
    """Mutable entity that can be hydrated and merged into."""

    source: str | None

    def get(self, name: str, default: Any = None) -> Any: ...

    def set(self, name: str, value: Any) -> None: ...

    def set_many(self, values: Mapping[str, Any], *, guard: bool = True) -> None: ...

    def extract(self, names: Iterable[str]) -> dict[str, Any]: ...

    @property
    def is_new(self) -> bool: ...

    def set_access(self, name: str, accessible: bool) -> None: ...

    def set_errors(self, errors: Mapping[str, Iterable[str]]) -> None: ...


@runtime_checkable
class SupportsInvalidFields(Protocol):
    """Optional capability: remember rejected raw values per field."""

    def set_invalid_field(self, name: str, value: Any) -> None: ...
