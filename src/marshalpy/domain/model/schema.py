"""In-memory endpoint schema."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True, slots=True)
class MappingSchema:
    """Schema backed by a ``field -> type name`` mapping.

    Fields absent from the mapping are untyped and pass through unchanged.
    """

    columns: Mapping[str, str] = field(default_factory=dict["str", "str"])

    def column_type(self, name: str) -> str | None:
        return self.columns.get(name)

    @property
    def column_names(self) -> tuple[str, ...]:
        return tuple(self.columns)
