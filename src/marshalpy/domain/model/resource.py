"""Resource entity: a mutable record hydrated from raw endpoint data.

A resource tracks which fields were written since it was last cleaned, the
original value of every overwritten field, per-field accessibility, invalid
field markers and the validation errors of the last marshalling call.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Final

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

ALL_FIELDS: Final[str] = "*"


@dataclass(eq=False, kw_only=True)
class Resource:
    """Mutable field container owned by the caller."""

    source: str | None = None

    _fields: dict[str, Any] = field(default_factory=dict["str", "Any"], init=False, repr=False)
    _original: dict[str, Any] = field(default_factory=dict["str", "Any"], init=False, repr=False)
    _dirty: dict[str, None] = field(default_factory=dict["str", "None"], init=False, repr=False)
    _accessible: dict[str, bool] = field(
        default_factory=lambda: {ALL_FIELDS: True}, init=False, repr=False
    )
    _invalid: dict[str, Any] = field(default_factory=dict["str", "Any"], init=False, repr=False)
    _errors: dict[str, list[str]] = field(
        default_factory=dict["str", "list[str]"], init=False, repr=False
    )
    _new: bool = field(default=True, init=False, repr=False)

    @classmethod
    def persisted(cls, values: Mapping[str, Any], *, source: str | None = None) -> Resource:
        """Build a clean, non-new resource, as if loaded from a store."""

        resource = cls(source=source)
        resource.set_many(values, guard=False)
        resource.clean()
        resource.set_new(False)
        return resource

    # values

    def get(self, name: str, default: Any = None) -> Any:
        return self._fields.get(name, default)

    def has(self, name: str) -> bool:
        return name in self._fields

    def set(self, name: str, value: Any) -> None:
        """Write one field unconditionally and mark it dirty."""

        if name in self._fields and name not in self._original:
            self._original[name] = self._fields[name]
        self._fields[name] = value
        self._dirty[name] = None

    def set_many(self, values: Mapping[str, Any], *, guard: bool = True) -> None:
        """Write several fields; with ``guard`` inaccessible fields are skipped."""

        for name, value in values.items():
            if guard and not self.is_accessible(name):
                continue
            self.set(name, value)

    def unset(self, name: str) -> None:
        self._fields.pop(name, None)
        self._dirty.pop(name, None)

    def extract(self, names: Iterable[str]) -> dict[str, Any]:
        return {name: self._fields.get(name) for name in names}

    def to_dict(self) -> dict[str, Any]:
        return dict(self._fields)

    @property
    def fields(self) -> tuple[str, ...]:
        return tuple(self._fields)

    # identity

    @property
    def is_new(self) -> bool:
        return self._new

    def set_new(self, new: bool) -> None:
        self._new = new

    # dirty tracking

    def is_dirty(self, name: str | None = None) -> bool:
        if name is None:
            return bool(self._dirty)
        return name in self._dirty

    @property
    def dirty_fields(self) -> tuple[str, ...]:
        return tuple(self._dirty)

    def get_original(self, name: str, default: Any = None) -> Any:
        if name in self._original:
            return self._original[name]
        return self._fields.get(name, default)

    def clean(self) -> None:
        """Forget dirty state, originals, invalid markers and errors."""

        self._dirty.clear()
        self._original.clear()
        self._invalid.clear()
        self._errors.clear()

    # accessibility

    def set_access(self, name: str, accessible: bool) -> None:
        if name == ALL_FIELDS:
            self._accessible = {ALL_FIELDS: accessible}
            return
        self._accessible[name] = accessible

    def is_accessible(self, name: str) -> bool:
        if name in self._accessible:
            return self._accessible[name]
        return self._accessible.get(ALL_FIELDS, False)

    # invalid fields

    def set_invalid_field(self, name: str, value: Any) -> None:
        self._invalid[name] = value

    def get_invalid_field(self, name: str) -> Any:
        return self._invalid.get(name)

    @property
    def invalid_fields(self) -> dict[str, Any]:
        return dict(self._invalid)

    # errors

    def set_errors(self, errors: Mapping[str, Iterable[str]]) -> None:
        """Replace the error map with non-empty entries of ``errors``."""

        self._errors = {name: list(messages) for name, messages in errors.items() if messages}

    def get_error(self, name: str) -> list[str]:
        return list(self._errors.get(name, ()))

    @property
    def errors(self) -> dict[str, list[str]]:
        return {name: list(messages) for name, messages in self._errors.items()}

    def has_errors(self) -> bool:
        return bool(self._errors)
