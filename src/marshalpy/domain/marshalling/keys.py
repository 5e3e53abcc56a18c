"""Composite primary-key tokens used to match records with entities."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from marshalpy.domain.ports import MarshallableEntity

NO_KEY = ""


def composite_key(values: Iterable[Any], *, delimiter: str) -> str:
    """Join key values; ``None`` counts as empty and an all-empty key is ``NO_KEY``."""

    parts = ["" if value is None else str(value) for value in values]
    if not any(parts):
        return NO_KEY
    return delimiter.join(parts)


def record_key(record: Mapping[str, Any], primary_key: Sequence[str], *, delimiter: str) -> str:
    return composite_key((record.get(name) for name in primary_key), delimiter=delimiter)


def entity_key(
    entity: MarshallableEntity, primary_key: Sequence[str], *, delimiter: str
) -> str:
    extracted = entity.extract(primary_key)
    return composite_key((extracted.get(name) for name in primary_key), delimiter=delimiter)
