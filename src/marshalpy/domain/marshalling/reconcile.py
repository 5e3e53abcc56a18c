"""Index incoming records by composite key for batch reconciliation."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from .keys import NO_KEY, record_key

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

log = logging.getLogger(__name__)


@dataclass(slots=True)
class IndexedRecords:
    """Incoming records split into keyed (first per key) and keyless ones."""

    keyed: dict[str, Mapping[str, Any]] = field(default_factory=dict["str", "Mapping[str, Any]"])
    new: list[Mapping[str, Any]] = field(default_factory=list["Mapping[str, Any]"])
    duplicates: int = 0

    def take(self, key: str) -> Mapping[str, Any] | None:
        """Remove and return the record for ``key`` so it cannot match twice."""

        if key == NO_KEY:
            return None
        return self.keyed.pop(key, None)

    def remaining(self) -> list[Mapping[str, Any]]:
        """Unmatched keyed records in first-seen order, then keyless records."""

        return [*self.keyed.values(), *self.new]


def index_records(
    data: Iterable[object],
    primary_key: Sequence[str],
    *,
    delimiter: str,
) -> IndexedRecords:
    """Group ``data`` by composite key, keeping only the first record per key."""

    indexed = IndexedRecords()
    for position, record in enumerate(data):
        if not isinstance(record, Mapping):
            log.debug("Skipping non-mapping record at position %d", position)
            continue
        key = record_key(record, primary_key, delimiter=delimiter)
        if key == NO_KEY:
            indexed.new.append(record)
            continue
        if key in indexed.keyed:
            indexed.duplicates += 1
            log.debug("Discarding duplicate record for key %r at position %d", key, position)
            continue
        indexed.keyed[key] = record
    return indexed
