"""Port for record validation."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Protocol, runtime_checkable

type ValidationErrors = dict[str, list[str]]


@runtime_checkable
class ValidatorHandle(Protocol):
    """Validates raw data; fields without an entry are valid."""

    def validate(
        self, data: Mapping[str, Any], is_new: bool
    ) -> Mapping[str, Sequence[str]]: ...
