"""Port for marshalling lifecycle hooks."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Final, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping

    from marshalpy.domain.model import MarshalOptions

    from .entities import MarshallableEntity

BEFORE_MARSHAL: Final[str] = "Model.beforeMarshal"
AFTER_MARSHAL: Final[str] = "Model.afterMarshal"


@runtime_checkable
class MarshalHooks(Protocol):
    """Lifecycle hooks around single-record marshalling.

    ``before_marshal`` runs once per record before validation and coercion. It may
    mutate ``data`` and ``options`` in place or return replacements; whatever it
    returns is used from then on. ``after_marshal`` observes the finished entity.
    """

    def before_marshal(
        self, data: dict[str, Any], options: MarshalOptions
    ) -> tuple[dict[str, Any], MarshalOptions]: ...

    def after_marshal(
        self,
        entity: MarshallableEntity,
        data: Mapping[str, Any],
        options: MarshalOptions,
    ) -> None: ...
