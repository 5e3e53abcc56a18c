"""Port describing the endpoint a marshaller works for."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from .entities import MarshallableEntity
    from .hooks import MarshalHooks
    from .schema import Schema, TypeCoercionRegistry
    from .validation import ValidatorHandle


class EndpointContext(Protocol):
    """Everything the marshaller needs to know about its endpoint."""

    @property
    def alias(self) -> str: ...

    @property
    def primary_key(self) -> tuple[str, ...]: ...

    @property
    def registry_alias(self) -> str: ...

    @property
    def schema(self) -> Schema: ...

    @property
    def types(self) -> TypeCoercionRegistry: ...

    @property
    def hooks(self) -> MarshalHooks: ...

    @property
    def key_delimiter(self) -> str: ...

    def new_resource(self) -> MarshallableEntity: ...

    def validator(self, name: str) -> ValidatorHandle | None: ...
