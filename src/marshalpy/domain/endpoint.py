"""Endpoint: a schema-described collection of resources."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from marshalpy.config.marshalling import DEFAULT_KEY_DELIMITER
from marshalpy.domain.marshalling import Marshaller, NoopHooks
from marshalpy.domain.model import DEFAULT_VALIDATOR, Resource

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from marshalpy.domain.model import MarshalOptions
    from marshalpy.domain.ports import (
        MarshalHooks,
        MarshallableEntity,
        Schema,
        TypeCoercionRegistry,
        ValidatorHandle,
    )


class AcceptAllValidator:
    """Validator without rules; used when no default validator is registered."""

    def validate(self, data: Mapping[str, Any], is_new: bool) -> dict[str, list[str]]:
        return {}


@dataclass(eq=False, kw_only=True)
class Endpoint:
    """Schema, key and validators of one collection, plus the entity API on top."""

    alias: str
    primary_key: tuple[str, ...]
    schema: Schema
    types: TypeCoercionRegistry
    registry_alias: str = ""
    resource_factory: Callable[[], MarshallableEntity] = Resource
    hooks: MarshalHooks = field(default_factory=NoopHooks)
    key_delimiter: str = DEFAULT_KEY_DELIMITER
    validators: dict[str, ValidatorHandle] = field(default_factory=dict["str", "ValidatorHandle"])

    def __post_init__(self) -> None:
        if not self.alias:
            raise ValueError("endpoint alias must not be empty")
        self.primary_key = primary_key_tuple(self.primary_key)
        if not self.registry_alias:
            self.registry_alias = self.alias

    def new_resource(self) -> MarshallableEntity:
        return self.resource_factory()

    def validator(self, name: str) -> ValidatorHandle | None:
        """Return the validator registered as ``name``.

        The default validator always exists; unknown names return ``None``.
        """

        handle = self.validators.get(name)
        if handle is None and name == DEFAULT_VALIDATOR:
            return AcceptAllValidator()
        return handle

    def set_validator(self, name: str, validator: ValidatorHandle) -> None:
        self.validators[name] = validator

    def marshaller(self) -> Marshaller:
        return Marshaller(self)

    def new_entity(
        self, data: Mapping[str, Any], options: MarshalOptions | None = None
    ) -> MarshallableEntity:
        return self.marshaller().one(data, options)

    def new_entities(
        self, data: Iterable[object], options: MarshalOptions | None = None
    ) -> list[MarshallableEntity]:
        return self.marshaller().many(data, options)

    def patch_entity(
        self,
        entity: MarshallableEntity,
        data: Mapping[str, Any],
        options: MarshalOptions | None = None,
    ) -> MarshallableEntity:
        return self.marshaller().merge(entity, data, options)

    def patch_entities(
        self,
        entities: Iterable[object],
        data: Iterable[object],
        options: MarshalOptions | None = None,
    ) -> list[MarshallableEntity]:
        return self.marshaller().merge_many(entities, data, options)


def primary_key_tuple(primary_key: str | Sequence[str]) -> tuple[str, ...]:
    if isinstance(primary_key, str):
        return (primary_key,)
    return tuple(primary_key)
