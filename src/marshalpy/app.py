"""Application entry points: endpoint composition and batch operations."""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from logging import getLogger
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from marshalpy.adapters.pydantic_types import PydanticTypeRegistry
from marshalpy.adapters.pydantic_validation import model_validator_for
from marshalpy.adapters.sqlalchemy import TableSchema, primary_key_of
from marshalpy.config import ConfigurationError, MarshalConfig, get_marshal_config
from marshalpy.domain.endpoint import Endpoint, primary_key_tuple
from marshalpy.domain.marshalling import HookChain
from marshalpy.domain.model import DEFAULT_VALIDATOR, MappingSchema, Resource

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from pathlib import Path

    from sqlalchemy import Table

    from marshalpy.domain.model import MarshalOptions
    from marshalpy.domain.ports import (
        MarshalHooks,
        MarshallableEntity,
        Schema,
        TypeCoercionRegistry,
        ValidatorHandle,
    )

type ResourceFactory = Callable[[], MarshallableEntity]

log = getLogger(__name__)


class EndpointDescriptor(BaseModel):
    """JSON description of an endpoint for the CLI."""

    model_config = ConfigDict(extra="forbid")

    alias: str = Field(min_length=1)
    primary_key: list[str] = Field(default_factory=lambda: ["id"])
    columns: dict[str, str] = Field(default_factory=dict)
    required: list[str] = Field(default_factory=list)
    registry_alias: str | None = None


def build_endpoint(
    *,
    alias: str,
    primary_key: str | Sequence[str] = ("id",),
    schema: Schema | None = None,
    columns: Mapping[str, str] | None = None,
    types: TypeCoercionRegistry | None = None,
    validators: Mapping[str, ValidatorHandle] | None = None,
    hooks: Iterable[MarshalHooks] = (),
    resource_factory: ResourceFactory = Resource,
    registry_alias: str | None = None,
    config: MarshalConfig | None = None,
) -> Endpoint:
    """Compose an endpoint with pydantic coercion and configured defaults.

    ``schema`` wins over ``columns``; without either, every field is untyped.
    """

    effective_config = config or get_marshal_config()
    return Endpoint(
        alias=alias,
        primary_key=primary_key_tuple(primary_key),
        schema=schema if schema is not None else MappingSchema(dict(columns or {})),
        types=types if types is not None else PydanticTypeRegistry(),
        registry_alias=registry_alias or alias,
        resource_factory=resource_factory,
        hooks=HookChain(*hooks),
        key_delimiter=effective_config.key_delimiter,
        validators=dict(validators or {}),
    )


def endpoint_for_table(
    table: Table,
    *,
    alias: str | None = None,
    **kwargs: Any,
) -> Endpoint:
    """Build an endpoint whose schema and primary key come from ``table``."""

    primary_key = primary_key_of(table)
    if not primary_key:
        raise ConfigurationError(f"Table {table.name} has no primary key")
    return build_endpoint(
        alias=alias or table.name,
        primary_key=primary_key,
        schema=TableSchema(table),
        **kwargs,
    )


def endpoint_from_descriptor(
    descriptor: EndpointDescriptor, *, config: MarshalConfig | None = None
) -> Endpoint:
    types = PydanticTypeRegistry()
    unknown = sorted(
        type_name
        for type_name in descriptor.columns.values()
        if types.python_type_for(type_name) is None
    )
    if unknown:
        raise ConfigurationError(f"Unknown column types: {', '.join(unknown)}")
    validator = model_validator_for(
        descriptor.alias,
        descriptor.columns,
        types=types,
        required=descriptor.required,
    )
    return build_endpoint(
        alias=descriptor.alias,
        primary_key=descriptor.primary_key,
        columns=descriptor.columns,
        types=types,
        validators={DEFAULT_VALIDATOR: validator},
        registry_alias=descriptor.registry_alias,
        config=config,
    )


def load_endpoint_descriptor(path: Path) -> EndpointDescriptor:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"Cannot read endpoint descriptor {path}: {exc}") from exc
    try:
        return EndpointDescriptor.model_validate_json(text)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid endpoint descriptor {path}: {exc}") from exc


def load_records(path: Path) -> list[object]:
    """Read a JSON array of records; a single JSON object counts as one record."""

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ValueError(f"Cannot read records from {path}: {exc}") from exc
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        return [payload]
    raise ValueError(f"Expected a JSON array or object in {path}")


def hydrate_records(
    endpoint: Endpoint,
    records: Iterable[object],
    *,
    options: MarshalOptions | None = None,
) -> list[MarshallableEntity]:
    """Hydrate new resources for ``endpoint``."""

    records = list(records)
    resources = endpoint.new_entities(records, options)
    log.info(
        "Hydrated %s: records=%d, resources=%d",
        endpoint.alias,
        len(records),
        len(resources),
    )
    return resources


def reconcile_records(
    endpoint: Endpoint,
    existing: Iterable[object],
    records: Iterable[object],
    *,
    options: MarshalOptions | None = None,
) -> list[MarshallableEntity]:
    """Reconcile stored rows with incoming records.

    ``existing`` rows are materialised as clean, persisted resources first.
    """

    entities = [
        Resource.persisted(row, source=endpoint.registry_alias)
        for row in existing
        if isinstance(row, Mapping)
    ]
    resources = endpoint.patch_entities(entities, records, options)
    log.info(
        "Reconciled %s: existing=%d, resources=%d",
        endpoint.alias,
        len(entities),
        len(resources),
    )
    return resources


def resource_summary(resource: MarshallableEntity) -> dict[str, Any]:
    summary: dict[str, Any] = {"source": resource.source, "new": resource.is_new}
    if isinstance(resource, Resource):
        summary.update(
            values=resource.to_dict(),
            dirty=list(resource.dirty_fields),
            errors=resource.errors,
            invalid=resource.invalid_fields,
        )
    return summary
