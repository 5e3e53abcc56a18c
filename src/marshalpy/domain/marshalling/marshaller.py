"""Convert raw records into resources and merge them into existing ones."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Final

from marshalpy.domain.model import MarshalOptions
from marshalpy.domain.ports import MarshallableEntity, SupportsInvalidFields

from .keys import entity_key
from .property_map import build_property_map
from .reconcile import index_records
from .validation import validate_data

if TYPE_CHECKING:
    from collections.abc import Iterable

    from marshalpy.domain.ports import EndpointContext, ValidationErrors

log = logging.getLogger(__name__)

_SCALARS: Final = (str, bytes, int, float, bool, Decimal)
_CONTAINERS: Final = (list, tuple, set, frozenset, dict)


class Marshaller:
    """Hydrates and merges resources for one endpoint."""

    def __init__(self, endpoint: EndpointContext) -> None:
        self._endpoint = endpoint

    @property
    def endpoint(self) -> EndpointContext:
        return self._endpoint

    def one(
        self, data: Mapping[str, Any], options: MarshalOptions | None = None
    ) -> MarshallableEntity:
        """Hydrate a single new resource from ``data``.

        ``options.field_list`` restricts which fields are written;
        ``options.accessible_fields`` adjusts accessibility before writing.
        """

        data, options = self._prepare(data, options)
        primary_key = self._endpoint.primary_key

        entity = self._endpoint.new_resource()
        entity.source = self._endpoint.registry_alias
        _apply_accessible_fields(entity, options)

        errors = validate_data(self._endpoint, data, options, is_new=True)
        property_map = build_property_map(
            data, schema=self._endpoint.schema, types=self._endpoint.types
        )
        properties: dict[str, Any] = {}
        for key, value in data.items():
            if errors.get(key):
                _mark_invalid(entity, key, value)
                continue
            if isinstance(value, str) and not value and key in primary_key:
                # an empty primary key would turn the resource into a phantom match
                continue
            coercer = property_map.get(key)
            properties[key] = coercer(value) if coercer is not None else value

        return self._write(entity, properties, errors, data, options)

    def many(
        self, data: Iterable[object], options: MarshalOptions | None = None
    ) -> list[MarshallableEntity]:
        """Hydrate every mapping in ``data``; other elements are skipped."""

        output: list[MarshallableEntity] = []
        for position, record in enumerate(data):
            if not isinstance(record, Mapping):
                log.debug("Skipping non-mapping record at position %d", position)
                continue
            output.append(self.one(record, options))
        return output

    def merge(
        self,
        entity: MarshallableEntity,
        data: Mapping[str, Any],
        options: MarshalOptions | None = None,
    ) -> MarshallableEntity:
        """Merge ``data`` into ``entity`` without dirtying unchanged fields."""

        data, options = self._prepare(data, options)

        is_new = entity.is_new
        keys: dict[str, Any] = {}
        if not is_new:
            keys = entity.extract(self._endpoint.primary_key)

        _apply_accessible_fields(entity, options)

        # primary keys are validated too so identity rules can see them; data wins
        errors = validate_data(self._endpoint, {**keys, **data}, options, is_new=is_new)
        property_map = build_property_map(
            data, schema=self._endpoint.schema, types=self._endpoint.types
        )
        properties: dict[str, Any] = {}
        for key, value in data.items():
            if errors.get(key):
                _mark_invalid(entity, key, value)
                continue
            original = entity.get(key)
            coercer = property_map.get(key)
            if coercer is not None:
                value = coercer(value)
            if _is_unchanged(value, original):
                continue
            properties[key] = value

        return self._write(entity, properties, errors, data, options)

    def merge_many(
        self,
        entities: Iterable[object],
        data: Iterable[object],
        options: MarshalOptions | None = None,
    ) -> list[MarshallableEntity]:
        """Reconcile existing ``entities`` with incoming ``data`` by primary key.

        Records are matched to entities by composite primary key; only the first
        record per key is used. Entities without a matching record are dropped.
        Unmatched records, followed by records without a key, become new resources.
        Returns the merged entities followed by the new ones.
        """

        primary_key = self._endpoint.primary_key
        delimiter = self._endpoint.key_delimiter
        indexed = index_records(data, primary_key, delimiter=delimiter)

        output: list[MarshallableEntity] = []
        for entity in entities:
            if not isinstance(entity, MarshallableEntity):
                log.debug("Skipping non-entity %s", type(entity).__name__)
                continue
            key = entity_key(entity, primary_key, delimiter=delimiter)
            record = indexed.take(key)
            if record is None:
                log.debug("Dropping entity without matching record (key=%r)", key)
                continue
            output.append(self.merge(entity, record, options))

        merged = len(output)
        for record in indexed.remaining():
            output.append(self.one(record, options))

        log.debug(
            "Reconciled %s: merged=%d, created=%d, duplicates=%d",
            self._endpoint.alias,
            merged,
            len(output) - merged,
            indexed.duplicates,
        )
        return output

    def _prepare(
        self, data: Mapping[str, Any], options: MarshalOptions | None
    ) -> tuple[dict[str, Any], MarshalOptions]:
        prepared_options = options.copy() if options is not None else MarshalOptions()
        if prepared_options.validate is None:
            prepared_options.validate = True

        nested = data.get(self._endpoint.alias)
        if isinstance(nested, Mapping):
            data = nested

        return self._endpoint.hooks.before_marshal(dict(data), prepared_options)

    def _write(
        self,
        entity: MarshallableEntity,
        properties: dict[str, Any],
        errors: ValidationErrors,
        data: Mapping[str, Any],
        options: MarshalOptions,
    ) -> MarshallableEntity:
        if options.field_list is None:
            # no field list: the after hook is not fired on this path
            entity.set_many(properties)
            entity.set_errors(errors)
            return entity

        for name in options.field_list:
            if name in properties:
                entity.set(name, properties[name])

        entity.set_errors(errors)
        self._endpoint.hooks.after_marshal(entity, data, options)
        return entity


def _apply_accessible_fields(entity: MarshallableEntity, options: MarshalOptions) -> None:
    if options.accessible_fields is None:
        return
    for name, accessible in options.accessible_fields.items():
        entity.set_access(name, accessible)


def _mark_invalid(entity: MarshallableEntity, name: str, value: Any) -> None:
    if isinstance(entity, SupportsInvalidFields):
        entity.set_invalid_field(name, value)


def _is_unchanged(value: Any, original: Any) -> bool:
    if value is None:
        return original is None
    if isinstance(value, _SCALARS):
        return type(value) is type(original) and value == original
    # entities may have changed internally while still comparing equal
    if isinstance(value, MarshallableEntity) or _holds_entities(value):
        return False
    return value == original


def _holds_entities(value: Any) -> bool:
    if not isinstance(value, _CONTAINERS):
        return False
    items = value.values() if isinstance(value, dict) else value
    return any(isinstance(item, MarshallableEntity) for item in items)
