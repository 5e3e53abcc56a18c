"""Build per-record maps of field -> coercion function."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping

    from marshalpy.domain.ports import Coercer, Schema, TypeCoercionRegistry

log = logging.getLogger(__name__)

type PropertyMap = dict[str, Coercer]


def build_property_map(
    data: Mapping[str, Any],
    *,
    schema: Schema,
    types: TypeCoercionRegistry,
) -> PropertyMap:
    """Map every typed field present in ``data`` to its coercer.

    Only keys of ``data`` are looked up. Untyped fields, and fields whose type the
    registry cannot coerce, get no entry and pass through unchanged.
    """

    property_map: PropertyMap = {}
    for name in data:
        type_name = schema.column_type(str(name))
        if not type_name:
            continue
        coercer = types.coercer_for(type_name)
        if coercer is None:
            log.debug("No coercer for type %r of field %r; passing through", type_name, name)
            continue
        property_map[str(name)] = coercer
    return property_map
