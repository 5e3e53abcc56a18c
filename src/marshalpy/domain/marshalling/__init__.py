"""Marshalling core: hydrate, merge and reconcile raw records."""

from __future__ import annotations

from .hooks import EventChannelHooks, HookChain, NoopHooks
from .keys import NO_KEY, composite_key, entity_key, record_key
from .marshaller import Marshaller
from .property_map import PropertyMap, build_property_map
from .reconcile import IndexedRecords, index_records
from .validation import InvalidValidatorConfigurationError, resolve_validator, validate_data

__all__ = [
    "NO_KEY",
    "EventChannelHooks",
    "HookChain",
    "IndexedRecords",
    "InvalidValidatorConfigurationError",
    "Marshaller",
    "NoopHooks",
    "PropertyMap",
    "build_property_map",
    "composite_key",
    "entity_key",
    "index_records",
    "record_key",
    "resolve_validator",
    "validate_data",
]
