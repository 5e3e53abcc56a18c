from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

import pytest

from marshalpy.adapters import PydanticTypeRegistry


@pytest.fixture
def registry() -> PydanticTypeRegistry:
    return PydanticTypeRegistry()


def _coerce(registry: PydanticTypeRegistry, type_name: str, value: object) -> object:
    coercer = registry.coercer_for(type_name)
    assert coercer is not None
    return coercer(value)


@pytest.mark.parametrize(
    ("type_name", "raw", "expected"),
    [
        ("integer", "12", 12),
        ("biginteger", 7, 7),
        ("float", "4.5", 4.5),
        ("decimal", "1.50", Decimal("1.50")),
        ("boolean", "false", False),
        ("boolean", "yes", True),
        ("string", 12, "12"),
        ("string", "", ""),
        ("date", "2024-02-01", date(2024, 2, 1)),
        ("datetime", "2024-01-02T03:04:05", datetime(2024, 1, 2, 3, 4, 5)),
        (
            "uuid",
            "12345678-1234-5678-1234-567812345678",
            UUID("12345678-1234-5678-1234-567812345678"),
        ),
    ],
)
def test_builtin_types_coerce_lax_input(
    registry: PydanticTypeRegistry, type_name: str, raw: object, expected: object
) -> None:
    assert _coerce(registry, type_name, raw) == expected


def test_empty_string_becomes_none_for_non_string_types(registry: PydanticTypeRegistry) -> None:
    assert _coerce(registry, "integer", "") is None
    assert _coerce(registry, "date", "") is None


def test_none_passes_through(registry: PydanticTypeRegistry) -> None:
    assert _coerce(registry, "integer", None) is None
    assert _coerce(registry, "string", None) is None


def test_rejected_values_are_kept_raw(registry: PydanticTypeRegistry) -> None:
    assert _coerce(registry, "integer", "abc") == "abc"


def test_json_values_are_untouched(registry: PydanticTypeRegistry) -> None:
    payload = {"nested": [1, 2]}

    assert _coerce(registry, "json", payload) == payload


def test_unknown_type_has_no_coercer(registry: PydanticTypeRegistry) -> None:
    assert registry.coercer_for("geometry") is None
    assert registry.python_type_for("geometry") is None


def test_type_names_are_case_insensitive(registry: PydanticTypeRegistry) -> None:
    assert _coerce(registry, "Integer", "3") == 3
    assert registry.coercer_for("INTEGER") is registry.coercer_for("integer")


def test_custom_types_can_be_registered() -> None:
    registry = PydanticTypeRegistry({"Counter": int})
    registry.register("flag", bool)

    assert _coerce(registry, "counter", "4") == 4
    assert _coerce(registry, "flag", "on") is True
    assert "counter" in registry.type_names


def test_register_replaces_cached_coercer(registry: PydanticTypeRegistry) -> None:
    assert _coerce(registry, "integer", "5") == 5

    registry.register("integer", str)

    assert _coerce(registry, "integer", "5") == "5"
