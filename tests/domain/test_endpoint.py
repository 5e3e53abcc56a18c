from __future__ import annotations

import pytest

from marshalpy.adapters import PydanticTypeRegistry
from marshalpy.domain.endpoint import AcceptAllValidator, Endpoint, primary_key_tuple
from marshalpy.domain.marshalling import Marshaller, NoopHooks
from marshalpy.domain.model import MappingSchema, Resource
from tests.helpers.marshalling import StaticValidator


def _endpoint(primary_key: str | tuple[str, ...] = ("id",)) -> Endpoint:
    return Endpoint(
        alias="Articles",
        primary_key=primary_key,  # type: ignore[arg-type]
        schema=MappingSchema({}),
        types=PydanticTypeRegistry(),
    )


def test_endpoint_defaults() -> None:
    endpoint = _endpoint()

    assert endpoint.registry_alias == "Articles"
    assert endpoint.key_delimiter == ";"
    assert isinstance(endpoint.hooks, NoopHooks)
    assert isinstance(endpoint.new_resource(), Resource)
    assert isinstance(endpoint.marshaller(), Marshaller)
    assert endpoint.marshaller().endpoint is endpoint


def test_empty_alias_is_rejected() -> None:
    with pytest.raises(ValueError, match="alias"):
        Endpoint(
            alias="",
            primary_key=("id",),
            schema=MappingSchema({}),
            types=PydanticTypeRegistry(),
        )


def test_primary_key_string_becomes_tuple() -> None:
    endpoint = _endpoint(primary_key="code")

    assert endpoint.primary_key == ("code",)
    assert primary_key_tuple(["site", "code"]) == ("site", "code")


def test_default_validator_always_exists() -> None:
    endpoint = _endpoint()

    assert isinstance(endpoint.validator("default"), AcceptAllValidator)
    assert endpoint.validator("strict") is None


def test_registered_validators_win() -> None:
    validator = StaticValidator()
    endpoint = _endpoint()

    endpoint.set_validator("default", validator)

    assert endpoint.validator("default") is validator
