from __future__ import annotations

import pytest

from marshalpy.app import build_endpoint
from marshalpy.config import MarshalConfig
from marshalpy.domain.endpoint import Endpoint


@pytest.fixture(autouse=True)
def _clean_marshal_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MARSHALPY_KEY_DELIMITER", raising=False)
    monkeypatch.delenv("MARSHALPY_LOG_LEVEL", raising=False)


@pytest.fixture
def marshal_config() -> MarshalConfig:
    return MarshalConfig()


@pytest.fixture
def articles(marshal_config: MarshalConfig) -> Endpoint:
    return build_endpoint(
        alias="Articles",
        primary_key="id",
        columns={
            "id": "integer",
            "title": "string",
            "published": "boolean",
            "rating": "float",
            "published_on": "date",
        },
        config=marshal_config,
    )


@pytest.fixture
def untyped(marshal_config: MarshalConfig) -> Endpoint:
    return build_endpoint(alias="Notes", primary_key="id", config=marshal_config)
