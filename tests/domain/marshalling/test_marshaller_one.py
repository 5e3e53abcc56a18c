from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, Any

import pytest

from marshalpy.app import build_endpoint
from marshalpy.domain.marshalling import InvalidValidatorConfigurationError
from marshalpy.domain.model import MarshalOptions, Resource
from tests.helpers.marshalling import RecordingHooks, StaticValidator

if TYPE_CHECKING:
    from marshalpy.config import MarshalConfig
    from marshalpy.domain.endpoint import Endpoint


def _hydrate(endpoint: Endpoint, data: dict[str, Any], **options: Any) -> Resource:
    resource = endpoint.new_entity(data, MarshalOptions(**options))
    assert isinstance(resource, Resource)
    return resource


def test_untyped_record_is_written_as_is(untyped: Endpoint) -> None:
    resource = _hydrate(untyped, {"id": 1, "title": "A", "tags": ["x"]})

    assert resource.to_dict() == {"id": 1, "title": "A", "tags": ["x"]}
    assert resource.is_new
    assert resource.source == "Notes"
    assert resource.errors == {}


def test_typed_fields_are_coerced(articles: Endpoint) -> None:
    resource = _hydrate(
        articles,
        {
            "id": "5",
            "title": 12,
            "published": "yes",
            "rating": "4.5",
            "published_on": "2024-02-01",
            "note": "kept",
        },
    )

    assert resource.to_dict() == {
        "id": 5,
        "title": "12",
        "published": True,
        "rating": 4.5,
        "published_on": date(2024, 2, 1),
        "note": "kept",
    }


def test_invalid_fields_are_marked_and_not_written(articles: Endpoint) -> None:
    articles.set_validator("default", StaticValidator({"title": ["too short"], "id": []}))

    resource = _hydrate(articles, {"id": 1, "title": "x"})

    assert not resource.has("title")
    assert resource.get("id") == 1
    assert resource.invalid_fields == {"title": "x"}
    assert resource.errors == {"title": ["too short"]}


def test_empty_string_primary_key_is_not_written(articles: Endpoint) -> None:
    resource = _hydrate(articles, {"id": "", "title": "A"})

    assert not resource.has("id")
    assert resource.get("title") == "A"


def test_validation_sees_new_record(articles: Endpoint) -> None:
    validator = StaticValidator()
    articles.set_validator("default", validator)

    _hydrate(articles, {"title": "A"})

    assert validator.calls == [({"title": "A"}, True)]


def test_named_validator_is_used(articles: Endpoint) -> None:
    strict = StaticValidator({"title": ["nope"]})
    articles.set_validator("strict", strict)

    resource = _hydrate(articles, {"title": "A"}, validate="strict")

    assert resource.errors == {"title": ["nope"]}


def test_unusable_validator_raises_before_writing(articles: Endpoint) -> None:
    with pytest.raises(InvalidValidatorConfigurationError):
        articles.new_entity({"title": "A"}, MarshalOptions(validate=42))


def test_nested_alias_payload_is_unwrapped(articles: Endpoint) -> None:
    resource = _hydrate(articles, {"Articles": {"title": "A"}})

    assert resource.to_dict() == {"title": "A"}


def test_alias_key_with_scalar_value_is_a_regular_field(articles: Endpoint) -> None:
    resource = _hydrate(articles, {"Articles": "plain", "title": "A"})

    assert resource.to_dict() == {"Articles": "plain", "title": "A"}


def test_field_list_restricts_writes_and_fires_after_hook(marshal_config: MarshalConfig) -> None:
    hooks = RecordingHooks()
    endpoint = build_endpoint(alias="Articles", hooks=[hooks], config=marshal_config)

    resource = endpoint.new_entity(
        {"id": 1, "title": "A", "body": "text"},
        MarshalOptions(field_list=["title", "missing"]),
    )

    assert isinstance(resource, Resource)
    assert resource.to_dict() == {"title": "A"}
    assert len(hooks.after_calls) == 1
    entity, data, options = hooks.after_calls[0]
    assert entity is resource
    assert data == {"id": 1, "title": "A", "body": "text"}
    assert options.field_list == ["title", "missing"]


def test_after_hook_not_fired_without_field_list(marshal_config: MarshalConfig) -> None:
    hooks = RecordingHooks()
    endpoint = build_endpoint(alias="Articles", hooks=[hooks], config=marshal_config)

    endpoint.new_entity({"title": "A"})

    assert len(hooks.before_calls) == 1
    assert hooks.after_calls == []


def test_field_list_ignores_accessibility(articles: Endpoint) -> None:
    resource = _hydrate(
        articles,
        {"title": "A"},
        field_list=["title"],
        accessible_fields={"title": False},
    )

    assert resource.get("title") == "A"


def test_accessible_fields_guard_bulk_writes(articles: Endpoint) -> None:
    resource = _hydrate(
        articles,
        {"id": 1, "title": "A"},
        accessible_fields={"*": False, "title": True},
    )

    assert resource.to_dict() == {"title": "A"}
    assert not resource.is_accessible("id")


def test_before_hook_may_replace_data_and_options(marshal_config: MarshalConfig) -> None:
    def rewrite(
        data: dict[str, Any], options: MarshalOptions
    ) -> tuple[dict[str, Any], MarshalOptions]:
        replaced = options.copy()
        replaced.field_list = ["slug"]
        return {**data, "slug": str(data["title"]).lower()}, replaced

    endpoint = build_endpoint(
        alias="Articles", hooks=[RecordingHooks(rewrite)], config=marshal_config
    )

    resource = endpoint.new_entity({"title": "Hello"})

    assert isinstance(resource, Resource)
    assert resource.to_dict() == {"slug": "hello"}


def test_caller_options_are_not_mutated(marshal_config: MarshalConfig) -> None:
    def tag(
        data: dict[str, Any], options: MarshalOptions
    ) -> tuple[dict[str, Any], MarshalOptions]:
        options.extra["seen"] = True
        options.field_list = ["title"]
        return data, options

    endpoint = build_endpoint(alias="Articles", hooks=[RecordingHooks(tag)], config=marshal_config)
    options = MarshalOptions()

    endpoint.new_entity({"title": "A"}, options)

    assert options.extra == {}
    assert options.field_list is None
    assert options.validate is None


def test_many_hydrates_mappings_and_skips_the_rest(articles: Endpoint) -> None:
    resources = articles.new_entities([{"id": 1}, "garbage", None, {"id": 2}])

    assert [resource.get("id") for resource in resources] == [1, 2]


def test_custom_resource_factory_and_registry_alias(marshal_config: MarshalConfig) -> None:
    class Article(Resource):
        pass

    endpoint = build_endpoint(
        alias="Articles",
        registry_alias="Blog.Articles",
        resource_factory=Article,
        config=marshal_config,
    )

    resource = endpoint.new_entity({"title": "A"})

    assert isinstance(resource, Article)
    assert resource.source == "Blog.Articles"
