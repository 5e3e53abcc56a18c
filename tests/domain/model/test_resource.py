from __future__ import annotations

from marshalpy.domain.model import ALL_FIELDS, Resource


def test_set_marks_field_dirty_and_keeps_first_original() -> None:
    resource = Resource.persisted({"title": "A"})

    resource.set("title", "B")
    resource.set("title", "C")

    assert resource.get("title") == "C"
    assert resource.get_original("title") == "A"
    assert resource.dirty_fields == ("title",)


def test_set_marks_dirty_even_for_identical_value() -> None:
    resource = Resource.persisted({"title": "A"})

    resource.set("title", "A")

    assert resource.is_dirty("title")


def test_persisted_resource_is_clean_and_not_new() -> None:
    resource = Resource.persisted({"id": 1, "title": "A"}, source="Articles")

    assert not resource.is_new
    assert not resource.is_dirty()
    assert resource.source == "Articles"
    assert resource.to_dict() == {"id": 1, "title": "A"}


def test_new_resource_defaults() -> None:
    resource = Resource()

    assert resource.is_new
    assert resource.source is None
    assert resource.fields == ()
    assert not resource.has_errors()


def test_set_many_skips_inaccessible_fields() -> None:
    resource = Resource()
    resource.set_access("secret", False)

    resource.set_many({"title": "A", "secret": "x"})

    assert resource.to_dict() == {"title": "A"}


def test_set_many_without_guard_writes_everything() -> None:
    resource = Resource()
    resource.set_access("secret", False)

    resource.set_many({"secret": "x"}, guard=False)

    assert resource.get("secret") == "x"


def test_wildcard_access_resets_field_overrides() -> None:
    resource = Resource()
    resource.set_access("title", True)
    resource.set_access(ALL_FIELDS, False)

    assert not resource.is_accessible("title")
    assert not resource.is_accessible("body")

    resource.set_access("body", True)

    assert resource.is_accessible("body")


def test_extract_reports_missing_fields_as_none() -> None:
    resource = Resource.persisted({"site": "a"})

    assert resource.extract(["site", "code"]) == {"site": "a", "code": None}


def test_set_errors_replaces_map_and_drops_empty_entries() -> None:
    resource = Resource()
    resource.set_errors({"title": ["required"]})

    resource.set_errors({"body": ["too long"], "title": []})

    assert resource.errors == {"body": ["too long"]}
    assert resource.get_error("title") == []


def test_clean_forgets_tracking_state() -> None:
    resource = Resource()
    resource.set("title", "A")
    resource.set_invalid_field("rating", "abc")
    resource.set_errors({"rating": ["not a number"]})

    resource.clean()

    assert not resource.is_dirty()
    assert resource.invalid_fields == {}
    assert resource.errors == {}
    assert resource.get("title") == "A"


def test_unset_removes_value_and_dirty_marker() -> None:
    resource = Resource()
    resource.set("title", "A")

    resource.unset("title")

    assert not resource.has("title")
    assert not resource.is_dirty("title")
