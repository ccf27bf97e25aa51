#!/usr/bin/env python3
import logging

import pytest

from fscontent.core.convert.forward import convert_field_type, convert_fields, split_record
from fscontent.core.exceptions import UnsupportedFieldTypeError
from fscontent.core.schema.field_spec import FieldSpec


def _dump(fields):
    return {name: f.to_dict() for name, f in fields.items()}


# --- Scenarios --- #

def test_post_scenario_string_and_list(registry):
    record = {"id": "x", "type": "post", "title": "Hi", "tags": ["a", "b"]}
    model_name, raw = split_record(record)
    assert model_name == "post"
    assert raw == {"title": "Hi", "tags": ["a", "b"]}

    fields = convert_fields(raw, registry["post"].fields, registry)
    assert _dump(fields) == {
        "title": {"type": "string", "value": "Hi"},
        "tags": {
            "type": "list",
            "items": [{"type": "string", "value": "a"}, {"type": "string", "value": "b"}],
        },
    }


def test_image_scenario(registry):
    field = convert_field_type("/img/cat.png", FieldSpec(name="hero", type="image"), registry)
    assert field.to_dict() == {
        "type": "image",
        "fields": {
            "title": {"type": "string", "value": "cat"},
            "url": {"type": "string", "value": "/img/cat.png"},
        },
    }


def test_unknown_type_tag_raises():
    with pytest.raises(UnsupportedFieldTypeError, match="unsupported") as exc:
        convert_fields({"x": 1}, [FieldSpec(name="x", type="unsupported")], {})
    assert exc.value.field_type == "unsupported"
    assert exc.value.field_name == "x"


def test_unknown_type_tag_inside_nested_object_aborts_whole_conversion():
    spec = FieldSpec.model_validate({
        "name": "outer",
        "type": "object",
        "fields": [{"name": "ok", "type": "string"}, {"name": "bad", "type": "richText"}],
    })
    with pytest.raises(UnsupportedFieldTypeError):
        convert_fields({"outer": {"ok": "a", "bad": "b"}}, [spec], {})


# --- Soft skips --- #

@pytest.mark.parametrize("value", [None, "", 0, 0.0, False, float("nan")])
def test_unset_values_are_dropped(registry, value):
    fields = convert_fields({"title": value, "slug": "kept"}, registry["post"].fields, registry)
    assert list(fields) == ["slug"]


def test_empty_containers_are_kept(registry):
    fields = convert_fields({"tags": [], "seo": {}}, registry["post"].fields, registry)
    assert _dump(fields) == {
        "tags": {"type": "list", "items": []},
        "seo": {"type": "object", "fields": {}},
    }


@pytest.mark.parametrize("raw,name", [
    ({"seo": "just-a-string"}, "seo"),
    ({"tags": 5}, "tags"),
    ({"author": ["not", "a", "record"]}, "author"),
])
def test_container_value_of_wrong_shape_drops_only_that_field(registry, caplog, raw, name):
    with caplog.at_level(logging.ERROR, logger="fscontent.core.convert.forward"):
        fields = convert_fields({**raw, "title": "t"}, registry["post"].fields, registry)
    assert list(fields) == ["title"]
    assert repr(name) in caplog.text


def test_fields_without_spec_are_dropped(registry):
    fields = convert_fields({"title": "t", "unknown": "u"}, registry["post"].fields, registry)
    assert list(fields) == ["title"]


def test_scalar_values_are_not_coerced(registry):
    fields = convert_fields(
        {"views": "12", "featured": True, "date": "2024-01-01"}, registry["post"].fields, registry
    )
    assert fields["views"].value == "12"
    assert fields["featured"].value is True
    assert fields["date"].to_dict() == {"type": "date", "value": "2024-01-01"}


# --- Nested types --- #

def test_object_field_recurses(registry):
    fields = convert_fields(
        {"seo": {"description": "d", "keywords": ["k"], "stray": 1}}, registry["post"].fields, registry
    )
    assert fields["seo"].to_dict() == {
        "type": "object",
        "fields": {
            "description": {"type": "text", "value": "d"},
            "keywords": {"type": "list", "items": [{"type": "string", "value": "k"}]},
        },
    }


def test_model_field_defaults_to_first_allowed_model(registry):
    fields = convert_fields({"author": {"name": "Ann", "id": "a1"}}, registry["post"].fields, registry)
    assert fields["author"].to_dict() == {
        "type": "model",
        "modelName": "author",
        "fields": {"name": {"type": "string", "value": "Ann"}},
    }


def test_model_field_uses_own_type_discriminator(registry):
    spec = registry["post"].field("sections")
    field = convert_field_type(
        [{"type": "cta_section", "label": "Go", "link": "/go"}, {"heading": "Top"}], spec, registry
    )
    assert [(i.model_name, list(i.fields)) for i in field.items] == [
        ("cta_section", ["label", "link"]),
        ("hero_section", ["heading"]),
    ]


def test_unresolved_model_drops_only_that_field(registry, caplog):
    spec = FieldSpec(name="thing", type="model")  # no allowed models
    with caplog.at_level(logging.ERROR, logger="fscontent.core.convert.forward"):
        fields = convert_fields({"thing": {"a": 1}, "title": "t"}, [spec, registry["post"].field("title")], registry)
    assert list(fields) == ["title"]
    assert "No model for type" in caplog.text


def test_list_drops_unresolved_items_and_keeps_order(registry):
    spec = FieldSpec.model_validate({"name": "s", "type": "list", "items": {"type": "model", "models": ["author"]}})
    field = convert_field_type(
        [{"name": "A"}, {"type": "ghost"}, {"name": "C"}], spec, registry
    )
    assert [i.fields["name"].value for i in field.items] == ["A", "C"]


def test_list_order_preserved_when_nothing_dropped(registry):
    field = convert_field_type(["c", "a", "b"], registry["post"].field("tags"), registry)
    assert [i.value for i in field.items] == ["c", "a", "b"]


def test_polymorphic_list_selects_item_spec_by_shape(registry):
    spec = FieldSpec.model_validate({
        "name": "mixed",
        "type": "list",
        "items": [{"type": "string"}, {"type": "model", "models": ["author"]}],
    })
    field = convert_field_type(["plain", {"name": "Ann"}], spec, registry)
    assert [i.type for i in field.items] == ["string", "model"]


def test_reference_field(registry):
    field = convert_field_type("content/other.md", registry["post"].field("related"), registry)
    assert field.to_dict() == {"type": "reference", "refType": "document", "refId": "content/other.md"}


# --- Properties --- #

def test_conversion_is_idempotent(registry):
    raw = {
        "title": "Hi",
        "tags": ["a"],
        "author": {"name": "Ann"},
        "seo": {"description": "d"},
        "sections": [{"type": "cta_section", "label": "Go"}],
        "hero": "/img/a.jpg",
    }
    first = convert_fields(raw, registry["post"].fields, registry)
    second = convert_fields(raw, registry["post"].fields, registry)
    assert _dump(first) == _dump(second)
