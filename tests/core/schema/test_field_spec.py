#!/usr/bin/env python3
import pytest
from pydantic import ValidationError

from fscontent.core.schema.field_spec import FieldSpec, find_field
from fscontent.core.schema.field_type import FieldType
from fscontent.core.schema.model import Model


# --- FieldSpec --- #

def test_unknown_type_tag_is_kept_as_authored():
    spec = FieldSpec.model_validate({"name": "x", "type": " richText "})
    assert spec.type == "richText"
    assert spec.field_type is FieldType.INVALID


def test_list_without_items_defaults_to_string_items():
    spec = FieldSpec.model_validate({"name": "tags", "type": "list"})
    items = spec.item_specs()
    assert len(items) == 1
    assert items[0].field_type is FieldType.STRING


def test_list_items_single_and_polymorphic():
    single = FieldSpec.model_validate({"name": "a", "type": "list", "items": {"type": "number"}})
    assert isinstance(single.items, FieldSpec)
    assert [s.type for s in single.item_specs()] == ["number"]

    poly = FieldSpec.model_validate({
        "name": "b",
        "type": "list",
        "items": [{"type": "string"}, {"type": "model", "models": ["author"]}],
    })
    assert isinstance(poly.items, list)
    assert [s.type for s in poly.item_specs()] == ["string", "model"]


def test_nested_object_fields_and_extras():
    spec = FieldSpec.model_validate({
        "name": "seo",
        "type": "object",
        "label": "SEO",
        "group": "meta",
        "fields": [{"name": "description", "type": "text"}],
    })
    assert [f.name for f in spec.child_fields] == ["description"]
    assert spec.model_extra == {"group": "meta"}


def test_find_field():
    fields = [FieldSpec(name="a"), FieldSpec(name="b", type="number")]
    assert find_field(fields, "b").type == "number"
    assert find_field(fields, "c") is None
    assert find_field(None, "a") is None


# --- Model --- #

def test_model_requires_name():
    with pytest.raises(ValidationError, match=r"'name' key is not set"):
        Model.model_validate({"name": "  ", "fields": []})


def test_model_field_lookup_and_null_fields():
    m = Model.model_validate({"name": "post", "fields": None})
    assert m.fields == []
    m = Model.model_validate({"name": "post", "fields": [{"name": "title"}]})
    assert m.field("title").field_type is FieldType.STRING
    assert m.field("missing") is None
