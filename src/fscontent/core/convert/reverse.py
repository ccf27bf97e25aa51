#!/usr/bin/env python3
"""
Purpose:
    Reverse mapper: turns a typed update value back into the raw value that is
    spliced into the stored record. Each level returns a freshly built value;
    where the value lands in the record is the caller's concern.
"""
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from fscontent.core.constants import RECORD_TYPE_KEY
from fscontent.core.document.update import (
    UpdateListField,
    UpdateModelField,
    UpdateObjectField,
    UpdateOperationField,
    UpdateReferenceField,
)
from fscontent.core.schema.field_spec import FieldSpec, find_field
from fscontent.core.schema.field_type import FieldType
from fscontent.core.schema.model import Model


def map_update_operation_to_value(
    update_field: UpdateOperationField,
    models: Mapping[str, Model],
    field_spec: Optional[FieldSpec] = None,
) -> Any:
    """
    Map an update value to its raw representation.

    - object:    mapping of mapped children, child specs looked up in `field_spec.fields`
    - model:     mapping of mapped children, child specs looked up in the model
                 named by the update value's own `model_name`; the record keeps a
                 `type` key unless `field_spec.models[0]` already names that model
    - list:      list of mapped items; item spec chosen by type tag when
                 `field_spec.items` is a list, used directly when singular
    - reference: bare `ref_id`
    - others:    bare `value`

    A missing spec is tolerated at every level (children map without one).

    Round trips through the forward converter hold up to one redundant key:
    a record authored with an explicit `type` naming the default model maps
    back without that key. Both forms convert to the same document.
    """
    if isinstance(update_field, UpdateObjectField):
        child_specs = field_spec.fields if field_spec is not None else None
        return _map_children(update_field.fields, child_specs, models)

    if isinstance(update_field, UpdateModelField):
        child_model = models.get(update_field.model_name)
        child_specs = child_model.fields if child_model is not None else None
        mapped = _map_children(update_field.fields, child_specs, models)
        if _needs_type_key(update_field.model_name, field_spec):
            return {RECORD_TYPE_KEY: update_field.model_name, **mapped}
        return mapped

    if isinstance(update_field, UpdateListField):
        return [
            map_update_operation_to_value(item, models, _list_item_spec(field_spec, item.type))
            for item in update_field.items
        ]

    if isinstance(update_field, UpdateReferenceField):
        return update_field.ref_id

    return update_field.value


# --- Internals --- #

def _map_children(
    children: Mapping[str, UpdateOperationField],
    child_specs: Optional[list[FieldSpec]],
    models: Mapping[str, Model],
) -> Dict[str, Any]:
    return {
        name: map_update_operation_to_value(child, models, find_field(child_specs, name))
        for name, child in children.items()
    }


def _needs_type_key(model_name: str, field_spec: Optional[FieldSpec]) -> bool:
    """
    A nested record keeps its `type` unless the field spec would resolve the
    same model by default (its first allowed model). An authored `type` equal
    to that default is not reproduced.
    """
    allowed = field_spec.models if field_spec is not None else None
    return not allowed or allowed[0] != model_name


def _list_item_spec(field_spec: Optional[FieldSpec], item_type: str) -> Optional[FieldSpec]:
    """Item spec for a list update item; None when the spec is absent or not a list."""
    if field_spec is None or field_spec.field_type is not FieldType.LIST or field_spec.items is None:
        return None
    if isinstance(field_spec.items, list):
        return next((s for s in field_spec.items if s.field_type is FieldType.parse(item_type)), None)
    return field_spec.items
