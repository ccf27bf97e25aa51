#!/usr/bin/env python3
"""
Purpose:
    Forward converter: turns an untyped raw record into typed document fields,
    guided by the model's field specs.

Failure posture:
    - missing field spec, unset value, unresolved nested model → field skipped
    - object/list/model value of the wrong shape → field skipped (logged)
    - unknown field type tag → `UnsupportedFieldTypeError` (aborts the record)
"""
from __future__ import annotations

import logging
from pathlib import PurePosixPath
from typing import Any, Dict, List, Mapping, Optional, Sequence

from fscontent.core.constants import RECORD_TYPE_KEY, RESERVED_RECORD_KEYS
from fscontent.core.document.fields import (
    DocumentField,
    DocumentImageField,
    DocumentListField,
    DocumentModelField,
    DocumentObjectField,
    DocumentReferenceField,
    DocumentValueField,
)
from fscontent.core.exceptions import UnsupportedFieldTypeError
from fscontent.core.schema.field_spec import FieldSpec, find_field
from fscontent.core.schema.field_type import FieldType
from fscontent.core.schema.model import Model

logger = logging.getLogger(__name__)


# --- Public API --- #

def convert_fields(
    raw_fields: Mapping[str, Any],
    field_specs: Optional[Sequence[FieldSpec]],
    models: Mapping[str, Model],
) -> Dict[str, DocumentField]:
    """
    Convert each `(name, value)` of `raw_fields` against the spec of the same name.

    Entries without a matching spec, or holding an unset value (see
    `is_unset_value`), are left out. Empty lists and mappings are kept.
    Raw key order is preserved.
    """
    result: Dict[str, DocumentField] = {}
    for name, value in raw_fields.items():
        spec = find_field(field_specs, name)
        if spec is None or is_unset_value(value):
            continue
        converted = convert_field_type(value, spec, models)
        if converted is not None:
            result[name] = converted
    return result


def convert_field_type(value: Any, spec: FieldSpec, models: Mapping[str, Model]) -> Optional[DocumentField]:
    """
    Convert one raw value according to `spec.type`.

    Returns None when the value cannot be placed: a `model` value whose model
    cannot be resolved, or a container field holding a value of the wrong shape.

    Raises:
        UnsupportedFieldTypeError: if the spec's type tag is unknown.
    """
    ft = spec.field_type

    if ft.is_scalar_like():
        return DocumentValueField(type=ft.value, value=value)
    if ft is FieldType.LIST:
        return _convert_list(value, spec, models)
    if ft is FieldType.OBJECT:
        if not isinstance(value, Mapping):
            _log_shape_mismatch(spec, "a mapping", value)
            return None
        return DocumentObjectField(fields=convert_fields(value, spec.child_fields, models))
    if ft is FieldType.MODEL:
        return _convert_model(value, spec, models)
    if ft is FieldType.REFERENCE:
        return DocumentReferenceField(ref_type="document", ref_id=value)
    if ft is FieldType.IMAGE:
        return _convert_image(value)

    raise UnsupportedFieldTypeError(spec.type, spec.name)


def split_record(record: Mapping[str, Any]) -> tuple[Optional[str], Dict[str, Any]]:
    """Return (`type` discriminator, remaining fields) with `id`/`type` stripped."""
    model_name = record.get(RECORD_TYPE_KEY)
    fields = {k: v for k, v in record.items() if k not in RESERVED_RECORD_KEYS}
    return model_name, fields


def is_unset_value(value: Any) -> bool:
    """
    True for values that carry nothing to convert: None, False, "", and zero
    or NaN numbers. Empty lists and mappings are authored content and count as set.
    """
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == 0 or value != value
    return False


# --- Internals --- #

def _convert_list(value: Any, spec: FieldSpec, models: Mapping[str, Model]) -> Optional[DocumentListField]:
    if not isinstance(value, (list, tuple)):
        _log_shape_mismatch(spec, "a list", value)
        return None
    item_specs = spec.item_specs()
    items: List[DocumentField] = []
    for raw_item in value:
        item_spec = _select_item_spec(raw_item, item_specs, models)
        converted = convert_field_type(raw_item, item_spec, models)
        if converted is not None:
            items.append(converted)
    return DocumentListField(items=items)


def _select_item_spec(raw_item: Any, item_specs: List[FieldSpec], models: Mapping[str, Model]) -> FieldSpec:
    """
    Pick the item spec for one element of a (possibly polymorphic) list.

    Single spec → used as-is. Several specs → mappings go to the `model` spec
    that allows the element's own `type`, then any `model`/`object` spec;
    nested lists go to a `list` spec; other values go to the first
    non-container spec. Falls back to the first spec.
    """
    if len(item_specs) == 1:
        return item_specs[0]

    if isinstance(raw_item, Mapping):
        own_type = raw_item.get(RECORD_TYPE_KEY)
        for s in item_specs:
            if s.field_type is FieldType.MODEL and own_type in (s.models or []):
                return s
        for s in item_specs:
            if s.field_type in (FieldType.MODEL, FieldType.OBJECT):
                return s
    elif isinstance(raw_item, list):
        for s in item_specs:
            if s.field_type is FieldType.LIST:
                return s
    else:
        for s in item_specs:
            if not s.field_type.is_container():
                return s
    return item_specs[0]


def _convert_model(value: Any, spec: FieldSpec, models: Mapping[str, Model]) -> Optional[DocumentModelField]:
    if not isinstance(value, Mapping):
        _log_shape_mismatch(spec, "a nested record", value)
        return None
    own_type, fields = split_record(value)
    model_name = own_type if own_type is not None else next(iter(spec.models or []), None)
    model = models.get(model_name) if model_name is not None else None
    if model is None:
        logger.error("No model for type: %r (field %r)", model_name, spec.name)
        return None
    return DocumentModelField(model_name=model.name, fields=convert_fields(fields, model.fields, models))


def _log_shape_mismatch(spec: FieldSpec, expected: str, value: Any) -> None:
    logger.error("Expected %s for %s field %r, got %s", expected, spec.type, spec.name, type(value).__name__)


def _convert_image(value: Any) -> DocumentImageField:
    path = str(value)
    return DocumentImageField(
        fields={
            "title": DocumentValueField(type="string", value=PurePosixPath(path).stem),
            "url": DocumentValueField(type="string", value=value),
        }
    )
