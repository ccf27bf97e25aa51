#!/usr/bin/env python3
"""
Purpose:
    Typed update values and update operations (set / unset / insert / remove /
    reorder) consumed by the reverse mapper and the field-path editor.
"""

from __future__ import annotations

from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import Field, TypeAdapter

from fscontent.core.document.fields import WireModel
from fscontent.core.schema.field_spec import FieldSpec


# --- Update values --- #

class UpdateValueField(WireModel):
    """Scalar-like update value (image updates carry the url/path as `value`)."""
    type: Literal[
        "string", "slug", "text", "html", "url", "boolean", "number",
        "date", "datetime", "enum", "json", "style", "color", "markdown", "image",
    ]
    value: Any = None


class UpdateListField(WireModel):
    type: Literal["list"] = "list"
    items: List["UpdateOperationField"] = Field(default_factory=list)


class UpdateObjectField(WireModel):
    type: Literal["object"] = "object"
    fields: Dict[str, "UpdateOperationField"] = Field(default_factory=dict)


class UpdateModelField(WireModel):
    type: Literal["model"] = "model"
    model_name: str = Field(..., alias="modelName")
    fields: Dict[str, "UpdateOperationField"] = Field(default_factory=dict)


class UpdateReferenceField(WireModel):
    type: Literal["reference"] = "reference"
    ref_type: Literal["document", "asset"] = Field(default="document", alias="refType")
    ref_id: Any = Field(..., alias="refId")


UpdateOperationField = Annotated[
    Union[UpdateValueField, UpdateListField, UpdateObjectField, UpdateModelField, UpdateReferenceField],
    Field(discriminator="type"),
]


# --- Operations --- #

# "a.b[0].c" or ["a", "b", 0, "c"]
FieldPath = Union[str, List[Union[int, str]]]


class _Operation(WireModel):
    field_path: FieldPath = Field(..., alias="fieldPath")
    model_field: Optional[FieldSpec] = Field(default=None, alias="modelField")


class SetOperation(_Operation):
    op_type: Literal["set"] = Field(default="set", alias="opType")
    field: UpdateOperationField


class UnsetOperation(_Operation):
    op_type: Literal["unset"] = Field(default="unset", alias="opType")


class InsertOperation(_Operation):
    op_type: Literal["insert"] = Field(default="insert", alias="opType")
    item: UpdateOperationField
    index: Optional[int] = None


class RemoveOperation(_Operation):
    op_type: Literal["remove"] = Field(default="remove", alias="opType")
    index: int


class ReorderOperation(_Operation):
    op_type: Literal["reorder"] = Field(default="reorder", alias="opType")
    order: List[int]


UpdateOperation = Annotated[
    Union[SetOperation, UnsetOperation, InsertOperation, RemoveOperation, ReorderOperation],
    Field(discriminator="op_type"),
]


# --- Forward-Ref Resolution --- #
for _cls in (UpdateListField, UpdateObjectField, UpdateModelField):
    _cls.model_rebuild()

# Adapters for parsing raw payloads (CLI, host bridges, tests)
update_field_adapter: TypeAdapter = TypeAdapter(UpdateOperationField)
update_operations_adapter: TypeAdapter = TypeAdapter(List[UpdateOperation])
