#!/usr/bin/env python3
"""
Purpose:
    Defines the typed document field models produced by the forward converter:
    a tagged union over the field type tag, each variant carrying a scalar
    value, child fields, or reference/image sub-structure.
"""

from __future__ import annotations

from typing import Annotated, Any, Dict, List, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


ScalarTag = Literal[
    "string", "slug", "text", "html", "url", "boolean", "number",
    "date", "datetime", "enum", "json", "style", "color", "markdown",
]


class WireModel(BaseModel):
    """
    Base for host-facing models: snake_case attributes, camelCase wire names.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid", protected_namespaces=())

    def to_dict(self, *, json_safe: bool = False) -> Dict[str, Any]:
        """Dump with wire (camelCase) names; `json_safe` renders dates etc. as strings."""
        return self.model_dump(by_alias=True, mode="json" if json_safe else "python")


# --- Field variants --- #

class DocumentValueField(WireModel):
    """Scalar-like field: the raw value wrapped verbatim."""
    type: ScalarTag
    value: Any


class DocumentListField(WireModel):
    """Ordered list of converted items."""
    type: Literal["list"] = "list"
    items: List["DocumentField"] = Field(default_factory=list)


class DocumentObjectField(WireModel):
    """Anonymous nested object with named child fields."""
    type: Literal["object"] = "object"
    fields: Dict[str, "DocumentField"] = Field(default_factory=dict)


class DocumentModelField(WireModel):
    """Nested record typed by a named model."""
    type: Literal["model"] = "model"
    model_name: str = Field(..., alias="modelName")
    fields: Dict[str, "DocumentField"] = Field(default_factory=dict)


class DocumentReferenceField(WireModel):
    """Pointer to another document (or asset) by id."""
    type: Literal["reference"] = "reference"
    ref_type: Literal["document", "asset"] = Field(default="document", alias="refType")
    ref_id: Any = Field(..., alias="refId")


class DocumentImageField(WireModel):
    """Image path/url expanded into `title` and `url` sub-fields."""
    type: Literal["image"] = "image"
    fields: Dict[str, DocumentValueField] = Field(default_factory=dict)


# --- Discriminated union of all field variants --- #

DocumentField = Annotated[
    Union[
        DocumentValueField,
        DocumentListField,
        DocumentObjectField,
        DocumentModelField,
        DocumentReferenceField,
        DocumentImageField,
    ],
    Field(discriminator="type"),
]


# --- Forward-Ref Resolution --- #
for _cls in (DocumentListField, DocumentObjectField, DocumentModelField):
    _cls.model_rebuild()
