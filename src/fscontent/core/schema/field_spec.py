#!/usr/bin/env python3
"""
Purpose:
    Defines the FieldSpec model: the declarative description of one field of a
    content model, with type-specific attributes for list, object and model
    fields.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from fscontent.core.schema.field_type import FieldType


# --- Model --- #

class FieldSpec(BaseModel):
    """
    One field in a content model.

    Common keys: name, type, label, description, required, default.
    Type-specific keys:
      - list:   items (one FieldSpec, or a list of them for polymorphic lists;
                defaults to a string item when omitted)
      - object: fields (list[FieldSpec])
      - model:  models (allowed model names; the first one is used when the raw
                value carries no `type` key)
      - enum:   options

    The `type` tag is kept as authored so that unknown tags survive loading and
    surface as an `UnsupportedFieldTypeError` at conversion time. Any other
    authoring keys are preserved as extras.
    """

    model_config = ConfigDict(extra="allow")

    # Common
    name: Optional[str] = Field(default=None, description="Field name (absent for list item specs).")
    type: str = Field(default=FieldType.STRING.value, description="Field type tag.")
    label: Optional[str] = Field(default=None, description="Human-readable label.")
    description: Optional[str] = Field(default=None, description="Human-readable description.")
    required: bool = Field(default=False, description="Whether this field is required.")
    default: Any | None = Field(default=None, description="Default value.")

    # Type-specific
    items: Union[FieldSpec, List[FieldSpec], None] = Field(default=None, description="List item spec(s).")
    fields: Optional[List[FieldSpec]] = Field(default=None, description="Nested object fields.")
    models: Optional[List[str]] = Field(default=None, description="Allowed model names.")
    options: Optional[List[Any]] = Field(default=None, description="Enum options.")

    @field_validator("type", mode="before")
    @classmethod
    def _normalize_type(cls, v: Any) -> str:
        if isinstance(v, FieldType):
            return v.value
        return "" if v is None else str(v).strip()

    # --- Convenience --- #

    @property
    def field_type(self) -> FieldType:
        """Parsed type tag (`FieldType.INVALID` for unknown tags)."""
        return FieldType.parse(self.type)

    @property
    def child_fields(self) -> List[FieldSpec]:
        """Nested object fields, or an empty list."""
        return list(self.fields or [])

    def item_specs(self) -> List[FieldSpec]:
        """
        Item specs of a list field, normalized to a list.

        A list without `items` holds strings.
        """
        if self.items is None:
            return [FieldSpec(type=FieldType.STRING)]
        if isinstance(self.items, list):
            return list(self.items)
        return [self.items]


def find_field(fields: Optional[Iterable[FieldSpec]], name: str) -> Optional[FieldSpec]:
    """Return the spec named `name` from `fields`, or None."""
    for spec in fields or ():
        if spec.name == name:
            return spec
    return None


FieldSpec.model_rebuild()
