#!/usr/bin/env python3
"""
Purpose:
    Defines the Model: a named content type with an ordered list of field specs.
"""

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from fscontent.core.schema.field_spec import FieldSpec, find_field


class Model(BaseModel):
    """
    A content model.

    Fields:
    -------
    name:
        model identifier, matched against the `type` key of raw records and
        against `FieldSpec.models` of `model` fields
    fields:
        ordered list of `FieldSpec` entries (names unique within the model)

    Extra authoring keys (e.g. `label`, `filePath`) are kept but not interpreted.
    """

    model_config = ConfigDict(extra="allow")

    name: str = Field(..., description="Model name.")
    label: Optional[str] = Field(default=None, description="Human-readable label.")
    fields: List[FieldSpec] = Field(default_factory=list)

    @field_validator("name", mode="before")
    @classmethod
    def _normalize_name(cls, v: Any) -> str:
        s = "" if v is None else str(v).strip()
        if not s:
            raise ValueError("The 'name' key is not set")
        return s

    @field_validator("fields", mode="before")
    @classmethod
    def _none_to_empty(cls, v: Any) -> Any:
        return [] if v is None else v

    def field(self, name: str) -> Optional[FieldSpec]:
        """Return the field spec called `name`, or None."""
        return find_field(self.fields, name)
