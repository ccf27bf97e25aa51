#!/usr/bin/env python3
"""
Purpose:
    Document and Asset envelopes: identity, lifecycle timestamps, constant
    management metadata and the field mapping.
"""
from __future__ import annotations

from typing import Any, Dict, Literal

from pydantic import Field

from fscontent.core.constants import ASSET_FILE_FIELD_TYPE, DEFAULT_MANAGE_URL, DEFAULT_STATUS
from fscontent.core.document.fields import DocumentField, DocumentValueField, WireModel


class _Envelope(WireModel):
    """Fields shared by documents and assets."""
    id: str = Field(..., description="Path relative to the enumerating root.")
    manage_url: str = Field(default=DEFAULT_MANAGE_URL, alias="manageUrl")
    status: str = Field(default=DEFAULT_STATUS)
    context: Dict[str, Any] = Field(default_factory=dict)
    created_at: str = Field(..., alias="createdAt")
    updated_at: str = Field(..., alias="updatedAt")


class Document(_Envelope):
    """
    A typed content document.

    Typical use:
        >>> doc = convert_document("content/post.md", path, record, registry)
        >>> doc.fields["title"].value
        'Hi'
    """
    type: Literal["document"] = "document"
    model_name: str = Field(..., alias="modelName")
    fields: Dict[str, DocumentField] = Field(default_factory=dict)


class AssetFileField(WireModel):
    type: Literal["assetFile"] = ASSET_FILE_FIELD_TYPE
    url: str
    file_name: str = Field(..., alias="fileName")
    dimensions: Dict[str, Any] = Field(default_factory=dict)


class AssetFields(WireModel):
    file: AssetFileField
    title: DocumentValueField


class Asset(_Envelope):
    """A file under the assets directory; shape is fixed (`file` + `title`)."""
    type: Literal["asset"] = "asset"
    fields: AssetFields
