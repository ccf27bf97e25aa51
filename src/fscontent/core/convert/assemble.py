#!/usr/bin/env python3
"""
Purpose:
    Assembles Document and Asset envelopes around converted fields: identity,
    lifecycle timestamps from file metadata, and constant management metadata.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path, PurePosixPath
from typing import Any, Mapping, Optional, Union

from fscontent.core.convert.forward import convert_fields, split_record
from fscontent.core.document.document import Asset, AssetFields, AssetFileField, Document
from fscontent.core.document.fields import DocumentValueField
from fscontent.core.schema.model import Model
from fscontent.core.storage.files import file_metadata

logger = logging.getLogger(__name__)


def convert_document(
    document_id: str,
    file_path: Union[str, Path],
    record: Mapping[str, Any],
    models: Mapping[str, Model],
) -> Optional[Document]:
    """
    Build a Document from a raw record.

    `document_id` is the file path relative to the project root; `file_path`
    is where timestamps are read from. Returns None when the record's `type`
    names no known model.

    Raises:
        UnsupportedFieldTypeError: if a field spec carries an unknown type tag.
    """
    model_name, fields = split_record(record)
    model = models.get(model_name) if isinstance(model_name, str) else None
    if model is None:
        logger.debug("No model for record %r (type %r)", document_id, model_name)
        return None

    created_at, updated_at = get_file_dates(file_path)
    return Document(
        id=document_id,
        model_name=model.name,
        created_at=created_at,
        updated_at=updated_at,
        fields=convert_fields(fields, model.fields, models),
    )


def convert_asset(asset_id: str, file_path: Union[str, Path], public_path: Optional[str] = None) -> Asset:
    """
    Build an Asset for a file under the assets directory.

    The shape is fixed: a `file` descriptor (url = public_path + id) and a
    `title` holding the file's basename.
    """
    created_at, updated_at = get_file_dates(file_path)
    return Asset(
        id=asset_id,
        created_at=created_at,
        updated_at=updated_at,
        fields=AssetFields(
            file=AssetFileField(url=(public_path or "") + asset_id, file_name=asset_id),
            title=DocumentValueField(type="string", value=PurePosixPath(asset_id).name),
        ),
    )


def get_file_dates(file_path: Union[str, Path]) -> tuple[str, str]:
    """(createdAt, updatedAt) as ISO-8601 UTC strings; current time when stat fails."""
    meta = file_metadata(file_path)
    now = datetime.now(timezone.utc)
    created = meta.created_at if meta else now
    updated = meta.modified_at if meta else now
    return format_timestamp(created), format_timestamp(updated)


def format_timestamp(dt: datetime) -> str:
    """`2024-05-01T12:00:00.000Z` style UTC timestamp."""
    return dt.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
