#!/usr/bin/env python3
"""
Exception types raised by the fscontent conversion engine and record editor.

Soft failures (missing field spec, unset value, unknown model) are logged and
skipped; only the conditions below propagate.
"""
from __future__ import annotations

from typing import Optional


class ContentSourceError(Exception):
    """Base class for fscontent errors."""


class UnsupportedFieldTypeError(ContentSourceError, ValueError):
    """A field spec carries a type tag the converter does not handle."""

    def __init__(self, field_type: str, field_name: Optional[str] = None):
        self.field_type = field_type
        self.field_name = field_name
        where = f" (field {field_name!r})" if field_name else ""
        super().__init__(f"Unsupported type: {field_type!r}{where}")


class FieldPathError(ContentSourceError, ValueError):
    """A field path is malformed or addresses a value of the wrong shape."""

    def __init__(self, path: object, message: str):
        self.path = path
        super().__init__(f"{message} at {path!r}")
