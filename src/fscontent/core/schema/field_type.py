#!/usr/bin/env python3
"""
Purpose:
    Defines the FieldType enumeration for fscontent model schemas, along with
    helpers for parsing and introspection of field types.
"""

from __future__ import annotations

from enum import Enum


class FieldType(str, Enum):
    """
    Supported field types in a content model.

    - string .. markdown : scalar-like, stored and returned verbatim
    - list      : ordered items, single or polymorphic item spec
    - object    : mapping with named nested fields
    - model     : nested record typed by one of the allowed models
    - reference : id/path of another document
    - image     : path/url to an image file
    - invalid   : unrecognized/unsupported type (returned by `parse`)
    """

    STRING = "string"
    SLUG = "slug"
    TEXT = "text"
    HTML = "html"
    URL = "url"
    BOOLEAN = "boolean"
    NUMBER = "number"
    DATE = "date"
    DATETIME = "datetime"
    ENUM = "enum"
    JSON = "json"
    STYLE = "style"
    COLOR = "color"
    MARKDOWN = "markdown"
    LIST = "list"
    OBJECT = "object"
    MODEL = "model"
    REFERENCE = "reference"
    IMAGE = "image"
    INVALID = "invalid"

    # --- Parsing helpers --- #

    @classmethod
    def parse(cls, value: str | FieldType | None) -> FieldType:
        """
        Coerce arbitrary input to a `FieldType`.

        - `FieldType` instance → returned as-is
        - `None` or unknown strings → `FieldType.INVALID`
        - strings are trimmed and lowercased before lookup

        Examples
        --------
        >>> FieldType.parse(" Markdown ")
        <FieldType.MARKDOWN: 'markdown'>
        >>> FieldType.parse("richText")
        <FieldType.INVALID: 'invalid'>
        """
        if isinstance(value, FieldType):
            return value
        if value is None:
            return cls.INVALID
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.INVALID

    @classmethod
    def try_parse(cls, value: str | FieldType | None) -> FieldType | None:
        """
        Like `parse`, but returns `None` for unknowns instead of `FieldType.INVALID`.
        """
        ft = cls.parse(value)
        return None if ft is cls.INVALID else ft

    # --- Introspection helpers --- #

    def is_scalar_like(self) -> bool:
        """True if values of this type are wrapped verbatim as `{type, value}`."""
        return self in SCALAR_LIKE_TYPES

    def is_container(self) -> bool:
        """True if the field holds child fields (list, object or model)."""
        return self in {FieldType.LIST, FieldType.OBJECT, FieldType.MODEL}


SCALAR_LIKE_TYPES: frozenset[FieldType] = frozenset({
    FieldType.STRING,
    FieldType.SLUG,
    FieldType.TEXT,
    FieldType.HTML,
    FieldType.URL,
    FieldType.BOOLEAN,
    FieldType.NUMBER,
    FieldType.DATE,
    FieldType.DATETIME,
    FieldType.ENUM,
    FieldType.JSON,
    FieldType.STYLE,
    FieldType.COLOR,
    FieldType.MARKDOWN,
})
