#!/usr/bin/env python3
"""
Formatting helpers for fscontent.

- One-line formatting for Pydantic v2 `ValidationError` (model files, update
  operation payloads).
- Dotted/indexed rendering of field paths for log and error messages.
"""
from __future__ import annotations

from typing import Any, Iterable, List, Sequence

from pydantic import ValidationError


# --- Public API --- #

def format_pydantic_errors_simple(exc: ValidationError) -> List[str]:
    """
    Return stable one-line messages from a Pydantic v2 ValidationError.

    Example:
        fields[1].name: Input should be a valid string
    """
    errors: Sequence[dict[str, Any]] = exc.errors()
    if not errors:
        return [str(exc).splitlines()[0]]

    msgs: List[str] = []
    for err in errors:
        path = format_path(err.get("loc", ()))
        msgs.append(f"{path}: {err.get('msg', 'Validation error')}")
    return msgs


def format_path(loc: Iterable[Any]) -> str:
    """
    Convert a sequence of path segments into a dotted path with index suffixes.

    Examples:
        ('fields', 1, 'name') -> "fields[1].name"
        (0, 'items')          -> "[0].items"
        ()                    -> "<root>"
    """
    parts: List[str] = []
    for seg in loc:
        if isinstance(seg, int):
            if parts:
                parts[-1] = f"{parts[-1]}[{seg}]"
            else:
                parts.append(f"[{seg}]")
        else:
            parts.append(str(seg))
    return ".".join(parts) if parts else "<root>"
