#!/usr/bin/env python3
"""
Purpose:
    Path-based editor for raw records. Field paths address nested values with
    dotted/indexed strings (`sections[0].title`, `sections.0.title`) or segment
    lists (`["sections", 0, "title"]`), and update operations are applied to a
    copy of the record at those paths.
"""
from __future__ import annotations

import copy
import logging
import re
from typing import Any, Dict, Iterable, List, Mapping, Union

from fscontent.core.convert.reverse import map_update_operation_to_value
from fscontent.core.document.update import (
    FieldPath,
    InsertOperation,
    RemoveOperation,
    ReorderOperation,
    SetOperation,
    UnsetOperation,
    UpdateOperation,
)
from fscontent.core.exceptions import FieldPathError
from fscontent.core.formatting import format_path
from fscontent.core.schema.model import Model

logger = logging.getLogger(__name__)

Segment = Union[str, int]

# name | [index] | ["quoted key"]
_SEGMENT_RE = re.compile(r'[^.\[\]]+|\[(?:(-?\d+)|(["\'])(.*?)\2)\]')

_MISSING = object()


# --- Path parsing --- #

def parse_field_path(path: FieldPath) -> List[Segment]:
    """
    Normalize a field path to a list of segments; digit-only segments become ints.

    Examples:
        "a.b[0].c"         -> ["a", "b", 0, "c"]
        "sections.1.title" -> ["sections", 1, "title"]
        ["a", "2"]         -> ["a", 2]

    Raises:
        FieldPathError: if the path is empty or has unparsable characters.
    """
    if isinstance(path, str):
        segments = _split_string_path(path)
    else:
        segments = [_coerce_segment(seg) for seg in path]
    if not segments:
        raise FieldPathError(path, "Empty field path")
    return segments


def _split_string_path(path: str) -> List[Segment]:
    segments: List[Segment] = []
    pos = 0
    for m in _SEGMENT_RE.finditer(path):
        gap = path[pos:m.start()]
        if gap.strip("."):
            raise FieldPathError(path, f"Unexpected {gap!r}")
        pos = m.end()
        if m.group(1) is not None:
            segments.append(int(m.group(1)))
        elif m.group(2) is not None:
            segments.append(m.group(3))
        else:
            segments.append(_coerce_segment(m.group(0)))
    if path[pos:].strip("."):
        raise FieldPathError(path, f"Unexpected {path[pos:]!r}")
    return segments


def _coerce_segment(seg: Any) -> Segment:
    if isinstance(seg, int):
        return seg
    s = str(seg)
    return int(s) if s.isdigit() else s


# --- Accessors --- #

def get_value(record: Any, path: FieldPath, default: Any = None) -> Any:
    """Return the value at `path`, or `default` if any segment is missing."""
    current = record
    for seg in parse_field_path(path):
        current = _child(current, seg)
        if current is _MISSING:
            return default
    return current


def set_value(record: Dict[str, Any], path: FieldPath, value: Any) -> None:
    """
    Set `value` at `path`, creating missing containers on the way (a list when
    the next segment is an index, otherwise a mapping).
    """
    segments = parse_field_path(path)
    current: Any = record
    for seg, nxt in zip(segments, segments[1:]):
        child = _child(current, seg)
        if not isinstance(child, (dict, list)):
            child = [] if isinstance(nxt, int) else {}
            _assign(current, seg, child, path)
        current = child
    _assign(current, segments[-1], value, path)


def unset_value(record: Dict[str, Any], path: FieldPath) -> bool:
    """
    Remove the value at `path`. Mapping keys are deleted; list slots are set to
    None so sibling indexes stay stable.

    Returns:
        True if something was removed.
    """
    segments = parse_field_path(path)
    parent = get_value(record, segments[:-1]) if len(segments) > 1 else record
    last = segments[-1]
    if isinstance(parent, dict) and last in parent:
        del parent[last]
        return True
    if isinstance(parent, dict) and str(last) in parent:
        del parent[str(last)]
        return True
    if isinstance(parent, list) and isinstance(last, int) and -len(parent) <= last < len(parent):
        parent[last] = None
        return True
    return False


# --- Update operations --- #

def apply_update_operations(
    record: Mapping[str, Any],
    operations: Iterable[UpdateOperation],
    models: Mapping[str, Model],
) -> Dict[str, Any]:
    """
    Apply update operations in order to a deep copy of `record`.

    - set:     reverse-map `field` and set it at the path
    - unset:   remove the value at the path
    - insert:  copy the list, insert the reverse-mapped `item` at `index` (default 0)
    - remove:  copy the list, drop the element at `index`
    - reorder: replace the list with `[old[i] for i in order]`

    Returns:
        The updated copy.

    Raises:
        FieldPathError: if a list operation targets a non-list value, or a
        reorder index is out of range.
    """
    data: Dict[str, Any] = copy.deepcopy(dict(record))
    for op in operations:
        logger.debug("Applying %s at %s", op.op_type, _display(op.field_path))
        if isinstance(op, SetOperation):
            set_value(data, op.field_path, map_update_operation_to_value(op.field, models, op.model_field))
        elif isinstance(op, UnsetOperation):
            unset_value(data, op.field_path)
        elif isinstance(op, InsertOperation):
            arr = _copy_list(data, op.field_path)
            arr.insert(op.index or 0, map_update_operation_to_value(op.item, models, op.model_field))
            set_value(data, op.field_path, arr)
        elif isinstance(op, RemoveOperation):
            arr = _copy_list(data, op.field_path)
            if -len(arr) <= op.index < len(arr):
                del arr[op.index]
            set_value(data, op.field_path, arr)
        elif isinstance(op, ReorderOperation):
            arr = _copy_list(data, op.field_path)
            try:
                reordered = [arr[i] for i in op.order]
            except IndexError as e:
                raise FieldPathError(op.field_path, f"Reorder index out of range for list of {len(arr)}") from e
            set_value(data, op.field_path, reordered)
        else:
            raise TypeError(f"Unknown update operation: {type(op).__name__}")
    return data


# --- Internals --- #

def _child(container: Any, seg: Segment) -> Any:
    if isinstance(container, dict):
        if seg in container:
            return container[seg]
        return container.get(str(seg), _MISSING)
    if isinstance(container, list) and isinstance(seg, int) and -len(container) <= seg < len(container):
        return container[seg]
    return _MISSING


def _assign(container: Any, seg: Segment, value: Any, path: FieldPath) -> None:
    if isinstance(container, dict):
        key = str(seg) if isinstance(seg, int) and seg not in container else seg
        container[key] = value
    elif isinstance(container, list) and isinstance(seg, int):
        if seg >= len(container):
            container.extend([None] * (seg + 1 - len(container)))
        container[seg] = value
    else:
        raise FieldPathError(path, f"Cannot set {seg!r} on {type(container).__name__}")


def _copy_list(data: Dict[str, Any], path: FieldPath) -> List[Any]:
    current = get_value(data, path)
    if current is None:
        return []
    if not isinstance(current, list):
        raise FieldPathError(path, f"Expected a list, got {type(current).__name__}")
    return list(current)


def _display(path: FieldPath) -> str:
    return path if isinstance(path, str) else format_path(path)
