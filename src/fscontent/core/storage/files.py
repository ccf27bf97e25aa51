#!/usr/bin/env python3
"""
File-backed record storage: directory listing, structured-file parsing
(YAML / JSON / Markdown with YAML front matter), envelope-preserving writes,
and best-effort file metadata.
"""
from __future__ import annotations

import json
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from fscontent.core.constants import (
    DEFAULT_TEXT_ENCODING,
    FRONTMATTER_KEY,
    JSON_FILE_EXTENSIONS,
    MARKDOWN_BODY_KEY,
    MARKDOWN_FILE_EXTENSIONS,
    YAML_FILE_EXTENSIONS,
)

FRONTMATTER_RE = re.compile(r'^---[ \t]*\n(?:(.*?)\n)?---[ \t]*(?:\n|$)', re.DOTALL)

PathLike = Union[str, Path]


@dataclass(frozen=True)
class FileMetadata:
    created_at: datetime
    modified_at: datetime


# --- Listing --- #

def list_files(root: PathLike) -> List[str]:
    """
    Return sorted POSIX paths of all files under `root`, relative to `root`.

    Hidden entries (any path part starting with '.') are skipped; a missing
    root yields an empty list.
    """
    base = Path(root)
    if not base.is_dir():
        return []
    files = []
    for p in base.rglob("*"):
        rel = p.relative_to(base)
        if p.is_file() and not any(part.startswith(".") for part in rel.parts):
            files.append(rel.as_posix())
    return sorted(files)


def is_markdown_file(path: PathLike) -> bool:
    return Path(path).suffix.lower() in MARKDOWN_FILE_EXTENSIONS


# --- Parsing --- #

def parse_file(path: PathLike) -> Any:
    """
    Parse a structured file.

    - .yml/.yaml → YAML document (empty → None)
    - .json      → JSON document
    - markdown   → {"frontmatter": dict, "markdown": body}

    Raises:
        FileNotFoundError: if the file does not exist
        ValueError: if the extension is unsupported or the content is invalid
    """
    p = Path(path)
    suffix = p.suffix.lower()
    text = p.read_text(encoding=DEFAULT_TEXT_ENCODING)

    if suffix in YAML_FILE_EXTENSIONS:
        return _load_yaml(text, p)
    if suffix in JSON_FILE_EXTENSIONS:
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {str(p)!r}: {e.msg} (line {e.lineno}, col {e.colno})") from e
    if suffix in MARKDOWN_FILE_EXTENSIONS:
        frontmatter, body = split_frontmatter(text, p)
        return {FRONTMATTER_KEY: frontmatter, MARKDOWN_BODY_KEY: body}

    raise ValueError(f"Unsupported file extension for {p.name!r}")


def split_frontmatter(text: str, path: Optional[Path] = None) -> tuple[Dict[str, Any], str]:
    """Return (frontmatter_dict, body) with the YAML header removed."""
    m = FRONTMATTER_RE.match(text)
    if not m:
        return {}, text
    fm = _load_yaml(m.group(1) or "", path) or {}
    if not isinstance(fm, dict):
        raise ValueError(f"Invalid YAML frontmatter: expected a mapping, got {type(fm).__name__}")
    return fm, text[m.end():]


def read_record(path: PathLike) -> Dict[str, Any]:
    """
    Read a raw record. For markdown files the front matter is the record.
    Empty files yield an empty record.
    """
    data = parse_file(path)
    if is_markdown_file(path) and isinstance(data, dict) and FRONTMATTER_KEY in data and MARKDOWN_BODY_KEY in data:
        data = data[FRONTMATTER_KEY]
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping in {str(path)!r}, got {type(data).__name__}")
    return data


# --- Writing --- #

def write_record(path: PathLike, record: Dict[str, Any]) -> bool:
    """
    Persist a raw record. Markdown files keep their existing body and get the
    record as front matter. The file is only rewritten when its content changes.

    Returns:
        True if the file was written.
    """
    p = Path(path)
    suffix = p.suffix.lower()

    if suffix in MARKDOWN_FILE_EXTENSIONS:
        body = ""
        if p.exists():
            body = parse_file(p)[MARKDOWN_BODY_KEY]
        text = f"---\n{_dump_yaml(record)}---\n{body}"
    elif suffix in YAML_FILE_EXTENSIONS:
        text = _dump_yaml(record)
    elif suffix in JSON_FILE_EXTENSIONS:
        text = json.dumps(record, indent=2, ensure_ascii=False, default=str) + "\n"
    else:
        raise ValueError(f"Unsupported file extension for {p.name!r}")

    if p.exists() and p.read_text(encoding=DEFAULT_TEXT_ENCODING) == text:
        return False
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(text, encoding=DEFAULT_TEXT_ENCODING)
    return True


# --- Metadata --- #

def file_metadata(path: PathLike) -> Optional[FileMetadata]:
    """Creation/modification times in UTC, or None if the file cannot be stat'ed."""
    try:
        st = Path(path).stat()
    except OSError:
        return None
    created = getattr(st, "st_birthtime", None) or st.st_ctime
    return FileMetadata(
        created_at=datetime.fromtimestamp(created, tz=timezone.utc),
        modified_at=datetime.fromtimestamp(st.st_mtime, tz=timezone.utc),
    )


# --- Internals --- #

def _load_yaml(text: str, path: Optional[Path]) -> Any:
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        where = f" in {str(path)!r}" if path else ""
        raise ValueError(f"Invalid YAML{where}: {e}") from e


def _dump_yaml(data: Dict[str, Any]) -> str:
    return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
