#!/usr/bin/env python3
"""
Core constants used across fscontent.

- Reserved record keys: top-level keys stripped before field conversion.
- File handling: supported record/model extensions and default text encoding.
- Envelope placeholders: constant values attached to every document/asset.
"""

from typing import Final

# --- Record constants --- #

# Top-level raw record keys that carry identity/model selection, never fields
RECORD_ID_KEY: Final[str] = "id"
RECORD_TYPE_KEY: Final[str] = "type"
RESERVED_RECORD_KEYS: Final[frozenset[str]] = frozenset({RECORD_ID_KEY, RECORD_TYPE_KEY})

# Markdown record envelope keys (front matter + body)
FRONTMATTER_KEY: Final[str] = "frontmatter"
MARKDOWN_BODY_KEY: Final[str] = "markdown"


# --- File handling --- #

MARKDOWN_FILE_EXTENSIONS: Final[frozenset[str]] = frozenset({".md", ".mdx", ".markdown"})
YAML_FILE_EXTENSIONS: Final[frozenset[str]] = frozenset({".yml", ".yaml"})
JSON_FILE_EXTENSIONS: Final[frozenset[str]] = frozenset({".json"})

# Model definition files
SUPPORTED_MODEL_EXT: Final[frozenset[str]] = YAML_FILE_EXTENSIONS | JSON_FILE_EXTENSIONS

# Default text encoding
DEFAULT_TEXT_ENCODING: Final[str] = "utf-8"


# --- Envelope placeholders --- #

CONTENT_SOURCE_TYPE: Final[str] = "fs"
DEFAULT_MANAGE_URL: Final[str] = ""
DEFAULT_STATUS: Final[str] = "published"
ASSET_FILE_FIELD_TYPE: Final[str] = "assetFile"


# --- Environment --- #

ENV_PREFIX: Final[str] = "FSCONTENT_"
