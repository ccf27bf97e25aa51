#!/usr/bin/env python3
"""
Purpose:
    Implements the ModelRegistry (an immutable name → Model mapping threaded
    explicitly through every conversion) and the ModelLoader, which discovers,
    loads and deduplicates model definitions from given roots.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional

import yaml
from pydantic import ValidationError

from fscontent.core.constants import DEFAULT_TEXT_ENCODING, JSON_FILE_EXTENSIONS, SUPPORTED_MODEL_EXT
from fscontent.core.formatting import format_pydantic_errors_simple
from fscontent.core.schema.model import Model


# --- Registry --- #

class ModelRegistry(Mapping[str, Model]):
    """
    Read-only mapping from model name to `Model`.

    Built once per call site and never mutated; later models with the same
    name replace earlier ones at construction time.
    """

    def __init__(self, models: Iterable[Model] = ()):
        self._models: Mapping[str, Model] = MappingProxyType({m.name: m for m in models})

    @classmethod
    def from_data(cls, data: Iterable[Mapping[str, Any]]) -> "ModelRegistry":
        """Build a registry from raw model mappings (validated via `Model`)."""
        return cls(Model.model_validate(d) for d in data)

    def __getitem__(self, name: str) -> Model:
        return self._models[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._models)

    def __len__(self) -> int:
        return len(self._models)

    def __repr__(self) -> str:
        return f"<ModelRegistry models={sorted(self._models)}>"

    def require(self, name: str) -> Model:
        """Return the model called `name` or raise LookupError."""
        model = self._models.get(name)
        if model is None:
            raise LookupError(f"Model {name!r} not found")
        return model

    def names(self) -> List[str]:
        """Sorted model names."""
        return sorted(self._models)


# --- Disk loading --- #

@dataclass(frozen=True)
class ModelEntry:
    """
    Lightweight record for a model discovered on disk.
    - name: model name (or the file stem for files that failed to load)
    - path: absolute path to the definition file
    - valid: whether this is the selected, usable model
    - reason: diagnostic text for invalid entries (parse error, duplicate dropped, etc.)
    """
    name: str
    path: Path
    valid: bool
    reason: Optional[str] = None


class ModelLoader:
    """
    Loads `Model` definitions from one or more roots and exposes entries
    (valid + invalid) for UX.

    A definition file holds a single model mapping, a list of models, or a
    mapping with a `models` list. Duplicate policy: newest mtime wins; older
    duplicates are marked invalid.
    """

    def __init__(self, roots: Iterable[Path]):
        self._roots = [Path(r) for r in roots]
        self._models: Dict[str, Model] = {}
        self._entries: List[ModelEntry] = []
        self._loaded: bool = False

    # --- Loading --- #

    def load(self, *, clear: bool = True) -> None:
        """
        Scan roots for model files, parse, and apply duplicate resolution.

        Args:
            clear: if True, clears prior state before loading.
        """
        if clear:
            self._models.clear()
            self._entries.clear()

        candidates: dict[str, list[tuple[Path, Model]]] = {}
        for p in self._iter_model_files():
            models, err = self._parse_model_file(p)
            if err:
                self._entries.append(ModelEntry(name=p.stem, path=p.resolve(), valid=False, reason=err))
                continue
            for model in models:
                candidates.setdefault(model.name, []).append((p.resolve(), model))

        self._resolve_duplicates(candidates)
        self._loaded = True

    # --- Query API --- #

    def registry(self) -> ModelRegistry:
        """Snapshot of the valid models as a `ModelRegistry`."""
        return ModelRegistry(self._models[name] for name in sorted(self._models))

    def models(self) -> List[Model]:
        """Valid models sorted by name."""
        return [self._models[name] for name in sorted(self._models)]

    def entries(self) -> List[ModelEntry]:
        """All scanned entries (valid + invalid)."""
        return list(self._entries)

    def valid_entries(self) -> List[ModelEntry]:
        return [e for e in self._entries if e.valid]

    def invalid_entries(self) -> List[ModelEntry]:
        return [e for e in self._entries if not e.valid]

    @property
    def loaded(self) -> bool:
        """True if a load() has completed."""
        return self._loaded

    @property
    def roots(self) -> List[Path]:
        return list(self._roots)

    # --- Loading Helpers --- #

    def _iter_model_files(self):
        for root in self._roots:
            if root.is_file():
                if root.suffix.lower() in SUPPORTED_MODEL_EXT:
                    yield root
                continue
            if not root.exists():
                continue
            for p in sorted(root.rglob("*")):
                if p.is_file() and p.suffix.lower() in SUPPORTED_MODEL_EXT:
                    yield p

    def _parse_model_file(self, path: Path) -> tuple[list[Model], str | None]:
        try:
            text = path.read_text(encoding=DEFAULT_TEXT_ENCODING)
            data = json.loads(text) if path.suffix.lower() in JSON_FILE_EXTENSIONS else yaml.safe_load(text)
        except (OSError, ValueError, yaml.YAMLError) as e:
            return [], str(e)

        if isinstance(data, dict) and isinstance(data.get("models"), list):
            data = data["models"]
        if isinstance(data, dict):
            data = [data]
        if not isinstance(data, list):
            return [], f"Expected a model mapping or a list of models, got {type(data).__name__}"

        try:
            return [Model.model_validate(d) for d in data], None
        except ValidationError as e:
            return [], "; ".join(format_pydantic_errors_simple(e))

    def _resolve_duplicates(self, candidates: dict[str, list[tuple[Path, Model]]]) -> None:
        for name, items in candidates.items():
            # newest mtime wins; tie-break by path for stability
            items.sort(key=lambda t: (t[0].stat().st_mtime, str(t[0])), reverse=True)
            (win_path, win_model), losers = items[0], items[1:]
            self._models[name] = win_model
            self._entries.append(ModelEntry(name=name, path=win_path, valid=True, reason="kept"))
            for loser_path, _ in losers:
                self._entries.append(ModelEntry(name=name, path=loser_path, valid=False, reason="duplicate-dropped"))
