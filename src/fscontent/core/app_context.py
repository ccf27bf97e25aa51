#!/usr/bin/env python3
"""
Purpose:
    Wires together the fscontent application context by merging configuration,
    loading model definitions, and constructing the content source.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

from fscontent.core.config import assets_config, load_config
from fscontent.core.schema.registry import ModelLoader, ModelRegistry
from fscontent.core.source import FileSystemContentSource


# --- Data model --- #

@dataclass(frozen=True)
class AppContext:
    """Immutable container for configuration, loaded models and the content source."""
    config: Dict[str, Any]
    models: ModelLoader
    source: FileSystemContentSource

    @property
    def registry(self) -> ModelRegistry:
        return self.models.registry()


# --- Factory --- #

def build_context(
    *,
    config: Optional[Dict[str, Any]] = None,
    model_roots: Optional[Iterable[Path]] = None,
    preload: bool = True,
) -> AppContext:
    """
    Build an `AppContext`.

    Args:
        config:
            Pre-merged configuration. If omitted, `load_config()` is used.
        model_roots:
            Optional override for model search paths. Defaults to `config['model_paths']`.
            Relative paths are resolved against `config['root_dir']`.
        preload:
            If True, eagerly loads model definitions; otherwise, caller may load later.

    Returns:
        AppContext: immutable bundle of config, model loader, and content source.
    """
    cfg = config or load_config()
    root_dir = Path(cfg.get("root_dir", "."))

    model_paths = [root_dir / Path(p) for p in (model_roots or cfg.get("model_paths", []))]
    loader = ModelLoader(model_paths)
    if preload:
        loader.load(clear=True)

    source = FileSystemContentSource(
        root_dir=root_dir,
        content_dir=cfg.get("content_dir", "content"),
        models=loader.models(),
        assets=assets_config(cfg),
    )
    return AppContext(config=cfg, models=loader, source=source)
