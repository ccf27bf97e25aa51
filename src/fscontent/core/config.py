#!/usr/bin/env python3
"""
fscontent configuration loader.
"""

import copy
import os
from pathlib import Path
from typing import Any, Dict, Final, List, Literal, Optional

from pydantic import BaseModel, Field

from fscontent.core.constants import ENV_PREFIX
from fscontent.core.utils import merge_dicts, load_json_file

# --- Defaults & locations --- #

DEFAULT_CONFIG: Final[Dict[str, Any]] = {
    "root_dir": ".",
    "content_dir": "content",
    "model_paths": ["./models"],
    "assets": {
        "reference_type": "static",
        "static_dir": "public",
        "assets_dir": None,
        "public_path": "",
    },
    "logging": {"level": "INFO"},
}

GLOBAL_CONFIG_PATH: Final[Path] = Path.home() / ".config" / "fscontent" / "config.json"
PROJECT_CONFIG_NAME: Final[str] = "fscontent.json"


# --- Assets --- #

class AssetsConfig(BaseModel):
    """
    Where assets live and how they are addressed.

    - reference_type "static": assets are served from `static_dir`
    - otherwise `assets_dir` is used, falling back to `static_dir`
    - public_path is prefixed to asset ids to build urls
    """
    reference_type: Literal["static", "relative"] = "static"
    static_dir: str = "public"
    assets_dir: Optional[str] = None
    public_path: str = Field(default="", description="Url prefix for asset files.")

    @property
    def directory(self) -> str:
        """Effective assets directory, relative to the project root."""
        if self.reference_type == "static":
            return self.static_dir
        return self.assets_dir or self.static_dir


# --- Public API --- #

def load_config() -> Dict[str, Any]:
    """
    Load fscontent configuration with layered precedence.

    Order:
        1. Built-in defaults
        2. Global config (~/.config/fscontent/config.json)
        3. Project config (./fscontent.json)
        4. Environment overrides:
           - FSCONTENT_ROOT_DIR
           - FSCONTENT_CONTENT_DIR
           - FSCONTENT_MODEL_PATHS (pathsep-separated list)
           - FSCONTENT_PUBLIC_PATH
           - FSCONTENT_LOG_LEVEL

    Returns:
        A merged configuration dictionary.
    """
    # 1) start with defaults
    config = copy.deepcopy(DEFAULT_CONFIG)

    # 2) global config
    config = merge_dicts(config, load_json_file(GLOBAL_CONFIG_PATH))

    # 3) project config
    config = merge_dicts(config, load_json_file(Path.cwd() / PROJECT_CONFIG_NAME))

    # 4) environment overrides
    root_dir_env = os.getenv(f"{ENV_PREFIX}ROOT_DIR")
    if root_dir_env:
        config["root_dir"] = root_dir_env

    content_dir_env = os.getenv(f"{ENV_PREFIX}CONTENT_DIR")
    if content_dir_env:
        config["content_dir"] = content_dir_env

    model_paths_env = os.getenv(f"{ENV_PREFIX}MODEL_PATHS")
    if model_paths_env:
        config["model_paths"] = _split_paths_env(model_paths_env)

    public_path_env = os.getenv(f"{ENV_PREFIX}PUBLIC_PATH")
    if public_path_env is not None:
        config["assets"] = {**config.get("assets", {}), "public_path": public_path_env}

    log_level_env = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
    if log_level_env:
        config["logging"] = {**config.get("logging", {}), "level": log_level_env}

    return config


def assets_config(config: Dict[str, Any]) -> AssetsConfig:
    """Validated `assets` block of a merged config."""
    return AssetsConfig.model_validate(config.get("assets") or {})


# --- Internals --- #

def _split_paths_env(value: str) -> List[str]:
    """
    Split a path-list env var on os.pathsep, trimming empties and expanding '~'.

    Example:
        "a:~/b:/tmp" on Unix  -> ["a", "/home/user/b", "/tmp"] (no resolve here)
    """
    parts = [p.strip() for p in value.split(os.pathsep)]
    return [str(Path(p).expanduser()) for p in parts if p]
