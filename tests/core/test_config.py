#!/usr/bin/env python3
import json
import logging
import os
from pathlib import Path

import pytest

import fscontent.core.config as cfg
from fscontent.core.app_context import build_context
from fscontent.core.logging_setup import configure_logging

ENV_VARS = (
    "FSCONTENT_ROOT_DIR",
    "FSCONTENT_CONTENT_DIR",
    "FSCONTENT_MODEL_PATHS",
    "FSCONTENT_PUBLIC_PATH",
    "FSCONTENT_LOG_LEVEL",
)


# --- Helpers --- #

def _write_json(path: Path, payload: dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload), encoding="utf-8")


@pytest.fixture
def clean_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setattr(cfg, "GLOBAL_CONFIG_PATH", tmp_path / "no/such/config.json", raising=False)
    monkeypatch.chdir(tmp_path)
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return tmp_path


# --- load_config: defaults only --- #

def test_load_config_defaults_only(clean_env):
    result = cfg.load_config()
    assert result == cfg.DEFAULT_CONFIG


def test_load_config_does_not_share_defaults(clean_env):
    result = cfg.load_config()
    result["model_paths"].append("./extra")
    result["assets"]["public_path"] = "/changed/"

    assert cfg.DEFAULT_CONFIG["model_paths"] == ["./models"]
    assert cfg.DEFAULT_CONFIG["assets"]["public_path"] == ""
    assert cfg.load_config()["model_paths"] == ["./models"]


# --- Precedence: global < project < env --- #

def test_load_config_global_and_project_precedence(clean_env, monkeypatch: pytest.MonkeyPatch):
    global_cfg = clean_env / ".config/fscontent/config.json"
    _write_json(global_cfg, {
        "logging": {"level": "DEBUG"},
        "content_dir": "global-content",
        "assets": {"public_path": "/g/"},
        "extra": 1,
    })
    _write_json(clean_env / "fscontent.json", {
        "logging": {"level": "WARNING"},
        "content_dir": "site/content",
    })
    monkeypatch.setattr(cfg, "GLOBAL_CONFIG_PATH", global_cfg, raising=False)

    result = cfg.load_config()

    # Project overrides global
    assert result["logging"]["level"] == "WARNING"
    assert result["content_dir"] == "site/content"
    # Nested blocks merge rather than replace
    assert result["assets"]["public_path"] == "/g/"
    assert result["assets"]["static_dir"] == "public"
    # Values only in global propagate through
    assert result["extra"] == 1


def test_load_config_invalid_project_json(clean_env):
    (clean_env / "fscontent.json").write_text("{oops", encoding="utf-8")
    with pytest.raises(ValueError, match="Invalid JSON"):
        cfg.load_config()


# --- Env overrides --- #

def test_load_config_env_overrides(clean_env, monkeypatch: pytest.MonkeyPatch):
    sep = os.pathsep
    monkeypatch.setenv("FSCONTENT_ROOT_DIR", "/srv/site")
    monkeypatch.setenv("FSCONTENT_CONTENT_DIR", "pages")
    monkeypatch.setenv("FSCONTENT_MODEL_PATHS", f"a{sep}~/b{sep}")
    monkeypatch.setenv("FSCONTENT_PUBLIC_PATH", "")
    monkeypatch.setenv("FSCONTENT_LOG_LEVEL", "ERROR")
    _write_json(clean_env / "fscontent.json", {"assets": {"public_path": "/p/"}})

    result = cfg.load_config()

    assert result["root_dir"] == "/srv/site"
    assert result["content_dir"] == "pages"
    paths = result["model_paths"]
    assert paths[0] == "a"
    assert paths[1] != "~/b" and "b" in Path(paths[1]).parts  # tilde expanded
    assert len(paths) == 2
    # An empty public path is still an override
    assert result["assets"]["public_path"] == ""
    assert result["logging"]["level"] == "ERROR"


# --- _split_paths_env internals --- #

@pytest.mark.parametrize("value,expected", [
    ("a", ["a"]),
    (f"a{os.pathsep}b", ["a", "b"]),
    (f"{os.pathsep}a{os.pathsep}", ["a"]),              # leading/trailing empties dropped
    ("~/x", [str(Path("~/x").expanduser())]),          # tilde expansion
    ("  a  ", ["a"]),                                  # whitespace trim
])
def test_split_paths_env(value, expected):
    assert cfg._split_paths_env(value) == expected


# --- Assets config --- #

@pytest.mark.parametrize("block,expected", [
    ({}, "public"),
    ({"reference_type": "static", "assets_dir": "assets"}, "public"),
    ({"reference_type": "relative", "assets_dir": "assets"}, "assets"),
    ({"reference_type": "relative"}, "public"),
])
def test_assets_directory(block, expected):
    assert cfg.assets_config({"assets": block}).directory == expected


# --- Logging --- #

@pytest.mark.parametrize("level,expected", [
    ("debug", logging.DEBUG),
    ("WARNING", logging.WARNING),
    ("nonsense", logging.INFO),
])
def test_configure_logging(level, expected):
    root = logging.getLogger()
    handlers, old_level = root.handlers[:], root.level
    try:
        assert configure_logging({"logging": {"level": level}}) == expected
        assert root.level == expected
    finally:
        root.handlers[:] = handlers
        root.setLevel(old_level)


# --- App context --- #

def test_build_context_resolves_models_against_root(clean_env):
    root = clean_env / "site"
    _write_json(root / "models" / "post.json", {"name": "post", "fields": [{"name": "title"}]})
    (root / "content").mkdir(parents=True)
    (root / "content" / "a.yaml").write_text("type: post\ntitle: A\n", encoding="utf-8")

    config = {**cfg.DEFAULT_CONFIG, "root_dir": str(root)}
    ctx = build_context(config=config)

    assert ctx.models.loaded is True
    assert ctx.registry.names() == ["post"]
    assert [d.id for d in ctx.source.get_documents(ctx.registry)] == ["content/a.yaml"]

    lazy = build_context(config=config, preload=False)
    assert lazy.models.loaded is False
