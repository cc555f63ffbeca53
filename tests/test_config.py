"""Tests for config loading."""
from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from repo_explorer.application import explore
from repo_explorer.config import DEFAULT_CONFIG, ExplorerConfig, get_config, load_config, served_root
from repo_explorer.config import loader as config_loader
from repo_explorer.infrastructure.walker import WalkFilter


def _write_config(tmp_path: Path, data: dict) -> Path:
    path = tmp_path / "explorer.json"
    path.write_text(json.dumps(data))
    return path


def test_get_config_default(monkeypatch):
    monkeypatch.delenv("EXPLORER_CONFIG_PATH", raising=False)
    monkeypatch.setattr(config_loader, "_env", None)
    cfg = get_config()
    assert cfg is DEFAULT_CONFIG
    assert cfg.ignore_names == ["node_modules"]
    assert cfg.search_ignore_names == ["node_modules", ".git", "dist", "build"]
    assert cfg.max_find_results == 1000
    assert cfg.default_tree_depth == 3


def test_get_config_from_file(monkeypatch, tmp_path):
    path = _write_config(tmp_path, {"max_find_results": 25, "ignore_names": ["node_modules", "vendor"]})
    monkeypatch.setenv("EXPLORER_CONFIG_PATH", str(path))
    cfg = get_config()
    assert cfg.max_find_results == 25
    assert cfg.ignore_names == ["node_modules", "vendor"]
    # Unspecified keys keep their defaults.
    assert cfg.max_search_matches == DEFAULT_CONFIG.max_search_matches


def test_missing_config_file_falls_back_to_defaults(monkeypatch, tmp_path):
    monkeypatch.setenv("EXPLORER_CONFIG_PATH", str(tmp_path / "absent.json"))
    assert load_config() is DEFAULT_CONFIG


def test_load_config_is_cached(monkeypatch, tmp_path):
    path = _write_config(tmp_path, {"max_find_results": 7})
    monkeypatch.setenv("EXPLORER_CONFIG_PATH", str(path))
    first = load_config()
    path.write_text(json.dumps({"max_find_results": 8}))
    assert load_config() is first
    load_config.cache_clear()
    assert load_config().max_find_results == 8


def test_invalid_config_file_raises(monkeypatch, tmp_path):
    path = _write_config(tmp_path, {"max_search_matches": 0})
    monkeypatch.setenv("EXPLORER_CONFIG_PATH", str(path))
    with pytest.raises(ValidationError, match="max_search_matches"):
        load_config()


@pytest.mark.parametrize("kwargs", [
    {"max_find_results": -1},
    {"min_tree_depth": 0},
    {"min_tree_depth": 5, "max_tree_depth": 4},
])
def test_config_rejects_bad_limits(kwargs):
    with pytest.raises(ValidationError):
        ExplorerConfig(**kwargs)


def test_walk_filters_follow_config():
    cfg = ExplorerConfig(ignore_names=["vendor"], skip_hidden=False, search_ignore_names=["out"])
    assert cfg.walk_filter() == WalkFilter(ignore_names=frozenset({"vendor"}), skip_hidden=False)
    search_filter = cfg.search_filter()
    assert search_filter.excludes("out")
    assert not search_filter.excludes(".env")


def test_clamp_tree_depth():
    cfg = ExplorerConfig(min_tree_depth=2, max_tree_depth=4)
    assert cfg.clamp_tree_depth(1) == 2
    assert cfg.clamp_tree_depth(3) == 3
    assert cfg.clamp_tree_depth(9) == 4


def test_operations_use_loaded_config(monkeypatch, tmp_path, mock_repo):
    path = _write_config(tmp_path, {"max_find_results": 2, "skip_hidden": False})
    monkeypatch.setenv("EXPLORER_CONFIG_PATH", str(path))
    result = explore(str(mock_repo), "findFiles", {"namePattern": "*.ts"})
    assert result["totalFound"] == 2
    tree = explore(str(mock_repo), "tree", {"maxDepth": 1})
    assert "├── .hidden/" in tree["treeLines"]


def test_served_root_defaults_to_working_directory(monkeypatch):
    monkeypatch.delenv("EXPLORER_ROOT", raising=False)
    assert served_root() == "."


def test_served_root_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("EXPLORER_ROOT", str(tmp_path))
    assert served_root() == str(tmp_path)
