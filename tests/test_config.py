"""Tests for BrowserConfig and load_config()."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from namedex.config import CATALOG_ENV_VAR, BrowserConfig, load_config


@pytest.fixture(autouse=True)
def no_catalog_env(monkeypatch):
    monkeypatch.delenv(CATALOG_ENV_VAR, raising=False)


def test_defaults():
    config = load_config()
    assert config.catalog_path == Path("resources/data-complete.json")
    assert config.page_size == 9
    assert config.debounce_seconds == 0.3
    assert config.compare_limit == 4
    assert config.handoff_dir == Path("data/handoff")


def test_string_paths_converted():
    config = BrowserConfig(catalog_path="x.json", handoff_dir="h", log_dir="l")
    assert config.catalog_path == Path("x.json")
    assert isinstance(config.handoff_dir, Path)
    assert isinstance(config.log_dir, Path)


@pytest.mark.parametrize(
    "kwargs", [{"page_size": 0}, {"compare_limit": 1}, {"compare_limit": 5}]
)
def test_invalid_values_rejected(kwargs):
    with pytest.raises(ValueError):
        BrowserConfig(**kwargs)


def test_file_values_merge_over_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps({"catalog_path": "names.json", "page_size": 12, "debounce_ms": 150}),
        encoding="utf-8",
    )
    config = load_config(path)
    assert config.catalog_path == Path("names.json")
    assert config.page_size == 12
    assert config.debounce_seconds == pytest.approx(0.15)
    assert config.compare_limit == 4


def test_env_overrides_file(tmp_path, monkeypatch):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"catalog_path": "names.json"}), encoding="utf-8")
    monkeypatch.setenv(CATALOG_ENV_VAR, str(tmp_path / "env.json"))
    assert load_config(path).catalog_path == tmp_path / "env.json"
