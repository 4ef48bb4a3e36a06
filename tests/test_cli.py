"""Tests for the namedex CLI commands via Typer's CliRunner."""

from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from namedex.cli import app
from namedex.config import CATALOG_ENV_VAR

runner = CliRunner()


@pytest.fixture(autouse=True)
def no_catalog_env(monkeypatch):
    monkeypatch.delenv(CATALOG_ENV_VAR, raising=False)


@pytest.fixture
def handoff_dir(tmp_path):
    return tmp_path / "handoff"


@pytest.fixture
def config_file(tmp_path, handoff_dir):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"handoff_dir": str(handoff_dir)}), encoding="utf-8")
    return path


@pytest.fixture
def invoke(catalog_file, config_file):
    """Run a command against the sample catalog with a wide console."""

    def _invoke(*args: str, catalog=None):
        argv = [
            "--catalog",
            str(catalog if catalog is not None else catalog_file),
            "--config",
            str(config_file),
            *args,
        ]
        return runner.invoke(app, argv, env={"COLUMNS": "200"})

    return _invoke


class TestBrowse:
    def test_first_page(self, invoke):
        result = invoke("browse")
        assert result.exit_code == 0, result.output
        assert "Showing 9 of 20 name(s)" in result.output
        assert "--pages 2" in result.output

    def test_luck_filter(self, invoke):
        result = invoke("browse", "--luck", "inauspicious")
        assert result.exit_code == 0, result.output
        assert "Showing 3 of 3 name(s)" in result.output
        assert "luck:inauspicious" in result.output

    def test_combined_filters_and_sort(self, invoke):
        result = invoke(
            "browse", "--score", "90-100", "--strokes", "26-30", "--sort", "score"
        )
        assert result.exit_code == 0, result.output
        assert "Showing 5 of 5 name(s)" in result.output

    def test_pages(self, invoke):
        result = invoke("browse", "--pages", "3")
        assert result.exit_code == 0, result.output
        assert "Showing 20 of 20 name(s)" in result.output
        assert "More available" not in result.output

    def test_repeated_token_counts_once(self, invoke):
        result = invoke("browse", "--score", "90-100", "--score", "90-100")
        assert result.exit_code == 0, result.output
        assert "Showing 6 of 6 name(s)" in result.output
        assert "score:90-100" in result.output

    def test_no_match(self, invoke):
        result = invoke("browse", "--query", "zzz")
        assert result.exit_code == 0
        assert "No names match" in result.output

    def test_unknown_sort_rejected(self, invoke):
        result = invoke("browse", "--sort", "popularity")
        assert result.exit_code != 0

    def test_missing_catalog_uses_fallback(self, invoke, tmp_path):
        result = invoke("browse", catalog=tmp_path / "missing.json")
        assert result.exit_code == 0, result.output
        assert "built-in sample name" in result.output
        assert "李垣岩" in result.output
        assert "Showing 1 of 1 name(s)" in result.output

    def test_malformed_catalog_exits_1(self, invoke, write_catalog):
        path = write_catalog([{"id": 1, "name": "broken"}], name="broken.json")
        result = invoke("browse", catalog=path)
        assert result.exit_code == 1
        assert "malformed" in result.output


class TestStats:
    def test_tables_rendered(self, invoke):
        result = invoke("stats")
        assert result.exit_code == 0, result.output
        assert "Elements" in result.output
        assert "Total-grid luck" in result.output
        assert "Stroke counts" in result.output
        assert "20 name(s) in catalog" in result.output


class TestShow:
    def test_show_and_save(self, invoke, handoff_dir):
        result = invoke("show", "5", "--save")
        assert result.exit_code == 0, result.output
        assert "Name #5" in result.output
        blob = json.loads((handoff_dir / "selectedName.json").read_text(encoding="utf-8"))
        assert blob["id"] == 5

    def test_show_without_save_writes_nothing(self, invoke, handoff_dir):
        result = invoke("show", "5")
        assert result.exit_code == 0
        assert not (handoff_dir / "selectedName.json").exists()

    def test_unknown_id(self, invoke):
        result = invoke("show", "999")
        assert result.exit_code == 1
        assert "No name with id 999" in result.output


class TestCompare:
    def test_two_names(self, invoke, handoff_dir):
        result = invoke("compare", "3", "1")
        assert result.exit_code == 0, result.output
        assert "Comparing 2 names" in result.output
        blob = json.loads((handoff_dir / "compareList.json").read_text(encoding="utf-8"))
        assert blob == [3, 1]

    def test_single_name_rejected(self, invoke, handoff_dir):
        result = invoke("compare", "3")
        assert result.exit_code == 1
        assert "at least 2" in result.output
        assert not (handoff_dir / "compareList.json").exists()

    def test_limit_keeps_first_four(self, invoke, handoff_dir):
        result = invoke("compare", "1", "2", "3", "4", "5")
        assert result.exit_code == 0, result.output
        assert "At most 4" in result.output
        blob = json.loads((handoff_dir / "compareList.json").read_text(encoding="utf-8"))
        assert blob == [1, 2, 3, 4]

    def test_duplicate_and_unknown_ids_reported(self, invoke):
        result = invoke("compare", "1", "1", "999", "2")
        assert result.exit_code == 0, result.output
        assert "already in the compare list" in result.output
        assert "Unknown name id 999" in result.output


class TestHexagrams:
    def test_lists_distinct_names(self, invoke):
        result = invoke("hexagrams")
        assert result.exit_code == 0, result.output
        for name in ("乾为天", "坤为地", "水雷屯"):
            assert name in result.output
