"""Tests for the analyze_results command-line script."""

import importlib.util
import json
import sys
from pathlib import Path

import pytest

from result_toolkit.core.utils import save_result_json

SCRIPT_PATH = Path(__file__).resolve().parents[2] / "scripts" / "analyze_results.py"


@pytest.fixture
def cli():
    spec = importlib.util.spec_from_file_location("analyze_results", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _run(cli, monkeypatch, *args):
    monkeypatch.setattr(sys, "argv", ["analyze_results.py", *map(str, args)])
    return cli.main()


class TestAnalyzeResultsScript:
    """End-to-end runs of the script against temporary files."""

    def test_main_when_single_file_then_writes_snapshot(self, cli, monkeypatch, tmp_path, class_result, capsys):
        # Arrange
        source = tmp_path / "term1.json"
        output = tmp_path / "out" / "report.json"
        save_result_json(class_result, source)

        # Act
        code = _run(cli, monkeypatch, source, "--output", output)

        # Assert
        assert code == 0
        snapshot = json.loads(output.read_text(encoding="utf-8"))
        assert snapshot["summary"]["total_students"] == 5
        assert "Class average is 64.5% (Average)" in capsys.readouterr().out

    def test_main_when_two_files_then_prints_trend(self, cli, monkeypatch, tmp_path, class_result, capsys):
        first, second = tmp_path / "a.json", tmp_path / "b.json"
        save_result_json(class_result, first)
        save_result_json(class_result, second)

        code = _run(cli, monkeypatch, first, second)

        out = capsys.readouterr().out
        assert code == 0
        assert "0 improved, 0 declined, 5 maintained" in out
        assert "Trend: Stable" in out

    def test_main_when_threshold_file_has_unknown_key_then_fails(self, cli, monkeypatch, tmp_path, class_result):
        source = tmp_path / "term1.json"
        overrides = tmp_path / "thresholds.json"
        save_result_json(class_result, source)
        overrides.write_text(json.dumps({"pass_mark": 30}), encoding="utf-8")

        assert _run(cli, monkeypatch, source, "--thresholds", overrides) == 1

    def test_main_when_threshold_value_not_numeric_then_fails(self, cli, monkeypatch, tmp_path, class_result):
        source = tmp_path / "term1.json"
        overrides = tmp_path / "thresholds.json"
        save_result_json(class_result, source)
        overrides.write_text(json.dumps({"passing_marks": "40"}), encoding="utf-8")

        assert _run(cli, monkeypatch, source, "--thresholds", overrides) == 1

    def test_main_when_file_missing_then_fails(self, cli, monkeypatch, tmp_path):
        assert _run(cli, monkeypatch, tmp_path / "missing.json") == 1
