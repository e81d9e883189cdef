"""Tests for CLI compare-dir command."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner
from conftest import BLUE, RED, write_solid

from visgate.cli import main


def _dirs(tmp_path: Path) -> tuple[Path, Path]:
    ref = tmp_path / "ref"
    cand = tmp_path / "cand"
    ref.mkdir()
    cand.mkdir()
    return ref, cand


class TestCompareDir:
    def test_all_pass(self, tmp_path: Path) -> None:
        ref, cand = _dirs(tmp_path)
        for name in ("a.png", "b.png"):
            write_solid(ref, name, RED)
            write_solid(cand, name, RED)
        result = CliRunner().invoke(main, ["compare-dir", str(ref), str(cand)])
        assert result.exit_code == 0
        assert "a.png\tpass" in result.output
        assert "b.png\tpass" in result.output

    def test_regression_exit_1(self, tmp_path: Path) -> None:
        ref, cand = _dirs(tmp_path)
        write_solid(ref, "a.png", RED)
        write_solid(cand, "a.png", BLUE)
        result = CliRunner().invoke(main, ["compare-dir", str(ref), str(cand)])
        assert result.exit_code == 1
        assert "a.png\tregression" in result.output

    def test_missing_candidate_exit_1(self, tmp_path: Path) -> None:
        ref, cand = _dirs(tmp_path)
        write_solid(ref, "a.png", RED)
        result = CliRunner().invoke(main, ["compare-dir", str(ref), str(cand)])
        assert result.exit_code == 1
        assert "a.png\tmissing" in result.output

    def test_error_exit_2(self, tmp_path: Path) -> None:
        ref, cand = _dirs(tmp_path)
        write_solid(ref, "a.png", RED)
        (cand / "a.png").write_bytes(b"garbage")
        result = CliRunner().invoke(main, ["compare-dir", str(ref), str(cand)])
        assert result.exit_code == 2
        assert "a.png\terror" in result.output

    def test_lenient_size_mismatch(self, tmp_path: Path) -> None:
        ref, cand = _dirs(tmp_path)
        write_solid(ref, "a.png", RED, size=(4, 4))
        write_solid(cand, "a.png", RED, size=(4, 6))
        strict = CliRunner().invoke(main, ["compare-dir", str(ref), str(cand)])
        lenient = CliRunner().invoke(
            main, ["compare-dir", "--allow-size-mismatch", str(ref), str(cand)]
        )
        assert strict.exit_code == 1
        assert lenient.exit_code == 0

    def test_json(self, tmp_path: Path) -> None:
        ref, cand = _dirs(tmp_path)
        write_solid(ref, "a.png", RED)
        write_solid(cand, "a.png", BLUE)
        result = CliRunner().invoke(main, ["compare-dir", "--json", str(ref), str(cand)])
        assert result.exit_code == 1
        data = json.loads(result.output.strip())
        assert data["threshold"] == 0.15
        [entry] = data["entries"]
        assert entry["name"] == "a.png"
        assert entry["verdict"] == "regression"
        assert entry["diff_ratio"] == 1.0

    def test_missing_directory_usage_error(self, tmp_path: Path) -> None:
        result = CliRunner().invoke(main, ["compare-dir", str(tmp_path / "x"), str(tmp_path)])
        assert result.exit_code == 2
