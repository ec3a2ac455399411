from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from ca_patterns.cli import classify_cli, generate_cli
from ca_patterns.runner import read_lines


@pytest.fixture
def rows_file(tmp_path: Path) -> Path:
    path = tmp_path / "rows.txt"
    path.write_text("##.######\n#######\n\n###.#....#.###\n########\n", encoding="utf-8")
    return path


def test_missing_argument_prints_usage(capsys: pytest.CaptureFixture[str]) -> None:
    assert classify_cli([]) == 0
    out = capsys.readouterr().out
    assert out.startswith("usage: ca-patterns")


def test_prints_one_pattern_per_line(rows_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert classify_cli([str(rows_file)]) == 0
    out = capsys.readouterr().out
    assert out.splitlines() == ["gliding", "blinking", "vanishing", "other", "vanishing"]


def test_json_output(rows_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert classify_cli([str(rows_file), "--json", "--workers", "2"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert [item["line"] for item in payload] == [1, 2, 3, 4, 5]
    assert [item["pattern"] for item in payload] == ["gliding", "blinking", "vanishing", "other", "vanishing"]
    assert payload[0]["shift"] != 0
    assert payload[3]["generation"] == 100


def test_max_depth_flag(rows_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert classify_cli([str(rows_file), "--json", "--max-depth", "10"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload[3] == {"line": 4, "pattern": "other", "generation": 10, "shift": 0}


def test_config_file(rows_file: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    config = tmp_path / "run.yaml"
    config.write_text("output_format: json\nclassify:\n  max_depth: 10\n")
    assert classify_cli([str(rows_file), "--config", str(config)]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload[3]["generation"] == 10


def test_missing_file_fails_without_output(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
    caplog: pytest.LogCaptureFixture,
) -> None:
    with caplog.at_level(logging.ERROR):
        assert classify_cli([str(tmp_path / "missing.txt")]) == 1
    assert capsys.readouterr().out == ""
    assert "could not read" in caplog.text


def test_invalid_utf8_fails_without_output(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "rows.bin"
    path.write_bytes(b"##.##\n\xff\xfe\n")
    assert classify_cli([str(path)]) == 1
    assert capsys.readouterr().out == ""


def test_invalid_config_fails(rows_file: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    config = tmp_path / "run.yaml"
    config.write_text("classify:\n  max_depth: 1\n")
    assert classify_cli([str(rows_file), "--config", str(config)]) == 1
    assert capsys.readouterr().out == ""


def test_empty_file_prints_nothing(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "empty.txt"
    path.write_text("")
    assert classify_cli([str(path)]) == 0
    assert capsys.readouterr().out == ""


def test_generate_then_classify(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    out = tmp_path / "generated.txt"
    assert generate_cli(["--out", str(out), "--width", "12", "--lines", "7", "--seed", "3"]) == 0
    lines = read_lines(out)
    assert len(lines) == 7
    assert all(len(line) == 12 for line in lines)

    assert classify_cli([str(out)]) == 0
    results = capsys.readouterr().out.splitlines()
    assert len(results) == 7
    assert set(results) <= {"blinking", "gliding", "vanishing", "other"}


def test_malformed_config_fails(rows_file: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    config = tmp_path / "run.yaml"
    config.write_text("classify: [unclosed\n")
    assert classify_cli([str(rows_file), "--config", str(config)]) == 1
    assert capsys.readouterr().out == ""


def test_generate_malformed_config_fails(tmp_path: Path) -> None:
    config = tmp_path / "run.yaml"
    config.write_text("generate: {width: \n")
    assert generate_cli(["--out", str(tmp_path / "rows.txt"), "--config", str(config)]) == 1


def test_generate_unwritable_output_fails(
    rows_file: Path,
    caplog: pytest.LogCaptureFixture,
) -> None:
    # The parent of the output path is a regular file.
    with caplog.at_level(logging.ERROR):
        assert generate_cli(["--out", str(rows_file / "generated.txt")]) == 1
    assert "could not write" in caplog.text
