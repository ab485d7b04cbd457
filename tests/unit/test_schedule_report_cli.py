import json
import os
import subprocess
import sys
from pathlib import Path

from tools.schedule_report import EXIT_INVALID, EXIT_OK, main

ROOT = Path(__file__).resolve().parents[2]


def _write_graph(base: Path, data) -> Path:
    path = base / "graph.json"
    path.write_text(json.dumps(data) if not isinstance(data, str) else data, encoding="utf-8")
    return path


def test_schedule_report_text(tmp_path: Path, capsys) -> None:
    path = _write_graph(tmp_path, {"tasks": [1, 2, 3], "dependencies": {"2": [1]}})
    assert main([str(path)]) == EXIT_OK
    out = capsys.readouterr().out
    assert "2\tday 1 *" in out
    assert "3\tday 0\n" in out
    assert "critical path length: 1" in out


def test_schedule_report_json(tmp_path: Path, capsys) -> None:
    path = _write_graph(tmp_path, {"tasks": [3], "dependencies": {"4": [2, 3], "2": [1], "3": [1]}})
    assert main([str(path), "--json"]) == EXIT_OK
    data = json.loads(capsys.readouterr().out)
    assert data == {
        "earliestStart": {"1": 0, "2": 1, "3": 1, "4": 2},
        "criticalPath": [4],
        "length": 2,
    }


def test_schedule_report_cycle_ko(tmp_path: Path, capsys) -> None:
    path = _write_graph(tmp_path, {"dependencies": {"1": [2], "2": [1]}})
    assert main([str(path)]) == EXIT_INVALID
    err = capsys.readouterr().err
    assert "not acyclic" in err
    assert "1 -> 2 -> 1" in err


def test_schedule_report_malformed_ko(tmp_path: Path, capsys) -> None:
    path = _write_graph(tmp_path, {"dependencies": {"a": ["x"]}})
    assert main([str(path)]) == EXIT_INVALID
    assert "KO:" in capsys.readouterr().err

    path = _write_graph(tmp_path, "{not json")
    assert main([str(path)]) == EXIT_INVALID
    assert "JSON invalide" in capsys.readouterr().err


def test_schedule_report_as_module(tmp_path: Path) -> None:
    path = _write_graph(tmp_path, {"tasks": [1], "dependencies": {}})
    res = subprocess.run(
        [sys.executable, "-m", "tools.schedule_report", str(path), "--json"],
        cwd=ROOT,
        env=dict(os.environ),
        capture_output=True,
        text=True,
    )
    assert res.returncode == 0
    assert json.loads(res.stdout)["criticalPath"] == [1]
