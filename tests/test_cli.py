# path: navigoplan-api/tests/test_cli.py

from __future__ import annotations

from conftest import write_json
from navigoplan.cli import main
from navigoplan.core.config import DATA_DIR


def test_bundled_ports_pass(capsys):
    assert main([str(DATA_DIR / "ports.v1.json")]) == 0
    assert "ports OK" in capsys.readouterr().out


def test_rows_with_problems_fail(capsys, source_paths):
    canonical, seaguide = source_paths
    assert main([str(canonical), "--summary", "--seaguide", str(seaguide)]) == 1
    err = capsys.readouterr().err
    # the fixture deliberately carries two broken rows
    assert "lat must be number" in err
    assert 'invalid region "Atlantic"' in err


def test_summary_for_a_clean_file(capsys, tmp_path):
    path = write_json(tmp_path / "ports.json", [
        {"id": "poros", "name": "Poros", "lat": 37.5, "lon": 23.45, "category": "harbor", "region": "Saronic"},
        {"id": "syros", "name": "Syros", "lat": 37.441, "lon": 24.943, "category": "harbor", "region": "Cyclades"},
    ])
    assert main([str(path), "--summary", "--seaguide", str(tmp_path / "none.json")]) == 0
    out = capsys.readouterr().out
    assert "merged catalog: 2 ports (0 from the sea guide)" in out
    assert "Cyclades" in out and "Saronic" in out


def test_unreadable_file(capsys, tmp_path):
    assert main([str(tmp_path / "missing.json")]) == 1
    assert "Cannot read" in capsys.readouterr().err
