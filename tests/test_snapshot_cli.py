"""Tests for the snapshot analysis CLI."""

import json

import pytest

from dip_radar.scripts.snapshot_cli import load_snapshot, main
from dip_radar.utils.error_handling import ValidationError

SNAPSHOT = {
    "token": {"address": "TokenMint1111", "name": "Dip Token", "price": 0.5, "market_cap": 250000, "liquidity": 50000},
    "holders": [{"address": "w1", "balance": 1000, "percentage": 1.0}],
    "prices": [{"timestamp": 0, "price": 0.6}, {"timestamp": 60, "price": 0.5}],
}


@pytest.fixture
def snapshot_file(tmp_path):
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps(SNAPSHOT), encoding="utf-8")
    return path


def test_json_output(snapshot_file, capsys):
    assert main([str(snapshot_file), "--json"]) == 0

    data = json.loads(capsys.readouterr().out)
    assert data["outcome"]["verdict"] in ("opportunity", "trap", "wait")
    assert data["outcome"]["entry_zone"]["max"] <= 0.5 * 1.02


def test_text_report(snapshot_file, capsys):
    assert main([str(snapshot_file)]) == 0

    out = capsys.readouterr().out
    assert "DIP ANALYSIS FOR Dip Token" in out
    assert "Verdict:" in out


def test_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.json")]) == 1
    assert "could not read snapshot" in capsys.readouterr().err


def test_invalid_snapshot(tmp_path, capsys):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"holders": []}), encoding="utf-8")

    assert main([str(path)]) == 1
    assert "invalid snapshot" in capsys.readouterr().err


def test_duplicate_holders(tmp_path):
    data = dict(SNAPSHOT, holders=SNAPSHOT["holders"] * 2)
    path = tmp_path / "dup.json"
    path.write_text(json.dumps(data), encoding="utf-8")

    with pytest.raises(ValidationError):
        load_snapshot(str(path))
    assert main([str(path)]) == 1
