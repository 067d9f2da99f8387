"""Smoke tests for the command line entry point."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from vault_activity import main as main_module


@pytest.fixture
def activity_file(tmp_path: Path) -> Path:
    rows = [
        {"type": "minting" if day in (2, 9) else "sales", "date": f"2021-06-{day + 1:02d}T12:00:00Z", "amount": day}
        for day in range(13)
    ]
    path = tmp_path / "activity.json"
    path.write_text(json.dumps(rows), encoding="utf-8")
    return path


def test_main_prints_requested_page(activity_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = main_module.main(["--input", str(activity_file), "--page", "2", "--width", "375"])
    out = capsys.readouterr().out
    assert code == 0
    assert "Page 2 of 3" in out
    assert len([line for line in out.splitlines() if "·" in line]) == 6


def test_main_corrects_out_of_range_page(activity_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = main_module.main(
        ["--input", str(activity_file), "--filter", "minting", "--page", "3", "--width", "375"]
    )
    out = capsys.readouterr().out
    assert code == 0
    assert "Page 1 of 1" in out
    assert out.count("Minted Contracts") == 2


def test_main_rejects_unknown_filter(activity_file: Path) -> None:
    assert main_module.main(["--input", str(activity_file), "--filter", "bogus"]) == 2


def test_main_reports_unreadable_input(tmp_path: Path) -> None:
    assert main_module.main(["--input", str(tmp_path / "nope.json")]) == 1
