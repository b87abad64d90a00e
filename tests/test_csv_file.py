from __future__ import annotations

import os
from pathlib import Path

import pytest

from bloodsugar_tool.sources.csv_file import CsvFileSource, CsvPaths


def test_validate_raises_when_root_missing(tmp_path: Path) -> None:
    missing = tmp_path / "noexiste.csv"
    src = CsvFileSource(CsvPaths(root=missing))
    with pytest.raises(FileNotFoundError, match="noexiste"):
        src.validate()


def test_newest_csv_returns_file_root(tmp_path: Path) -> None:
    p = tmp_path / "readings.CSV"
    p.write_text("Date,BloodSugar\n", encoding="utf-8")
    src = CsvFileSource(CsvPaths(root=p))
    src.validate()
    assert src.newest_csv() == p


def test_newest_csv_rejects_other_files(tmp_path: Path) -> None:
    p = tmp_path / "readings.json"
    p.write_text("[]", encoding="utf-8")
    src = CsvFileSource(CsvPaths(root=p))
    with pytest.raises(ValueError, match="Not a CSV file"):
        src.newest_csv()


def test_newest_csv_in_folder_by_mtime(tmp_path: Path) -> None:
    old_f = tmp_path / "old.csv"
    new_f = tmp_path / "new.csv"
    other = tmp_path / "notes.txt"
    for p in (old_f, new_f, other):
        p.write_text("x", encoding="utf-8")
    os.utime(old_f, (1_000_000, 1_000_000))
    os.utime(new_f, (2_000_000, 2_000_000))
    os.utime(other, (3_000_000, 3_000_000))
    src = CsvFileSource(CsvPaths(root=tmp_path))
    assert src.newest_csv() == new_f


def test_newest_csv_raises_when_folder_has_none(tmp_path: Path) -> None:
    src = CsvFileSource(CsvPaths(root=tmp_path))
    with pytest.raises(FileNotFoundError, match=r"No \*\.csv"):
        src.newest_csv()


def test_read_text_strips_bom(tmp_path: Path) -> None:
    p = tmp_path / "bom.csv"
    p.write_bytes("\ufeffDate,BloodSugar\n2023-04-01T08:30:00,120\n".encode())
    src = CsvFileSource(CsvPaths(root=p))
    assert src.read_text(p).startswith("Date,BloodSugar")
