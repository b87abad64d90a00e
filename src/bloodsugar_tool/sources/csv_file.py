"""Lectura de archivos CSV de glucosa subidos por el usuario."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from bloodsugar_tool.sources.base import DataSource, SourcePaths

CSV_SUFFIX = ".csv"


@dataclass(frozen=True)
class CsvPaths(SourcePaths):
    """Path to a CSV file, or to a folder holding CSV exports."""


class CsvFileSource(DataSource):
    """Blood sugar CSV file source."""

    def validate(self) -> None:
        """Validate that the configured path exists."""
        if not self._paths.root.exists():
            raise FileNotFoundError(str(self._paths.root))

    def newest_csv(self) -> Path:
        """Return the configured file, or the newest *.csv in the folder by mtime.

        Raises:
            FileNotFoundError: If the folder has no CSV files.
            ValueError: If the configured file is not a CSV file.
        """
        root = self._paths.root
        if root.is_file():
            if root.suffix.lower() != CSV_SUFFIX:
                raise ValueError(f"Not a CSV file: {root}")
            return root

        files = sorted(
            (p for p in root.iterdir() if p.suffix.lower() == CSV_SUFFIX),
            key=lambda p: p.stat().st_mtime,
            reverse=True,
        )
        if not files:
            raise FileNotFoundError(f"No *.csv in {root}")
        return files[0]

    def read_text(self, path: Path) -> str:
        """Read the whole file as text (UTF-8, optional BOM)."""
        return path.read_text(encoding="utf-8-sig")
