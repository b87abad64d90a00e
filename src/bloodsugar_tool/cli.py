"""CLI para analizar un CSV de glucosa y exportar reportes."""

from __future__ import annotations

import argparse
import logging
from datetime import datetime
from pathlib import Path

from dateutil import tz

from bloodsugar_tool.excel_writer import ExcelLayout, write_report_xlsx
from bloodsugar_tool.pipeline import chart_series, process_csv_text
from bloodsugar_tool.report import (
    SAMPLE_CSV,
    format_trend,
    to_raw_csv,
    to_report_text,
)
from bloodsugar_tool.sources.csv_file import CsvFileSource, CsvPaths


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed argparse namespace.
    """
    parser = argparse.ArgumentParser(
        description="Blood sugar CSV analysis: statistics, trends and insights."
    )
    parser.add_argument(
        "csv_path",
        nargs="?",
        default=".",
        help="CSV file, or folder whose newest *.csv is used (default: .).",
    )
    parser.add_argument(
        "--tz",
        default=None,
        help="Time zone for timestamps without offset (default: system zone).",
    )
    parser.add_argument(
        "--out-dir",
        default=None,
        help="Folder for exports (default: next to the CSV file).",
    )
    parser.add_argument(
        "--report",
        action="store_true",
        help="Write the full report CSV (blood-sugar-report-<date>.csv).",
    )
    parser.add_argument(
        "--raw",
        action="store_true",
        help="Write the raw CSV re-export (blood-sugar-data-<date>.csv).",
    )
    parser.add_argument(
        "--xlsx",
        action="store_true",
        help="Write a formatted Excel report (blood-sugar-report-<date>.xlsx).",
    )
    parser.add_argument(
        "--sample",
        default=None,
        help="Write the sample CSV to this path and exit.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logs.")
    return parser.parse_args()


def main() -> int:
    """Run the analysis CLI.

    Returns:
        Exit code (0 on success, 1 if the CSV cannot be processed).
    """
    ns = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if ns.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    if ns.sample:
        sample_path = Path(ns.sample).expanduser()
        sample_path.parent.mkdir(parents=True, exist_ok=True)
        sample_path.write_text(SAMPLE_CSV, encoding="utf-8")
        print(f"OK: Sample: {sample_path}")
        return 0

    local_tz = tz.gettz(ns.tz) if ns.tz else None
    if ns.tz and local_tz is None:
        print(f"ERROR: Unknown time zone: {ns.tz}")
        return 1

    source = CsvFileSource(CsvPaths(root=Path(ns.csv_path).expanduser().resolve()))
    source.validate()
    csv_file = source.newest_csv()

    try:
        text = source.read_text(csv_file)
    except UnicodeDecodeError as exc:
        print(f"ERROR: {csv_file} is not UTF-8 text: {exc.reason}")
        return 1

    result = process_csv_text(text, local_tz=local_tz)
    if result.data is None:
        print(f"ERROR: Unable to process {csv_file}: {result.error}")
        return 1

    data = result.data
    stats = data.statistics
    series = chart_series(data)
    print(f"OK: CSV file: {csv_file}")
    print(f"OK: Processed {len(data.reading_set)} blood sugar readings")
    print(f"OK: Skipped lines: {len(result.skipped)}")
    print(f"OK: Days: {len(series.dates)}")
    print(
        f"Average {stats.average:.1f} mg/dL "
        f"(morning {stats.morning_average:.1f}, evening {stats.evening_average:.1f})"
    )
    print(f"Range {stats.min:g} - {stats.max:g} mg/dL")
    print(
        f"Morning trend: {format_trend(stats.morning_trend)}  "
        f"Evening trend: {format_trend(stats.evening_trend)}"
    )
    for insight in data.insights:
        print(f"- {insight}")

    out_dir = Path(ns.out_dir).expanduser() if ns.out_dir else csv_file.parent
    day = datetime.now().strftime("%Y-%m-%d")
    if ns.report or ns.raw or ns.xlsx:
        out_dir.mkdir(parents=True, exist_ok=True)
    if ns.report:
        report_path = out_dir / f"blood-sugar-report-{day}.csv"
        report_path.write_text(to_report_text(data), encoding="utf-8")
        print(f"OK: Report: {report_path}")
    if ns.raw:
        raw_path = out_dir / f"blood-sugar-data-{day}.csv"
        raw_path.write_text(to_raw_csv(data.reading_set), encoding="utf-8")
        print(f"OK: Raw data: {raw_path}")
    if ns.xlsx:
        xlsx_path = out_dir / f"blood-sugar-report-{day}.xlsx"
        write_report_xlsx(data, xlsx_path, ExcelLayout())
        print(f"OK: Excel: {xlsx_path}")
    return 0
