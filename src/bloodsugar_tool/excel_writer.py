"""Generación de Excel formateado con lecturas, resumen e insights."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pandas as pd
from openpyxl.styles import Alignment, Border, Font, Side

from bloodsugar_tool.model import ProcessedData
from bloodsugar_tool.report import format_trend, reference_lines
from bloodsugar_tool.stats import daily_summary

_WEEKDAYS: tuple[str, ...] = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

_HEADER_MAP: dict[str, str] = {
    "weekday": "Day",
    "datetime": "Date / Time",
    "date": "Date",
    "glucose_mg_dl": "Blood Sugar (mg/dL)",
    "time_of_day": "Period",
    "category": "Category",
    "glucose_count": "Readings",
    "glucose_min": "Min (mg/dL)",
    "glucose_max": "Max (mg/dL)",
    "glucose_avg": "Average (mg/dL)",
    "morning_avg": "Morning avg\n(mg/dL)",
    "evening_avg": "Evening avg\n(mg/dL)",
}

_COLUMN_WIDTHS: tuple[tuple[str, int], ...] = (
    ("Day", 6),
    ("Date / Time", 18),
    ("Date", 12),
    ("Blood Sugar (mg/dL)", 14),
    ("Period", 10),
    ("Category", 14),
    ("Readings", 10),
    ("Min (mg/dL)", 12),
    ("Max (mg/dL)", 12),
    ("Average (mg/dL)", 14),
    ("Morning avg\n(mg/dL)", 12),
    ("Evening avg\n(mg/dL)", 12),
    ("Metric", 24),
    ("Value", 16),
    ("Insight", 100),
)

_NUMBER_FORMATS: dict[str, str] = {
    "Date / Time": "dd/mm/yyyy hh:mm",
    "Date": "dd/mm/yyyy",
    "Blood Sugar (mg/dL)": "0.0",
    "Min (mg/dL)": "0.0",
    "Max (mg/dL)": "0.0",
    "Average (mg/dL)": "0.00",
    "Morning avg\n(mg/dL)": "0.00",
    "Evening avg\n(mg/dL)": "0.00",
    "Readings": "0",
}


@dataclass(frozen=True)
class ExcelLayout:
    """Sheet names for the report workbook."""

    readings_sheet: str = "Readings"
    daily_sheet: str = "Daily summary"
    statistics_sheet: str = "Statistics"
    insights_sheet: str = "Insights"


def _weekday_label(i: object) -> str:
    """Convierte índice 0-6 (lunes-domingo) a etiqueta de 3 letras."""
    if isinstance(i, int) and 0 <= i < 7:
        return _WEEKDAYS[i]
    return ""


def readings_frame(data: ProcessedData) -> pd.DataFrame:
    """One row per reading with weekday, naive local datetime and category."""
    readings = data.reading_set.readings
    return pd.DataFrame(
        {
            "weekday": [_weekday_label(r.timestamp.weekday()) for r in readings],
            "datetime": [r.timestamp.replace(tzinfo=None) for r in readings],
            "glucose_mg_dl": [r.value for r in readings],
            "time_of_day": [r.time_of_day.value for r in readings],
            "category": [r.category.value for r in readings],
        }
    )


def statistics_frame(data: ProcessedData) -> pd.DataFrame:
    """Summary statistics and chart guide lines as Metric/Value rows."""
    s = data.statistics
    rows = [
        ("Average Blood Sugar", round(s.average, 1)),
        ("Morning Average", round(s.morning_average, 1)),
        ("Evening Average", round(s.evening_average, 1)),
        ("Highest Reading", s.max),
        ("Lowest Reading", s.min),
        ("Morning Trend", format_trend(s.morning_trend)),
        ("Evening Trend", format_trend(s.evening_trend)),
        ("Normal Readings (%)", round(s.normal_percentage, 1)),
        ("Pre-diabetic Readings (%)", round(s.prediabetic_percentage, 1)),
        ("Diabetic Readings (%)", round(s.diabetic_percentage, 1)),
        ("Hypoglycemic Readings (%)", round(s.hypoglycemic_percentage, 1)),
    ]
    rows.extend(
        (f"Chart line: {label} (mg/dL)", value) for label, value in reference_lines()
    )
    return pd.DataFrame(rows, columns=["Metric", "Value"])


def write_report_xlsx(
    data: ProcessedData, out_path: Path, layout: ExcelLayout
) -> None:
    """Write a formatted workbook suitable for printing.

    Args:
        data: Processed data.
        out_path: Output path for the XLSX file.
        layout: Sheet names.
    """
    out_path.parent.mkdir(parents=True, exist_ok=True)

    sheets = {
        layout.readings_sheet: readings_frame(data),
        layout.daily_sheet: daily_summary(data.reading_set),
        layout.statistics_sheet: statistics_frame(data),
        layout.insights_sheet: pd.DataFrame({"Insight": list(data.insights)}),
    }

    with pd.ExcelWriter(out_path, engine="openpyxl") as writer:
        for name, frame in sheets.items():
            frame.rename(columns=_HEADER_MAP).to_excel(
                writer, index=False, sheet_name=name
            )
            _format_sheet(writer.book[name])


def _style_header_row(ws: Any) -> None:
    """Aplica fuente negrita, alineación y borde a la fila de cabecera."""
    thin = Side(style="thin")
    border = Border(left=thin, right=thin, top=thin, bottom=thin)
    header_font = Font(bold=True)
    center = Alignment(horizontal="center", vertical="center", wrap_text=True)
    for cell in ws[1]:
        cell.font = header_font
        cell.alignment = center
        cell.border = border


def _style_body_rows(ws: Any) -> None:
    """Aplica alineación y borde a las filas de datos."""
    thin = Side(style="thin")
    border = Border(left=thin, right=thin, top=thin, bottom=thin)
    center = Alignment(horizontal="center", vertical="center", wrap_text=True)
    for row in ws.iter_rows(min_row=2):
        for cell in row:
            cell.alignment = center
            cell.border = border


def _get_header_col_index(ws: Any) -> dict[str, int]:
    """Devuelve mapa nombre de cabecera -> índice de columna (1-based)."""
    headers = [str(cell.value) for cell in ws[1]]
    return {name: idx + 1 for idx, name in enumerate(headers)}


def _apply_column_widths(ws: Any, col_index: dict[str, int]) -> None:
    """Establece anchos de columna para evitar ###."""
    for header, width in _COLUMN_WIDTHS:
        idx = col_index.get(header)
        if idx is not None:
            letter = ws.cell(row=1, column=idx).column_letter
            ws.column_dimensions[letter].width = width


def _apply_number_formats(ws: Any, col_index: dict[str, int]) -> None:
    """Aplica formatos numéricos por cabecera."""
    for row in ws.iter_rows(min_row=2):
        for header, fmt in _NUMBER_FORMATS.items():
            idx = col_index.get(header)
            if idx is not None:
                row[idx - 1].number_format = fmt


def _format_sheet(ws: Any) -> None:
    """Apply borders, widths and number formats to a worksheet.

    Args:
        ws: openpyxl worksheet.
    """
    _style_header_row(ws)
    _style_body_rows(ws)
    col_index = _get_header_col_index(ws)
    _apply_column_widths(ws, col_index)
    _apply_number_formats(ws, col_index)
