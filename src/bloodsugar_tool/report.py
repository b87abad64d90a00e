"""Formatos de salida: series para gráficos, reporte CSV y CSV crudo."""

from __future__ import annotations

from datetime import timezone

from bloodsugar_tool.model import ChartSeries, ProcessedData, ReadingSet, Trend
from bloodsugar_tool.stats import readings_to_frame
from bloodsugar_tool.thresholds import FASTING, POSTPRANDIAL

RAW_HEADER = "Date,BloodSugar"
REPORT_HEADER = "Date,Time,Blood Sugar (mg/dL),Category"

SAMPLE_CSV = """Date,BloodSugar
2023-04-01T08:30:00,120
2023-04-01T18:45:00,145
2023-04-02T07:15:00,118
2023-04-02T19:30:00,135
2023-04-03T08:00:00,125
2023-04-03T20:00:00,155
2023-04-04T07:45:00,122
2023-04-04T19:15:00,140
2023-04-05T08:30:00,130
2023-04-05T18:30:00,150"""

_TREND_LABELS: dict[Trend, str] = {
    Trend.INCREASING: "Upward ↑",
    Trend.DECREASING: "Downward ↓",
    Trend.STABLE: "Stable →",
}


def format_trend(trend: Trend) -> str:
    """Human label with arrow for a trend."""
    return _TREND_LABELS[trend]


def format_number(value: float) -> str:
    """Format mg/dL values without a trailing ``.0`` for whole numbers."""
    if value.is_integer():
        return str(int(value))
    return str(value)


def reference_lines() -> tuple[tuple[str, float], ...]:
    """Horizontal guide lines for glucose charts, from the threshold table."""
    return (
        ("Hypoglycemic", FASTING.hypoglycemic),
        ("Normal Fasting Max", FASTING.normal_max + 1),
        ("Normal Postprandial Max", POSTPRANDIAL.normal_max + 1),
        ("Prediabetic Max", POSTPRANDIAL.prediabetic_max + 1),
    )


def to_chart_series(reading_set: ReadingSet) -> ChartSeries:
    """Project readings onto one morning and one evening value per UTC day.

    Duplicate readings for the same day and period are not aggregated: the
    first one (in timestamp order) is used.

    Args:
        reading_set: Processed readings.

    Returns:
        Chart series with ``None`` for missing values.
    """
    frame = readings_to_frame(reading_set.readings)
    dates = tuple(sorted(frame["utc_date"].unique()))
    firsts = frame.drop_duplicates(["utc_date", "time_of_day"], keep="first")
    lookup = {
        (row.utc_date, row.time_of_day): float(row.glucose_mg_dl)
        for row in firsts.itertuples(index=False)
    }
    return ChartSeries(
        dates=dates,
        morning_values=tuple(lookup.get((d, "morning")) for d in dates),
        evening_values=tuple(lookup.get((d, "evening")) for d in dates),
    )


def to_report_text(data: ProcessedData) -> str:
    """Render the full CSV report: readings, summary statistics, insights.

    Args:
        data: Processed data.

    Returns:
        Report text, newline-terminated.
    """
    stats = data.statistics
    lines = [REPORT_HEADER]
    for r in data.reading_set.readings:
        lines.append(
            ",".join(
                (
                    r.timestamp.date().isoformat(),
                    r.timestamp.strftime("%H:%M:%S"),
                    format_number(r.value),
                    r.category.value,
                )
            )
        )

    lines.extend(
        [
            "",
            "Summary Statistics",
            f"Average Blood Sugar,{stats.average:.1f} mg/dL",
            f"Morning Average,{stats.morning_average:.1f} mg/dL",
            f"Evening Average,{stats.evening_average:.1f} mg/dL",
            f"Highest Reading,{format_number(stats.max)} mg/dL",
            f"Lowest Reading,{format_number(stats.min)} mg/dL",
            f"Morning Trend,{stats.morning_trend.value}",
            f"Evening Trend,{stats.evening_trend.value}",
            f"Normal Readings,{stats.normal_percentage:.1f}%",
            f"Pre-diabetic Readings,{stats.prediabetic_percentage:.1f}%",
            f"Diabetic Readings,{stats.diabetic_percentage:.1f}%",
            f"Hypoglycemic Readings,{stats.hypoglycemic_percentage:.1f}%",
            "",
            "Insights",
        ]
    )
    lines.extend(data.insights)
    return "\n".join(lines) + "\n"


def to_raw_csv(reading_set: ReadingSet) -> str:
    """Re-export readings as ``Date,BloodSugar`` with UTC ISO timestamps."""
    lines = [RAW_HEADER]
    for r in reading_set.readings:
        stamp = r.timestamp.astimezone(timezone.utc).isoformat(
            timespec="milliseconds"
        )
        lines.append(f"{stamp.replace('+00:00', 'Z')},{format_number(r.value)}")
    return "\n".join(lines) + "\n"
