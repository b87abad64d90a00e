"""Estadísticas agregadas (promedios, extremos, porcentajes, resumen diario)."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import timezone

import pandas as pd

from bloodsugar_tool.model import (
    Category,
    Reading,
    ReadingSet,
    Statistics,
    TimeOfDay,
)
from bloodsugar_tool.trend import analyze_trend

FRAME_COLUMNS = [
    "datetime",
    "date",
    "time",
    "utc_date",
    "glucose_mg_dl",
    "time_of_day",
    "category",
]

DAILY_COLUMNS = [
    "date",
    "glucose_count",
    "glucose_min",
    "glucose_max",
    "glucose_avg",
    "morning_avg",
    "evening_avg",
]


def readings_to_frame(readings: Sequence[Reading]) -> pd.DataFrame:
    """Convert readings to a DataFrame with local date/time and UTC day."""
    rows = [
        {
            "datetime": r.timestamp,
            "date": r.timestamp.date(),
            "time": r.timestamp.time().replace(microsecond=0),
            "utc_date": r.timestamp.astimezone(timezone.utc).date().isoformat(),
            "glucose_mg_dl": r.value,
            "time_of_day": r.time_of_day.value,
            "category": r.category.value,
        }
        for r in readings
    ]
    if not rows:
        return pd.DataFrame(columns=FRAME_COLUMNS)
    # Las lecturas ya vienen ordenadas; mergesort conserva empates.
    df = pd.DataFrame(rows, columns=FRAME_COLUMNS)
    return df.sort_values("datetime", kind="mergesort").reset_index(drop=True)


def compute_statistics(reading_set: ReadingSet) -> Statistics:
    """Aggregate a reading set into summary statistics.

    Averages of an empty morning/evening group are 0. Min/max cover all
    readings. Category percentages use the total count as denominator.

    Args:
        reading_set: Non-empty, sorted reading set.

    Returns:
        Statistics for the set.

    Raises:
        ValueError: If the reading set is empty.
    """
    if not reading_set.readings:
        raise ValueError("Cannot compute statistics without readings")

    frame = readings_to_frame(reading_set.readings)
    values = frame["glucose_mg_dl"]
    by_period = frame.groupby("time_of_day")["glucose_mg_dl"].mean()
    shares = (
        frame["category"]
        .value_counts(normalize=True)
        .reindex([c.value for c in Category], fill_value=0.0)
        * 100
    )

    return Statistics(
        average=float(values.mean()),
        morning_average=float(by_period.get(TimeOfDay.MORNING.value, 0.0)),
        evening_average=float(by_period.get(TimeOfDay.EVENING.value, 0.0)),
        max=float(values.max()),
        min=float(values.min()),
        morning_trend=analyze_trend(reading_set.morning),
        evening_trend=analyze_trend(reading_set.evening),
        normal_percentage=float(shares[Category.NORMAL.value]),
        prediabetic_percentage=float(shares[Category.PREDIABETIC.value]),
        diabetic_percentage=float(shares[Category.DIABETIC.value]),
        hypoglycemic_percentage=float(shares[Category.HYPOGLYCEMIC.value]),
    )


def category_counts(reading_set: ReadingSet) -> dict[Category, int]:
    """Count readings per category (every category present, maybe 0)."""
    counts = dict.fromkeys(Category, 0)
    for reading in reading_set.readings:
        counts[reading.category] += 1
    return counts


def daily_summary(reading_set: ReadingSet) -> pd.DataFrame:
    """Aggregate glucose by local day (count/min/max/avg, morning/evening avg)."""
    frame = readings_to_frame(reading_set.readings)
    if frame.empty:
        return pd.DataFrame(columns=DAILY_COLUMNS)

    g = frame.groupby("date", as_index=False).agg(
        glucose_count=("glucose_mg_dl", "count"),
        glucose_min=("glucose_mg_dl", "min"),
        glucose_max=("glucose_mg_dl", "max"),
        glucose_avg=("glucose_mg_dl", "mean"),
    )
    periods = (
        frame.pivot_table(
            index="date",
            columns="time_of_day",
            values="glucose_mg_dl",
            aggfunc="mean",
        )
        .reindex(columns=[TimeOfDay.MORNING.value, TimeOfDay.EVENING.value])
        .rename(
            columns={
                TimeOfDay.MORNING.value: "morning_avg",
                TimeOfDay.EVENING.value: "evening_avg",
            }
        )
        .reset_index()
    )
    periods.columns.name = None
    out = g.merge(periods, on="date", how="left")
    for col in ("glucose_avg", "morning_avg", "evening_avg"):
        out[col] = out[col].round(2)
    return out[DAILY_COLUMNS].sort_values("date").reset_index(drop=True)
