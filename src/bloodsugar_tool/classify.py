"""Clasificación de lecturas por momento del día y categoría médica."""

from __future__ import annotations

from datetime import datetime

from bloodsugar_tool.model import Category, Reading, TimeOfDay
from bloodsugar_tool.thresholds import thresholds_for

NOON_HOUR = 12


def time_of_day_for(timestamp: datetime) -> TimeOfDay:
    """Morning if the (local) hour is before noon, evening otherwise."""
    if timestamp.hour < NOON_HOUR:
        return TimeOfDay.MORNING
    return TimeOfDay.EVENING


def categorize(value: float, time_of_day: TimeOfDay) -> Category:
    """Categorize a value against the thresholds of its context.

    Upper bounds are inclusive.

    Args:
        value: Blood sugar in mg/dL.
        time_of_day: Measurement context.

    Returns:
        The medical category.
    """
    limits = thresholds_for(time_of_day)
    if value < limits.hypoglycemic:
        return Category.HYPOGLYCEMIC
    if value <= limits.normal_max:
        return Category.NORMAL
    if value <= limits.prediabetic_max:
        return Category.PREDIABETIC
    return Category.DIABETIC


def classify(timestamp: datetime, value: float) -> tuple[TimeOfDay, Category]:
    """Derive time of day and category for a measurement."""
    time_of_day = time_of_day_for(timestamp)
    return time_of_day, categorize(value, time_of_day)


def build_reading(timestamp: datetime, value: float) -> Reading:
    """Build an immutable reading with its derived fields.

    Args:
        timestamp: Measurement time, already expressed in the local zone.
        value: Finite, non-negative blood sugar in mg/dL.

    Returns:
        Classified reading.
    """
    time_of_day, category = classify(timestamp, value)
    return Reading(
        timestamp=timestamp,
        value=value,
        time_of_day=time_of_day,
        category=category,
    )
