"""Tendencia por regresión lineal sobre el índice de lectura."""

from __future__ import annotations

from collections.abc import Sequence

import pandas as pd

from bloodsugar_tool.model import Reading, Trend

MIN_TREND_READINGS = 3
SLOPE_THRESHOLD = 0.5


def slope(values: Sequence[float]) -> float:
    """Least-squares slope of values against their position 0..n-1.

    Returns 0 when the index has no variance (fewer than 2 values).
    """
    y = pd.Series(values, dtype="float64")
    x = pd.Series(range(len(y)), dtype="float64")
    if len(y) < 2:
        return 0.0
    variance = x.var()
    if not variance:
        return 0.0
    return float(x.cov(y) / variance)


def analyze_trend(readings: Sequence[Reading]) -> Trend:
    """Classify the direction of a group of readings.

    Args:
        readings: Readings of one time-of-day group, in timestamp order.

    Returns:
        ``stable`` with fewer than 3 readings or when ``|slope| < 0.5``,
        otherwise ``increasing`` or ``decreasing``.
    """
    if len(readings) < MIN_TREND_READINGS:
        return Trend.STABLE
    coefficient = slope([r.value for r in readings])
    if abs(coefficient) < SLOPE_THRESHOLD:
        return Trend.STABLE
    return Trend.INCREASING if coefficient > 0 else Trend.DECREASING
