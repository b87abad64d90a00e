"""Modelos tipados para lecturas de glucosa y datos procesados."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class TimeOfDay(str, Enum):
    """Measurement context: morning (fasting) or evening (postprandial)."""

    MORNING = "morning"
    EVENING = "evening"


class Category(str, Enum):
    """Medical category of a single reading."""

    NORMAL = "normal"
    PREDIABETIC = "prediabetic"
    DIABETIC = "diabetic"
    HYPOGLYCEMIC = "hypoglycemic"


class Trend(str, Enum):
    """Direction of a regression slope over a group of readings."""

    STABLE = "stable"
    INCREASING = "increasing"
    DECREASING = "decreasing"


@dataclass(frozen=True)
class Reading:
    """One blood sugar measurement (timestamped, mg/dL)."""

    timestamp: datetime
    value: float
    time_of_day: TimeOfDay
    category: Category


@dataclass(frozen=True)
class ReadingSet:
    """Sorted readings plus their morning/evening partition."""

    readings: tuple[Reading, ...]
    morning: tuple[Reading, ...]
    evening: tuple[Reading, ...]

    @classmethod
    def from_readings(cls, readings: Iterable[Reading]) -> ReadingSet:
        """Sort readings by timestamp (stable) and split them by time of day.

        Args:
            readings: Readings in any order.

        Returns:
            A new reading set.
        """
        ordered = tuple(sorted(readings, key=lambda r: r.timestamp))
        return cls(
            readings=ordered,
            morning=tuple(r for r in ordered if r.time_of_day is TimeOfDay.MORNING),
            evening=tuple(r for r in ordered if r.time_of_day is TimeOfDay.EVENING),
        )

    def __len__(self) -> int:
        return len(self.readings)


@dataclass(frozen=True)
class Statistics:
    """Aggregated statistics derived from a reading set."""

    average: float
    morning_average: float
    evening_average: float
    max: float
    min: float
    morning_trend: Trend
    evening_trend: Trend
    normal_percentage: float
    prediabetic_percentage: float
    diabetic_percentage: float
    hypoglycemic_percentage: float


@dataclass(frozen=True)
class ProcessedData:
    """Full output of one parse-and-process call."""

    reading_set: ReadingSet
    statistics: Statistics
    insights: tuple[str, ...]


@dataclass(frozen=True)
class ChartSeries:
    """Per-day morning/evening values ready for plotting.

    ``None`` marks a day without a reading for that period.
    """

    dates: tuple[str, ...]
    morning_values: tuple[float | None, ...]
    evening_values: tuple[float | None, ...]
