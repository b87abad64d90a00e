"""Umbrales médicos de glucosa (ayuno / postprandial)."""

from __future__ import annotations

from dataclasses import dataclass

from bloodsugar_tool.model import TimeOfDay


@dataclass(frozen=True)
class Thresholds:
    """Cutoffs in mg/dL for one measurement context."""

    hypoglycemic: float
    normal_max: float
    prediabetic_max: float


# ADA guidelines
FASTING = Thresholds(hypoglycemic=70, normal_max=99, prediabetic_max=125)
POSTPRANDIAL = Thresholds(hypoglycemic=70, normal_max=139, prediabetic_max=199)


def thresholds_for(time_of_day: TimeOfDay) -> Thresholds:
    """Return the thresholds for a time of day (morning is fasting)."""
    if time_of_day is TimeOfDay.MORNING:
        return FASTING
    return POSTPRANDIAL
