"""Generación de observaciones en texto a partir de las estadísticas."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from bloodsugar_tool.model import Category, ReadingSet, Statistics, Trend
from bloodsugar_tool.stats import category_counts
from bloodsugar_tool.thresholds import FASTING, POSTPRANDIAL

LOW_CONTROL_PERCENTAGE = 50
GOOD_CONTROL_PERCENTAGE = 75

FALLBACK_INSIGHT = (
    "Your blood sugar readings appear to be relatively stable. Continue "
    "monitoring and maintain your current management plan."
)


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(Decimal(value).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def generate_insights(
    reading_set: ReadingSet, statistics: Statistics
) -> tuple[str, ...]:
    """Apply the insight rules in their fixed order.

    Morning rules, then evening rules, then hypoglycemia, then overall
    control. When no rule fires a single "stable" insight is returned.

    Args:
        reading_set: Processed readings (used for group sizes and counts).
        statistics: Statistics computed from the same reading set.

    Returns:
        Insight texts in display order.
    """
    insights: list[str] = []

    if reading_set.morning:
        if statistics.morning_trend is Trend.INCREASING:
            insights.append(
                "Your morning (fasting) blood sugar is trending upward. Consider "
                "evaluating your evening meals and bedtime snacks."
            )
        elif statistics.morning_trend is Trend.DECREASING:
            insights.append(
                "Your morning blood sugar is trending downward, which is "
                "positive if previous levels were elevated."
            )

        if statistics.morning_average > FASTING.normal_max:
            average = round_half_away(statistics.morning_average)
            insights.append(
                f"Your average morning blood sugar ({average} mg/dL) is above "
                "the normal fasting range. This may indicate the dawn "
                "phenomenon or evening dietary factors."
            )

    if reading_set.evening:
        if statistics.evening_trend is Trend.INCREASING:
            insights.append(
                "Your evening blood sugar readings are trending upward. Consider "
                "reviewing your meal portions and carbohydrate intake."
            )

        if statistics.evening_average > POSTPRANDIAL.normal_max:
            average = round_half_away(statistics.evening_average)
            insights.append(
                f"Your average evening blood sugar ({average} mg/dL) is above "
                "the normal post-meal range. Consider spacing your meals or "
                "adjusting your diet."
            )

    hypoglycemic = category_counts(reading_set)[Category.HYPOGLYCEMIC]
    if hypoglycemic > 0:
        insights.append(
            f"You have {hypoglycemic} blood sugar reading(s) below "
            f"{FASTING.hypoglycemic:g} mg/dL, which indicates hypoglycemia. "
            "Please discuss these episodes with your healthcare provider."
        )

    normal = statistics.normal_percentage
    if normal < LOW_CONTROL_PERCENTAGE:
        insights.append(
            f"Only {round_half_away(normal)}% of your readings are in the normal "
            "range. Work with your healthcare provider to improve blood sugar "
            "control."
        )
    elif normal > GOOD_CONTROL_PERCENTAGE:
        insights.append(
            f"{round_half_away(normal)}% of your readings are in the normal "
            "range, which shows good blood sugar control."
        )

    if not insights:
        insights.append(FALLBACK_INSIGHT)
    return tuple(insights)
