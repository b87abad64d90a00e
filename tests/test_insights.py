from __future__ import annotations

from datetime import datetime, timezone

import pytest

from bloodsugar_tool.classify import build_reading
from bloodsugar_tool.insights import (
    FALLBACK_INSIGHT,
    generate_insights,
    round_half_away,
)
from bloodsugar_tool.model import ReadingSet
from bloodsugar_tool.stats import compute_statistics


def _insights(*items: tuple[int, int, float]) -> tuple[str, ...]:
    rs = ReadingSet.from_readings(
        build_reading(datetime(2023, 4, day, hour, 0, tzinfo=timezone.utc), v)
        for day, hour, v in items
    )
    return generate_insights(rs, compute_statistics(rs))


@pytest.mark.parametrize(
    ("value", "expected"),
    [(72.5, 73), (0.5, 1), (2.4999, 2), (123.0, 123), (-2.5, -3)],
)
def test_round_half_away(value: float, expected: int) -> None:
    assert round_half_away(value) == expected


def test_single_hypoglycemic_reading_is_counted() -> None:
    insights = _insights((1, 8, 65.0))
    assert insights[0].startswith("You have 1 blood sugar reading(s) below 70 mg/dL")
    assert insights[1].startswith("Only 0% of your readings")
    assert len(insights) == 2


def test_morning_rules_fire_in_order() -> None:
    insights = _insights((1, 8, 140.0), (2, 8, 130.0), (3, 8, 120.0))
    assert len(insights) == 3
    assert insights[0].startswith("Your morning blood sugar is trending downward")
    assert insights[1].startswith("Your average morning blood sugar (130 mg/dL)")
    assert insights[2].startswith("Only 0% of your readings")


def test_morning_upward_trend() -> None:
    insights = _insights((1, 8, 70.0), (2, 8, 80.0), (3, 8, 90.0), (4, 8, 95.0))
    assert insights[0].startswith("Your morning (fasting) blood sugar is trending upward")
    assert insights[1].startswith("100% of your readings are in the normal range")


def test_evening_rules() -> None:
    insights = _insights((1, 19, 150.0), (2, 19, 160.0), (3, 19, 171.0))
    assert insights[0].startswith("Your evening blood sugar readings are trending upward")
    assert insights[1].startswith("Your average evening blood sugar (160 mg/dL)")
    assert insights[2].startswith("Only 0%")


def test_good_control() -> None:
    insights = _insights((1, 8, 90.0), (2, 8, 90.0), (3, 8, 90.0), (4, 8, 90.0))
    assert insights == (
        "100% of your readings are in the normal range, which shows good blood "
        "sugar control.",
    )


def test_fallback_when_no_rule_fires() -> None:
    insights = _insights((1, 8, 90.0), (1, 19, 130.0), (2, 19, 145.0))
    assert insights == (FALLBACK_INSIGHT,)


def test_control_boundaries_do_not_fire() -> None:
    # 50% normal exactly: neither low nor good control.
    insights = _insights((1, 8, 90.0), (1, 19, 145.0))
    assert not any("% of your readings" in text for text in insights)
