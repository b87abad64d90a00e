from __future__ import annotations

import pytest
from dateutil import tz

from bloodsugar_tool.model import Trend
from bloodsugar_tool.pipeline import chart_series, process_csv_text
from bloodsugar_tool.report import SAMPLE_CSV

UTC = tz.UTC


def test_sample_end_to_end() -> None:
    result = process_csv_text(SAMPLE_CSV, local_tz=UTC)
    assert result.ok
    assert result.error is None
    assert result.skipped == ()
    data = result.data
    assert data is not None

    rs = data.reading_set
    assert len(rs.readings) == 10
    assert len(rs.morning) == 5
    assert len(rs.evening) == 5

    stats = data.statistics
    assert stats.average == pytest.approx(134.0)
    assert stats.morning_average == pytest.approx(123.0)
    assert stats.evening_average == pytest.approx(145.0)
    assert (stats.min, stats.max) == (118.0, 155.0)
    assert stats.morning_trend is Trend.INCREASING
    assert stats.evening_trend is Trend.INCREASING
    assert stats.normal_percentage == pytest.approx(10.0)
    assert stats.prediabetic_percentage == pytest.approx(80.0)

    assert len(data.insights) == 5
    assert "(123 mg/dL)" in data.insights[1]
    assert "(145 mg/dL)" in data.insights[3]
    assert data.insights[4].startswith("Only 10%")


def test_sample_with_default_zone() -> None:
    result = process_csv_text(SAMPLE_CSV)
    assert result.data is not None
    assert len(result.data.reading_set.morning) == 5


@pytest.mark.parametrize(
    ("text", "message"),
    [
        ("", "insufficient lines"),
        ("Timestamp,Value\n2023-04-01T08:30:00,120", "missing required columns"),
        ("Date,BloodSugar\nnot-a-date,abc", "no valid readings"),
    ],
)
def test_failures_are_returned_not_raised(text: str, message: str) -> None:
    result = process_csv_text(text, local_tz=UTC)
    assert not result.ok
    assert result.data is None
    assert result.error == message


def test_skipped_rows_are_returned() -> None:
    text = "Date,BloodSugar\n2023-04-01T08:30:00,120\nbad,row\n"
    result = process_csv_text(text, local_tz=UTC)
    assert result.ok
    assert [s.line for s in result.skipped] == ["bad,row"]


def test_chart_series_entry_point() -> None:
    result = process_csv_text(SAMPLE_CSV, local_tz=UTC)
    assert result.data is not None
    series = chart_series(result.data)
    assert len(series.dates) == 5
    assert len(series.morning_values) == len(series.evening_values) == 5


def test_each_call_is_independent() -> None:
    first = process_csv_text(SAMPLE_CSV, local_tz=UTC)
    second = process_csv_text("Date,BloodSugar\n2023-04-01T08:00:00,65", local_tz=UTC)
    assert first.data is not None and second.data is not None
    assert len(first.data.reading_set) == 10
    assert len(second.data.reading_set) == 1


def test_huge_values_return_failure() -> None:
    text = "Date,BloodSugar\n2023-04-01T08:00:00,1e308\n2023-04-02T08:00:00,1e308"
    result = process_csv_text(text, local_tz=UTC)
    assert not result.ok
    assert result.data is None
    assert result.error == "values too large to average"
