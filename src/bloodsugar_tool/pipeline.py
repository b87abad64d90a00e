"""Punto de entrada del procesamiento: texto CSV -> datos procesados."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import tzinfo

from bloodsugar_tool.insights import generate_insights
from bloodsugar_tool.model import ChartSeries, ProcessedData
from bloodsugar_tool.parser import FormatError, RowSkipped, parse_readings
from bloodsugar_tool.report import to_chart_series
from bloodsugar_tool.stats import compute_statistics

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProcessResult:
    """Outcome of processing one CSV upload.

    Exactly one of ``data`` and ``error`` is set.
    """

    data: ProcessedData | None
    error: str | None = None
    skipped: tuple[RowSkipped, ...] = ()

    @property
    def ok(self) -> bool:
        return self.data is not None


def process_csv_text(text: str, local_tz: tzinfo | None = None) -> ProcessResult:
    """Parse, aggregate and derive insights from CSV text.

    Format failures, and values too large to average, are returned, not
    raised.

    Args:
        text: Raw CSV content.
        local_tz: Zone for naive timestamps and time of day (default local).

    Returns:
        Process result with the full data model, or the failure message.
    """
    try:
        parsed = parse_readings(text, local_tz=local_tz)
    except FormatError as exc:
        logger.error("Cannot process CSV: %s", exc)
        return ProcessResult(data=None, error=str(exc))

    statistics = compute_statistics(parsed.reading_set)
    averages = (
        statistics.average,
        statistics.morning_average,
        statistics.evening_average,
    )
    if not all(math.isfinite(a) for a in averages):
        logger.error("Cannot process CSV: averages overflow")
        return ProcessResult(
            data=None, error="values too large to average", skipped=parsed.skipped
        )

    insights = generate_insights(parsed.reading_set, statistics)
    data = ProcessedData(
        reading_set=parsed.reading_set,
        statistics=statistics,
        insights=insights,
    )
    logger.info("Processed %d blood sugar readings", len(parsed.reading_set))
    return ProcessResult(data=data, skipped=parsed.skipped)


def chart_series(data: ProcessedData) -> ChartSeries:
    """Chart projection of processed data."""
    return to_chart_series(data.reading_set)
