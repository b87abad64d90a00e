"""Lectura de CSV de glucosa (Date,BloodSugar) en lecturas tipadas."""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from datetime import datetime, tzinfo

from dateutil import parser as date_parser
from dateutil import tz

from bloodsugar_tool.classify import build_reading
from bloodsugar_tool.model import Reading, ReadingSet

logger = logging.getLogger(__name__)

DATE_MARKER = "date"
VALUE_MARKER = "bloodsugar"

_LEADING_NUMBER = re.compile(r"\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


class FormatError(ValueError):
    """The CSV text as a whole cannot be turned into readings."""


@dataclass(frozen=True)
class RowSkipped:
    """Diagnostic for a data line dropped during parsing."""

    line_number: int
    line: str
    reason: str


@dataclass(frozen=True)
class ParseResult:
    """Parsed readings plus the lines that were skipped."""

    reading_set: ReadingSet
    skipped: tuple[RowSkipped, ...]


def parse_readings(text: str, local_tz: tzinfo | None = None) -> ParseResult:
    """Parse CSV text into a sorted, classified reading set.

    Bad rows are skipped with a diagnostic; only whole-file problems raise.

    Args:
        text: Raw CSV content. First line is the header.
        local_tz: Zone for naive timestamps and time-of-day. Defaults to the
            machine's local zone.

    Returns:
        Parse result with a non-empty reading set.

    Raises:
        FormatError: If there are fewer than 2 lines, the header lacks the
            date/bloodsugar columns, or no line yields a valid reading.
    """
    zone = local_tz if local_tz is not None else tz.tzlocal()
    lines = text.split("\n")
    if len(lines) < 2:
        raise FormatError("insufficient lines")

    if not _has_required_columns(lines[0]):
        raise FormatError("missing required columns")

    readings: list[Reading] = []
    skipped: list[RowSkipped] = []
    for line_number, raw_line in enumerate(lines[1:], start=2):
        line = raw_line.strip()
        if not line:
            continue
        try:
            readings.append(_line_to_reading(line, zone))
        except ValueError as exc:
            row = RowSkipped(line_number=line_number, line=line, reason=str(exc))
            logger.warning("Skipping line %d (%s): %s", line_number, exc, line)
            skipped.append(row)

    if not readings:
        raise FormatError("no valid readings")

    logger.debug("Parsed %d readings, skipped %d", len(readings), len(skipped))
    return ParseResult(
        reading_set=ReadingSet.from_readings(readings),
        skipped=tuple(skipped),
    )


def _has_required_columns(header: str) -> bool:
    """Busca los marcadores de fecha y glucosa (substring, sin mayúsculas)."""
    normalized = header.lower().strip()
    return DATE_MARKER in normalized and VALUE_MARKER in normalized


def _line_to_reading(line: str, zone: tzinfo) -> Reading:
    """Convierte una línea de datos en Reading; ValueError si es inválida."""
    parts = line.split(",")
    if len(parts) < 2:
        raise ValueError("expected at least 2 columns")
    timestamp = parse_timestamp(parts[0].strip(), zone)
    value = parse_value(parts[1].strip())
    return build_reading(timestamp, value)


def parse_timestamp(raw: str, zone: tzinfo) -> datetime:
    """Parse a date-time string and express it in ``zone``.

    Naive values are taken as already local to ``zone``. Precision is cut to
    milliseconds, the resolution of the raw CSV export.

    Raises:
        ValueError: If the string is not a recognizable date-time.
    """
    if not raw:
        raise ValueError("empty date")
    try:
        parsed = date_parser.parse(raw)
    except (ValueError, OverflowError) as exc:
        raise ValueError(f"invalid date {raw!r}") from exc
    parsed = parsed.replace(microsecond=parsed.microsecond // 1000 * 1000)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=zone)
    return parsed.astimezone(zone)


def parse_value(raw: str) -> float:
    """Parse a mg/dL value from the number at the start of ``raw``.

    Trailing text is ignored, so ``"120 mg/dL"`` reads as 120. The number
    must be finite and non-negative.

    Raises:
        ValueError: If ``raw`` does not start with a number, or the number is
            not finite or negative.
    """
    match = _LEADING_NUMBER.match(raw)
    if match is None:
        raise ValueError(f"invalid value {raw!r}")
    value = float(match.group(0))
    if not math.isfinite(value) or value < 0:
        raise ValueError(f"invalid value {raw!r}")
    return value
