"""
Hourly irradiance series parser.

Reduces one dataset-year of NSRDB CSV export text to a ParsedYearSummary:
locates the header row, finds the GHI (required) and DNI (optional) columns,
and sums every row whose GHI value is a finite number.

Header detection and column lookup deliberately use different rules:
- the header is the first line, within the scan window, that mentions "GHI"
  anywhere (case-insensitive substring)
- the column index is the field whose trimmed, uppercased name is exactly
  "GHI" (or "DNI"), so a header field like "GHI (W/m2)" does not match
"""

import logging
import math
from typing import Optional

from solar_snapshot.config import (
    DAYS_PER_YEAR,
    HEADER_SCAN_LINES,
    MIN_PAYLOAD_LINES,
    WH_PER_KWH,
)
from solar_snapshot.engine.errors import (
    ColumnNotFoundError,
    HeaderNotFoundError,
    InsufficientDataError,
    NoValidRecordsError,
)
from solar_snapshot.models.solar import ParsedYearSummary

logger = logging.getLogger(__name__)


def parse_series(raw_text: str, year: int) -> ParsedYearSummary:
    """
    Parse one year of hourly GHI/DNI samples into annual totals.

    Args:
        raw_text: CSV export text, possibly preceded by metadata lines
        year: The year the payload was requested for

    Returns:
        ParsedYearSummary with totals in kWh/m² and daily averages over 365 days

    Raises:
        InsufficientDataError: fewer than 10 lines in the payload
        HeaderNotFoundError: no line mentioning GHI within the first 15 lines
        ColumnNotFoundError: the header has no field named exactly GHI
        NoValidRecordsError: no data row carries a finite GHI value
    """
    # Newline only; other Unicode line breaks stay inside their line
    lines = [line.rstrip() for line in raw_text.lstrip("\ufeff").strip().split("\n")]
    if len(lines) < MIN_PAYLOAD_LINES:
        raise InsufficientDataError("Insufficient data in response")

    header_idx = _find_header(lines)
    if header_idx is None:
        raise HeaderNotFoundError("Could not find data header in CSV")

    columns = [name.strip().upper() for name in lines[header_idx].split(",")]
    if "GHI" not in columns:
        raise ColumnNotFoundError("GHI column not found in data")
    ghi_col = columns.index("GHI")
    dni_col = columns.index("DNI") if "DNI" in columns else None

    ghi_sum = 0.0
    dni_sum = 0.0
    count = 0
    skipped = 0

    for line in lines[header_idx + 1:]:
        fields = line.split(",")
        ghi = _finite_field(fields, ghi_col)
        if ghi is None:
            skipped += 1
            continue

        ghi_sum += ghi
        if dni_col is not None:
            dni = _finite_field(fields, dni_col)
            if dni is not None:
                dni_sum += dni
        count += 1

    if count == 0:
        raise NoValidRecordsError("No valid data records found")

    if skipped:
        logger.debug("Year %d: skipped %d rows without a finite GHI value", year, skipped)

    ghi_total = ghi_sum / WH_PER_KWH
    dni_total = dni_sum / WH_PER_KWH

    return ParsedYearSummary(
        year=year,
        ghi_total=ghi_total,
        dni_total=dni_total,
        sample_count=count,
        ghi_daily_avg=ghi_total / DAYS_PER_YEAR,
        dni_daily_avg=dni_total / DAYS_PER_YEAR,
    )


def _find_header(lines: list[str]) -> Optional[int]:
    """Index of the first line mentioning GHI within the scan window."""
    for i, line in enumerate(lines[:HEADER_SCAN_LINES]):
        if "GHI" in line.upper():
            return i
    return None


def _finite_field(fields: list[str], col: int) -> Optional[float]:
    """Float value of a field, or None if missing, non-numeric or non-finite."""
    try:
        value = float(fields[col])
    except (ValueError, IndexError):
        return None
    if not math.isfinite(value):
        return None
    return value
