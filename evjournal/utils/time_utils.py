"""
Date parsing and period bucketing utilities for EV Journal.

Provides consistent date handling across the engine:
- Multiple format support (ISO, YYYY-MM-DD, Unix timestamp)
- Timezone handling (naive values are assumed UTC)
- Period keys for weekly/monthly/yearly aggregation
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from dateutil import parser as date_parser

logger = logging.getLogger(__name__)


# Common date format patterns
DATETIME_FORMATS = [
    "%Y-%m-%d",  # 2024-01-15
    "%Y-%m-%dT%H:%M:%S",  # 2024-01-15T14:30:00
    "%Y/%m/%d",  # 2024/01/15
    "%d/%m/%Y",  # 15/01/2024
    "%d-%m-%Y",  # 15-01-2024
]

PERIOD_WEEKLY = "weekly"
PERIOD_MONTHLY = "monthly"
PERIOD_YEARLY = "yearly"
PERIOD_GRANULARITIES = (PERIOD_WEEKLY, PERIOD_MONTHLY, PERIOD_YEARLY)


def parse_datetime(
    date_string: str,
    default: Optional[datetime] = None,
    assume_utc: bool = True
) -> Optional[datetime]:
    """
    Parse a date/time string into a datetime object.

    Supports multiple formats:
    - ISO 8601: "2024-01-15T14:30:00Z"
    - Date only: "2024-01-15"
    - Unix timestamp: "1705329000"
    - Common formats: "2024/01/15", "15-01-2024"

    Args:
        date_string: The date/time string to parse
        default: Value to return if parsing fails (default: None)
        assume_utc: If True and no timezone in string, assume UTC (default: True)

    Returns:
        datetime object or default value if parsing fails

    Example:
        >>> parse_datetime("2024-01-15")
        datetime.datetime(2024, 1, 15, 0, 0, tzinfo=datetime.timezone.utc)
        >>> parse_datetime("invalid") is None
        True
    """
    if isinstance(date_string, datetime):
        dt = date_string
        if assume_utc and dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return dt

    if not date_string or not isinstance(date_string, str):
        return default

    date_string = date_string.strip()

    # Try Unix timestamp first
    if date_string.isdigit() and len(date_string) > 8:
        try:
            timestamp = int(date_string)
            return datetime.fromtimestamp(timestamp, tz=timezone.utc)
        except (ValueError, OSError, OverflowError):
            pass

    # Try explicit formats (day-first formats must win over dateutil's month-first guess)
    for fmt in DATETIME_FORMATS:
        try:
            dt = datetime.strptime(date_string, fmt)
            if assume_utc and dt.tzinfo is None:
                dt = dt.replace(tzinfo=timezone.utc)
            return dt
        except ValueError:
            continue

    # Fall back to dateutil (handles ISO variants with offsets and fractions)
    try:
        dt = date_parser.isoparse(date_string)
    except (ValueError, OverflowError):
        try:
            dt = date_parser.parse(date_string)
        except (ValueError, OverflowError, TypeError):
            logger.warning(f"Failed to parse datetime string: {date_string}")
            return default

    if assume_utc and dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def iso_week_key(dt: datetime) -> str:
    """
    ISO-8601 week key, e.g. "2024-W03".

    Uses the ISO week-numbering year, so 2024-12-30 falls in "2025-W01".
    """
    iso_year, iso_week, _ = dt.isocalendar()
    return f"{iso_year}-W{iso_week:02d}"


def month_key(dt: datetime) -> str:
    """Calendar month key, e.g. "2024-03"."""
    return f"{dt.year}-{dt.month:02d}"


def year_key(dt: datetime) -> str:
    """Calendar year key, e.g. "2024"."""
    return f"{dt.year}"


def period_key(dt: datetime, granularity: str) -> str:
    """
    Bucket key for a datetime at the given granularity.

    Args:
        dt: Event datetime
        granularity: "weekly", "monthly" or "yearly"

    Returns:
        Period label

    Raises:
        ValueError: If granularity is not one of PERIOD_GRANULARITIES

    Examples:
        >>> from datetime import datetime
        >>> period_key(datetime(2024, 3, 9), "monthly")
        '2024-03'
        >>> period_key(datetime(2024, 3, 9), "weekly")
        '2024-W10'
    """
    if granularity == PERIOD_WEEKLY:
        return iso_week_key(dt)
    if granularity == PERIOD_MONTHLY:
        return month_key(dt)
    if granularity == PERIOD_YEARLY:
        return year_key(dt)
    raise ValueError(f"Unknown period granularity: {granularity}")
