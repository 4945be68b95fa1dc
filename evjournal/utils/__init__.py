"""Utility modules for EV Journal."""

from .time_utils import (
    PERIOD_GRANULARITIES,
    iso_week_key,
    month_key,
    parse_datetime,
    period_key,
    year_key,
)

__all__ = [
    'PERIOD_GRANULARITIES',
    'iso_week_key',
    'month_key',
    'parse_datetime',
    'period_key',
    'year_key',
]
