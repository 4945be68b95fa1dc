"""
Statistical Calculations

Small helpers shared by the period aggregators: None-aware sums and rounding.
"""

from typing import Iterable, Optional


def sum_known(values: Iterable[Optional[float]]) -> float:
    """
    Sum the values that are known, skipping None.

    Examples:
        >>> sum_known([1.5, None, 2.5])
        4.0
        >>> sum_known([])
        0.0
    """
    return float(sum(v for v in values if v is not None))


def round_or_none(value: Optional[float], decimals: int = 2) -> Optional[float]:
    """
    Round a value, passing None through.

    Examples:
        >>> round_or_none(8.3333, 2)
        8.33
        >>> round_or_none(None) is None
        True
    """
    if value is None:
        return None
    return round(value, decimals)
