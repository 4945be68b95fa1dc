"""
Efficiency Calculations

Handles distance and consumption metrics:
- Distance between two odometer readings
- kWh per 100 km
"""

from typing import Optional


def calculate_distance_delta(
    previous_odometer: Optional[float],
    odometer: Optional[float]
) -> Optional[float]:
    """
    Distance covered between two odometer readings.

    A decreasing or static odometer is a data-entry error and yields None
    rather than a zero or negative distance.

    Args:
        previous_odometer: Earlier reading (km)
        odometer: Later reading (km)

    Returns:
        Distance in km, or None if unknown or non-positive

    Examples:
        >>> calculate_distance_delta(1000, 1300)
        300
        >>> calculate_distance_delta(1300, 1300) is None
        True
        >>> calculate_distance_delta(None, 1300) is None
        True
    """
    if previous_odometer is None or odometer is None:
        return None

    distance = odometer - previous_odometer
    if distance <= 0:
        return None

    return distance


def calculate_kwh_per_100km(
    kwh_used: Optional[float],
    distance_km: Optional[float]
) -> Optional[float]:
    """
    Calculate electric consumption in kWh/100km.

    Args:
        kwh_used: Energy drawn from the battery
        distance_km: Distance driven

    Returns:
        kWh/100km, or None if energy or distance is missing or non-positive

    Examples:
        >>> round(calculate_kwh_per_100km(25.0, 300.0), 2)
        8.33
        >>> calculate_kwh_per_100km(0.0, 100.0) is None
        True
        >>> calculate_kwh_per_100km(5.0, 0) is None
        True
    """
    if kwh_used is None or distance_km is None:
        return None

    if kwh_used <= 0 or distance_km <= 0:
        return None

    return (kwh_used / distance_km) * 100

