"""
Energy Conversion Calculations

Handles conversions between battery percentages and kWh:
- SOC percentage -> kWh
- Energy added by a charge (battery side)
- Energy drawn from the supply (metered side, includes charging loss)
- Energy consumed over a trip or driving segment
"""

from typing import Optional

from .constants import CHARGING_EFFICIENCY


def soc_to_kwh(soc_percent: float, battery_capacity_kwh: float) -> float:
    """
    Convert a State of Charge percentage to kWh.

    Args:
        soc_percent: Battery state of charge (0-100%)
        battery_capacity_kwh: Usable battery capacity in kWh

    Returns:
        Energy in kWh

    Examples:
        >>> soc_to_kwh(50.0, 52.0)
        26.0
        >>> soc_to_kwh(100.0, 40.0)
        40.0
    """
    return (soc_percent / 100.0) * battery_capacity_kwh


def calculate_energy_stored(
    start_soc: Optional[float],
    end_soc: Optional[float],
    battery_capacity_kwh: float
) -> Optional[float]:
    """
    Calculate the energy a charge put into the battery.

    Args:
        start_soc: State of charge when plugged in (%)
        end_soc: State of charge when unplugged (%)
        battery_capacity_kwh: Usable battery capacity in kWh

    Returns:
        kWh stored, or None if capacity is zero, a reading is missing or
        the SOC went down

    Examples:
        >>> calculate_energy_stored(20.0, 90.0, 50.0)
        35.0
        >>> calculate_energy_stored(20.0, 90.0, 0) is None
        True
    """
    if start_soc is None or end_soc is None:
        return None

    if not battery_capacity_kwh or battery_capacity_kwh <= 0:
        return None

    if end_soc < start_soc:
        return None

    return soc_to_kwh(end_soc - start_soc, battery_capacity_kwh)


def calculate_grid_energy(
    kwh_stored: Optional[float],
    efficiency: float = CHARGING_EFFICIENCY
) -> Optional[float]:
    """
    Energy metered at the supply for a given amount stored in the battery.

    Part of the supplied energy is lost as heat in AC/DC conversion, so the
    metered figure is always at least the stored figure.

    Args:
        kwh_stored: Energy that reached the battery
        efficiency: Fraction of metered energy reaching the battery (0 < e <= 1)

    Returns:
        Metered kWh, or None if kwh_stored is None or efficiency is invalid

    Examples:
        >>> round(calculate_grid_energy(35.0, 0.9), 2)
        38.89
        >>> calculate_grid_energy(10.0, 1.0)
        10.0
    """
    if kwh_stored is None:
        return None

    if efficiency is None or efficiency <= 0:
        return None

    return kwh_stored / efficiency


def calculate_energy_from_soc_change(
    start_soc: Optional[float],
    end_soc: Optional[float],
    battery_capacity_kwh: float
) -> Optional[float]:
    """
    Calculate energy consumed based on a SOC decrease.

    Used both for trips (start -> end of the trip) and for driving segments
    between charges (previous charge's end -> this charge's start).
    Only calculates consumption (SOC decrease), never a negative figure.

    Args:
        start_soc: Starting state of charge (%)
        end_soc: Ending state of charge (%)
        battery_capacity_kwh: Usable battery capacity in kWh

    Returns:
        kWh consumed, or None if SOC did not decrease or capacity is zero

    Examples:
        >>> calculate_energy_from_soc_change(80.0, 30.0, 50.0)
        25.0
        >>> calculate_energy_from_soc_change(50.0, 80.0, 50.0) is None
        True
    """
    if start_soc is None or end_soc is None:
        return None

    if not battery_capacity_kwh or battery_capacity_kwh <= 0:
        return None

    # Only calculate if SOC decreased
    if start_soc <= end_soc:
        return None

    return soc_to_kwh(start_soc - end_soc, battery_capacity_kwh)
