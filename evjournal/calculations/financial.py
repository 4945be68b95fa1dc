"""
Financial Calculations

Handles cost calculations for charging and driving:
- Charging costs
- Cost per 100 km
- Combustion-vehicle comparison (equivalent cost, distance, savings, CO2)
- Tiered flat-rate trip billing
"""

from typing import Optional

from .constants import (
    CO2_KG_PER_LITER,
    GASOLINE_CONSUMPTION_L_100KM,
    GASOLINE_PRICE_PER_LITER,
    LOCAL_TRIP_MAX_KM,
    MEDIUM_TRIP_MAX_KM,
    MONEY_DECIMALS,
    PRICE_DECIMALS,
)


def calculate_charging_cost(
    kwh: Optional[float],
    price_per_kwh: Optional[float]
) -> Optional[float]:
    """
    Calculate the cost of an amount of energy.

    A zero price (free charging point) is valid and costs nothing.

    Args:
        kwh: Energy metered (kWh)
        price_per_kwh: Electricity rate (EUR/kWh)

    Returns:
        Cost in EUR, or None if either input is unknown

    Examples:
        >>> calculate_charging_cost(38.8889, 0.50)
        19.44
        >>> calculate_charging_cost(10.0, 0.0)
        0.0
        >>> calculate_charging_cost(None, 0.25) is None
        True
    """
    if kwh is None or price_per_kwh is None:
        return None

    return round(kwh * price_per_kwh, MONEY_DECIMALS)


def calculate_cost_per_100km(
    cost: Optional[float],
    distance_km: Optional[float]
) -> Optional[float]:
    """
    Calculate driving cost per 100 km.

    Examples:
        >>> calculate_cost_per_100km(3.0, 150.0)
        2.0
        >>> calculate_cost_per_100km(3.0, 0) is None
        True
    """
    if cost is None or distance_km is None or distance_km <= 0:
        return None

    return round((cost / distance_km) * 100, MONEY_DECIMALS)


def calculate_gasoline_equivalent_cost(
    distance_km: Optional[float],
    consumption_l_100km: float = GASOLINE_CONSUMPTION_L_100KM,
    price_per_liter: float = GASOLINE_PRICE_PER_LITER
) -> Optional[float]:
    """
    Fuel cost of driving the same distance with the reference combustion car.

    Args:
        distance_km: Distance driven
        consumption_l_100km: Reference car consumption (L/100km)
        price_per_liter: Fuel price (EUR/L)

    Returns:
        Equivalent fuel cost in EUR, or None if distance or references are unusable

    Examples:
        >>> calculate_gasoline_equivalent_cost(100.0, 6.5, 1.90)
        12.35
        >>> calculate_gasoline_equivalent_cost(None, 6.5, 1.90) is None
        True
    """
    if distance_km is None or distance_km <= 0:
        return None

    if not consumption_l_100km or consumption_l_100km <= 0:
        return None

    if not price_per_liter or price_per_liter <= 0:
        return None

    return round((distance_km / 100) * consumption_l_100km * price_per_liter, MONEY_DECIMALS)


def calculate_gasoline_equivalent_km(
    cost: Optional[float],
    consumption_l_100km: float = GASOLINE_CONSUMPTION_L_100KM,
    price_per_liter: float = GASOLINE_PRICE_PER_LITER
) -> Optional[float]:
    """
    Distance the reference combustion car could cover for the same money.

    Examples:
        >>> calculate_gasoline_equivalent_km(12.35, 6.5, 1.90)
        100.0
        >>> calculate_gasoline_equivalent_km(0.0, 6.5, 1.90) is None
        True
    """
    if cost is None or cost <= 0:
        return None

    if not consumption_l_100km or consumption_l_100km <= 0:
        return None

    if not price_per_liter or price_per_liter <= 0:
        return None

    liters = cost / price_per_liter
    return float(round((liters / consumption_l_100km) * 100))


def calculate_savings(
    gasoline_equivalent_cost: Optional[float],
    electric_cost: Optional[float]
) -> Optional[float]:
    """
    Money saved versus the combustion reference.

    Examples:
        >>> calculate_savings(12.35, 2.10)
        10.25
        >>> calculate_savings(None, 2.10) is None
        True
    """
    if gasoline_equivalent_cost is None or electric_cost is None:
        return None

    return round(gasoline_equivalent_cost - electric_cost, MONEY_DECIMALS)


def calculate_co2_avoided_kg(
    distance_km: Optional[float],
    consumption_l_100km: float = GASOLINE_CONSUMPTION_L_100KM,
    co2_kg_per_liter: float = CO2_KG_PER_LITER
) -> Optional[float]:
    """
    Tailpipe CO2 the reference combustion car would have emitted.

    Examples:
        >>> calculate_co2_avoided_kg(200.0, 6.5, 2.31)
        30.03
        >>> calculate_co2_avoided_kg(None) is None
        True
    """
    if distance_km is None or distance_km <= 0:
        return None

    if not consumption_l_100km or consumption_l_100km <= 0:
        return None

    return round((distance_km / 100) * consumption_l_100km * co2_kg_per_liter, MONEY_DECIMALS)


def calculate_billing_amount(
    distance_km: Optional[float],
    local_rate: float,
    medium_rate: float,
    local_max_km: float = LOCAL_TRIP_MAX_KM,
    medium_max_km: float = MEDIUM_TRIP_MAX_KM
) -> Optional[float]:
    """
    Flat-rate amount billed for a trip.

    Tiers:
    - distance < local_max_km: local rate
    - local_max_km <= distance <= medium_max_km: medium rate
    - longer trips have no flat rate and are quoted manually

    Args:
        distance_km: Trip distance
        local_rate: Flat amount for short trips (EUR)
        medium_rate: Flat amount for medium trips (EUR)
        local_max_km: Exclusive upper bound of the local tier
        medium_max_km: Inclusive upper bound of the medium tier

    Returns:
        Billing amount in EUR, or None when no flat rate applies

    Examples:
        >>> calculate_billing_amount(8, 15, 25)
        15
        >>> calculate_billing_amount(20, 15, 25)
        25
        >>> calculate_billing_amount(45, 15, 25) is None
        True
    """
    if distance_km is None or distance_km <= 0:
        return None

    if distance_km < local_max_km:
        return local_rate

    if distance_km <= medium_max_km:
        return medium_rate

    return None


def calculate_average_price(
    total_cost: Optional[float],
    total_kwh: Optional[float]
) -> Optional[float]:
    """
    Average paid price per kWh.

    Examples:
        >>> calculate_average_price(5.0, 25.0)
        0.2
        >>> calculate_average_price(5.0, 0) is None
        True
    """
    if total_cost is None or total_kwh is None or total_kwh <= 0:
        return None

    return round(total_cost / total_kwh, PRICE_DECIMALS)
