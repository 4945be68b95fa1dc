"""
EV Journal Calculation Module

Pure calculation helpers for energy, efficiency, financial and aggregate
figures. Every function returns None when its result is undefined (missing
reading, non-positive distance, zero capacity) instead of raising or
producing an infinite or negative figure.

Usage:
    from evjournal.calculations import calculate_kwh_per_100km, soc_to_kwh
    from evjournal.calculations.constants import CHARGING_EFFICIENCY
"""

# Energy conversions
from .energy import (
    calculate_energy_from_soc_change,
    calculate_energy_stored,
    calculate_grid_energy,
    soc_to_kwh,
)

# Efficiency calculations
from .efficiency import (
    calculate_distance_delta,
    calculate_kwh_per_100km,
)

# Financial calculations
from .financial import (
    calculate_average_price,
    calculate_billing_amount,
    calculate_charging_cost,
    calculate_co2_avoided_kg,
    calculate_cost_per_100km,
    calculate_gasoline_equivalent_cost,
    calculate_gasoline_equivalent_km,
    calculate_savings,
)

# Aggregate helpers
from .statistics import (
    round_or_none,
    sum_known,
)

# Constants (re-export for convenience)
from .constants import (
    CHARGING_EFFICIENCY,
    CO2_KG_PER_LITER,
    GASOLINE_CONSUMPTION_L_100KM,
    GASOLINE_PRICE_PER_LITER,
    LOCAL_TRIP_MAX_KM,
    MAX_PERCENTAGE,
    MEDIUM_TRIP_MAX_KM,
    MIN_PERCENTAGE,
)

__all__ = [
    # Energy
    "soc_to_kwh",
    "calculate_energy_stored",
    "calculate_grid_energy",
    "calculate_energy_from_soc_change",
    # Efficiency
    "calculate_distance_delta",
    "calculate_kwh_per_100km",
    # Financial
    "calculate_charging_cost",
    "calculate_cost_per_100km",
    "calculate_gasoline_equivalent_cost",
    "calculate_gasoline_equivalent_km",
    "calculate_savings",
    "calculate_co2_avoided_kg",
    "calculate_billing_amount",
    "calculate_average_price",
    # Statistics
    "sum_known",
    "round_or_none",
    # Constants
    "CHARGING_EFFICIENCY",
    "GASOLINE_CONSUMPTION_L_100KM",
    "GASOLINE_PRICE_PER_LITER",
    "CO2_KG_PER_LITER",
    "LOCAL_TRIP_MAX_KM",
    "MEDIUM_TRIP_MAX_KM",
    "MIN_PERCENTAGE",
    "MAX_PERCENTAGE",
]
