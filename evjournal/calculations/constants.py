"""
Calculation Constants for EV Journal

Centralized location for the numeric constants used in calculations.
Values that users may tune are read from Config to keep a single source of truth.
"""

from ..config import Config

# Charging Constants
CHARGING_EFFICIENCY = Config.CHARGING_EFFICIENCY  # Battery kWh per metered kWh (AC/DC loss)

# Combustion Reference Constants
GASOLINE_CONSUMPTION_L_100KM = Config.GASOLINE_CONSUMPTION_L_100KM
GASOLINE_PRICE_PER_LITER = Config.GASOLINE_PRICE_PER_LITER
CO2_KG_PER_LITER = Config.CO2_KG_PER_LITER

# Billing Tier Constants
LOCAL_TRIP_MAX_KM = Config.LOCAL_TRIP_MAX_KM  # Exclusive upper bound of the local tier
MEDIUM_TRIP_MAX_KM = Config.MEDIUM_TRIP_MAX_KM  # Inclusive upper bound of the medium tier

# Validation Thresholds
MIN_PERCENTAGE = 0.0  # Minimum valid state of charge
MAX_PERCENTAGE = 100.0  # Maximum valid state of charge

# Rounding
MONEY_DECIMALS = 2
ENERGY_DECIMALS = 2
PRICE_DECIMALS = 4
