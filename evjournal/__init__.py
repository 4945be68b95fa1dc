"""
EV Journal - charge, trip and maintenance derivation engine.

Turns raw journal events plus a settings snapshot and the active vehicle
into derived figures (energy, cost, consumption, combustion comparison,
billing) and period summaries.
"""

from .exceptions import ConfigurationError, EVJournalError, RecordValidationError
from .models import (
    TARIFF_METADATA,
    ChargeEvent,
    MaintenanceEntry,
    MaintenanceType,
    ProcessedCharge,
    ProcessedTrip,
    Settings,
    StatsData,
    TariffType,
    TripEvent,
    Vehicle,
)
from .services import (
    complete_charge,
    generate_client_stats,
    generate_destination_stats,
    generate_stats,
    generate_trip_stats,
    process_charges,
    process_maintenance_entries,
    process_trips,
    resolve_price,
    summarize_maintenance_costs,
)

__version__ = "1.0.0"

__all__ = [
    "EVJournalError",
    "RecordValidationError",
    "ConfigurationError",
    "TariffType",
    "TARIFF_METADATA",
    "MaintenanceType",
    "Settings",
    "Vehicle",
    "ChargeEvent",
    "ProcessedCharge",
    "TripEvent",
    "ProcessedTrip",
    "MaintenanceEntry",
    "StatsData",
    "resolve_price",
    "complete_charge",
    "process_charges",
    "process_trips",
    "process_maintenance_entries",
    "summarize_maintenance_costs",
    "generate_stats",
    "generate_trip_stats",
    "generate_client_stats",
    "generate_destination_stats",
]
