"""
Derivation pipeline for EV Journal.

Every stage is a pure function of its inputs: callers re-run the pipeline
with the current events, settings and vehicle whenever any of them changes.
"""

from .pricing_service import resolve_price
from .charge_service import complete_charge, process_charges, sort_charges
from .trip_service import find_pricing_charge, process_trips
from .maintenance_service import process_maintenance_entries, summarize_maintenance_costs
from .stats_service import (
    generate_client_stats,
    generate_destination_stats,
    generate_stats,
    generate_trip_stats,
)

__all__ = [
    "resolve_price",
    "complete_charge",
    "process_charges",
    "sort_charges",
    "find_pricing_charge",
    "process_trips",
    "process_maintenance_entries",
    "summarize_maintenance_costs",
    "generate_stats",
    "generate_trip_stats",
    "generate_client_stats",
    "generate_destination_stats",
]
