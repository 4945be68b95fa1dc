"""
Trip processing service for EV Journal.

Prices each completed trip against the most recent charge at or before the
trip date and derives consumption, combustion comparison and billing figures.
A trip's price is never stored on the trip: editing the charge history
changes historical trip costs.
"""

import logging
from bisect import bisect_right
from typing import Iterable, List, Optional, Sequence

from ..calculations import (
    calculate_billing_amount,
    calculate_charging_cost,
    calculate_distance_delta,
    calculate_energy_from_soc_change,
    calculate_gasoline_equivalent_cost,
    calculate_kwh_per_100km,
    calculate_savings,
    round_or_none,
)
from ..calculations.constants import ENERGY_DECIMALS
from ..models import ProcessedCharge, ProcessedTrip, Settings, TripEvent, Vehicle
from .charge_service import belongs_to_vehicle, sort_charges

logger = logging.getLogger(__name__)


def find_pricing_charge(
    trip: TripEvent,
    charges: Sequence[ProcessedCharge],
    timeline: Optional[Sequence] = None
) -> Optional[ProcessedCharge]:
    """
    Latest charge whose calendar date is on or before the trip's date.

    Times of day are ignored: a charge logged in the evening still prices
    a trip recorded on the same day without a time.

    Args:
        trip: Trip to price
        charges: Processed charges in chronological order
        timeline: Precomputed charge dates, to reuse across many trips

    Returns:
        The charge whose price applies, or None if the trip predates every charge
    """
    if timeline is None:
        timeline = [c.occurred_at.date() for c in charges]
    index = bisect_right(timeline, trip.occurred_at.date())
    if index == 0:
        return None
    return charges[index - 1]


def process_trips(
    trip_events: Iterable[TripEvent],
    settings: Settings,
    vehicle: Vehicle,
    processed_charges: Iterable[ProcessedCharge]
) -> List[ProcessedTrip]:
    """
    Derive energy, cost, savings and billing figures for completed trips.

    Args:
        trip_events: Trip events of the active vehicle
        settings: Settings snapshot
        vehicle: Active vehicle (battery capacity)
        processed_charges: Output of process_charges for the same vehicle

    Returns:
        Processed trips, newest first
    """
    trip_events = list(trip_events)
    charges = sort_charges(c for c in processed_charges if belongs_to_vehicle(c, vehicle))
    timeline = [c.occurred_at.date() for c in charges]

    completed = [t for t in trip_events if t.is_completed and belongs_to_vehicle(t, vehicle)]
    ordered = sorted(completed, key=lambda t: (t.occurred_at, t.end_odometer), reverse=True)

    capacity = vehicle.battery_capacity_kwh
    processed: List[ProcessedTrip] = []
    unpriced = 0

    for trip in ordered:
        pricing_charge = find_pricing_charge(trip, charges, timeline)
        price = pricing_charge.price_per_kwh if pricing_charge is not None else None

        distance = calculate_distance_delta(trip.start_odometer, trip.end_odometer)

        kwh_consumed = None
        if distance is not None and pricing_charge is not None:
            kwh_consumed = calculate_energy_from_soc_change(
                trip.start_percentage, trip.end_percentage, capacity
            )
        if pricing_charge is None:
            unpriced += 1

        cost = calculate_charging_cost(kwh_consumed, price)
        gasoline_cost = calculate_gasoline_equivalent_cost(
            distance, settings.gasoline_consumption_l_100km, settings.gasoline_price_per_liter
        )

        billing_amount = None
        if trip.is_billed:
            billing_amount = calculate_billing_amount(
                distance, settings.billing_rate_local, settings.billing_rate_medium
            )

        processed.append(ProcessedTrip(
            **trip.field_values(),
            distance=distance,
            kwh_consumed=round_or_none(kwh_consumed, ENERGY_DECIMALS),
            price_per_kwh=price,
            priced_by_charge_id=pricing_charge.id if pricing_charge is not None else None,
            cost=cost,
            consumption_kwh_100km=round_or_none(calculate_kwh_per_100km(kwh_consumed, distance)),
            gasoline_equivalent_cost=gasoline_cost,
            savings=calculate_savings(gasoline_cost, cost),
            billing_amount=billing_amount,
        ))

    if unpriced:
        logger.debug(f"{unpriced} trips predate every completed charge and were left unpriced")

    return processed
