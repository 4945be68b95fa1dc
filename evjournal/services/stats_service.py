"""
Period statistics service for EV Journal.

Buckets processed charges (and trips) into weekly, monthly or yearly
summaries. Every total is a plain sum of per-record figures, so summing a
metric over the buckets of a year gives the same value as a yearly bucket.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from ..calculations import (
    calculate_average_price,
    calculate_co2_avoided_kg,
    calculate_cost_per_100km,
    calculate_kwh_per_100km,
    round_or_none,
    sum_known,
)
from ..models import (
    ClientStats,
    DestinationStats,
    ProcessedCharge,
    ProcessedTrip,
    Settings,
    StatsData,
    TariffType,
    TripStatsData,
    Vehicle,
    is_fast_charge,
)
from ..utils.time_utils import PERIOD_GRANULARITIES, period_key
from .charge_service import belongs_to_vehicle

logger = logging.getLogger(__name__)

UNSPECIFIED_CLIENT = "Non spécifié"


def _check_granularity(granularity: str) -> None:
    if granularity not in PERIOD_GRANULARITIES:
        raise ValueError(
            f"Unknown period granularity: {granularity} (expected one of {', '.join(PERIOD_GRANULARITIES)})"
        )


def _group_by_period(records: Iterable[Any], granularity: str) -> Dict[str, List[Any]]:
    """Group records by period key, keeping first-appearance order."""
    groups: Dict[str, List[Any]] = {}
    for record in records:
        key = period_key(record.occurred_at, granularity)
        groups.setdefault(key, []).append(record)
    return groups


def _parse_tariff_filter(tariff_filter: Optional[Iterable[Any]]) -> Optional[set]:
    if not tariff_filter:
        return None
    selected = set()
    for value in tariff_filter:
        tariff = TariffType.parse(value)
        if tariff is None:
            logger.warning(f"Ignoring unknown tariff in filter: {value!r}")
            continue
        selected.add(tariff)
    if not selected:
        logger.warning("No known tariff in filter, keeping all tariffs")
        return None
    return selected


def summarize_charges(name: str, charges: List[ProcessedCharge], settings: Settings) -> StatsData:
    """
    Build the statistics of one bucket.

    Averages per 100 km are distance-weighted: total segment energy (or cost)
    over the total distance of the segments that have one.
    """
    total_kwh = sum_known(c.kwh_added for c in charges)
    total_cost = sum_known(c.cost for c in charges)

    kwh_per_tariff: Dict[TariffType, float] = {}
    cost_per_tariff: Dict[TariffType, float] = {}
    for charge in charges:
        kwh_per_tariff[charge.tariff] = kwh_per_tariff.get(charge.tariff, 0.0) + (charge.kwh_added or 0.0)
        cost_per_tariff[charge.tariff] = cost_per_tariff.get(charge.tariff, 0.0) + (charge.cost or 0.0)

    with_energy = [c for c in charges if c.segment_kwh is not None and c.distance_driven is not None]
    with_cost = [c for c in charges if c.segment_cost is not None and c.distance_driven is not None]

    avg_consumption = calculate_kwh_per_100km(
        sum_known(c.segment_kwh for c in with_energy),
        sum_known(c.distance_driven for c in with_energy),
    )
    avg_cost_per_100km = calculate_cost_per_100km(
        sum_known(c.segment_cost for c in with_cost),
        sum_known(c.distance_driven for c in with_cost),
    )

    fast = [c for c in charges if is_fast_charge(c.tariff)]
    slow = [c for c in charges if not is_fast_charge(c.tariff)]

    co2_avoided = sum_known(
        calculate_co2_avoided_kg(
            c.distance_driven, settings.gasoline_consumption_l_100km, settings.co2_kg_per_liter
        )
        for c in charges
    )

    return StatsData(
        name=name,
        charge_count=len(charges),
        total_kwh=round(total_kwh, 2),
        kwh_per_tariff={t: round(v, 2) for t, v in kwh_per_tariff.items()},
        cost_per_tariff={t: round(v, 2) for t, v in cost_per_tariff.items()},
        total_cost=round(total_cost, 2),
        total_distance=round(sum_known(c.distance_driven for c in charges), 2),
        avg_consumption=round_or_none(avg_consumption),
        avg_cost_per_100km=avg_cost_per_100km,
        total_gasoline_cost=round(sum_known(c.gasoline_equivalent_cost for c in charges), 2),
        total_savings=round(sum_known(c.savings for c in charges), 2),
        avg_price_per_kwh=calculate_average_price(total_cost, total_kwh),
        slow_charge_kwh=round(sum_known(c.kwh_added for c in slow), 2),
        fast_charge_kwh=round(sum_known(c.kwh_added for c in fast), 2),
        slow_charge_cost=round(sum_known(c.cost for c in slow), 2),
        fast_charge_cost=round(sum_known(c.cost for c in fast), 2),
        slow_charge_count=len(slow),
        fast_charge_count=len(fast),
        co2_avoided_kg=round(co2_avoided, 2),
    )


def generate_stats(
    charges: Iterable[ProcessedCharge],
    granularity: str,
    settings: Settings,
    vehicle: Optional[Vehicle] = None,
    tariff_filter: Optional[Iterable[Any]] = None
) -> List[StatsData]:
    """
    Aggregate processed charges into period buckets.

    Args:
        charges: Output of process_charges (chronological)
        granularity: "weekly" (ISO week), "monthly" or "yearly"
        settings: Settings snapshot (CO2 reference)
        vehicle: Restrict to this vehicle's charges when given
        tariff_filter: Keep only charges of these tariff categories; empty means all

    Returns:
        One StatsData per period that has qualifying charges, in order of first appearance

    Raises:
        ValueError: If granularity is unknown
    """
    _check_granularity(granularity)

    selected_tariffs = _parse_tariff_filter(tariff_filter)
    selected = [
        c for c in charges
        if belongs_to_vehicle(c, vehicle)
        and (selected_tariffs is None or c.tariff in selected_tariffs)
    ]

    groups = _group_by_period(selected, granularity)
    return [summarize_charges(name, group, settings) for name, group in groups.items()]


def generate_trip_stats(trips: Iterable[ProcessedTrip], granularity: str) -> List[TripStatsData]:
    """
    Aggregate processed trips into chronological period buckets.

    Raises:
        ValueError: If granularity is unknown
    """
    _check_granularity(granularity)

    ordered = sorted(trips, key=lambda t: (t.occurred_at, t.start_odometer))
    stats = []
    for name, group in _group_by_period(ordered, granularity).items():
        stats.append(TripStatsData(
            name=name,
            trip_count=len(group),
            total_distance=round(sum_known(t.distance for t in group), 2),
            total_cost=round(sum_known(t.cost for t in group), 2),
            total_savings=round(sum_known(t.savings for t in group), 2),
            total_billing_amount=round(sum_known(t.billing_amount for t in group), 2),
        ))
    return stats


def generate_client_stats(trips: Iterable[ProcessedTrip]) -> List[ClientStats]:
    """Per-client trip totals, highest billing amount first."""
    by_client: Dict[str, ClientStats] = {}

    for trip in trips:
        name = trip.client or UNSPECIFIED_CLIENT
        stats = by_client.setdefault(name, ClientStats(name=name))
        stats.trip_count += 1
        stats.total_distance += trip.distance or 0.0
        stats.total_billing_amount += trip.billing_amount or 0.0

    for stats in by_client.values():
        stats.total_distance = round(stats.total_distance, 2)
        stats.total_billing_amount = round(stats.total_billing_amount, 2)

    return sorted(by_client.values(), key=lambda s: s.total_billing_amount, reverse=True)


def generate_destination_stats(trips: Iterable[ProcessedTrip]) -> List[DestinationStats]:
    """Per-destination trip counts and distances, most visited first."""
    by_destination: Dict[str, DestinationStats] = {}

    for trip in trips:
        stats = by_destination.setdefault(trip.destination, DestinationStats(name=trip.destination))
        stats.trip_count += 1
        stats.total_distance += trip.distance or 0.0

    for stats in by_destination.values():
        stats.avg_distance = round(stats.total_distance / stats.trip_count, 2)
        stats.total_distance = round(stats.total_distance, 2)

    return sorted(by_destination.values(), key=lambda s: s.trip_count, reverse=True)
