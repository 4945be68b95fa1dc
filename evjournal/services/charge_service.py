"""
Charge processing service for EV Journal.

Turns one vehicle's charge events into an ordered list of processed charges
(energy, cost, distance, consumption, combustion comparison) and captures the
price snapshot when a pending charge is completed.
"""

import logging
from dataclasses import replace
from typing import Iterable, List, Optional

from ..calculations import (
    calculate_charging_cost,
    calculate_co2_avoided_kg,
    calculate_cost_per_100km,
    calculate_distance_delta,
    calculate_energy_from_soc_change,
    calculate_energy_stored,
    calculate_gasoline_equivalent_cost,
    calculate_gasoline_equivalent_km,
    calculate_grid_energy,
    calculate_kwh_per_100km,
    calculate_savings,
    round_or_none,
)
from ..calculations.constants import (
    ENERGY_DECIMALS,
    MAX_PERCENTAGE,
    MIN_PERCENTAGE,
    PRICE_DECIMALS,
)
from ..exceptions import RecordValidationError
from ..models import (
    STATUS_COMPLETED,
    STATUS_PENDING,
    TARIFF_METADATA,
    ChargeEvent,
    PricingKind,
    ProcessedCharge,
    Settings,
    TariffType,
    Vehicle,
)
from .pricing_service import resolve_price

logger = logging.getLogger(__name__)


def belongs_to_vehicle(record, vehicle: Optional[Vehicle]) -> bool:
    """Records without a vehicle reference are assumed to belong to the active vehicle."""
    if vehicle is None or vehicle.id is None or record.vehicle_id is None:
        return True
    return record.vehicle_id == vehicle.id


def sort_charges(charges: Iterable[ChargeEvent]) -> List[ChargeEvent]:
    """Chronological order with the odometer breaking same-date ties."""
    return sorted(charges, key=lambda c: (c.occurred_at, c.odometer))


def complete_charge(
    event: ChargeEvent,
    end_percentage: float,
    tariff,
    settings: Settings,
    custom_price: Optional[float] = None
) -> ChargeEvent:
    """
    Complete a pending charge and freeze its price.

    The resolved price is stored on the returned event as ``price_per_kwh``;
    later changes to the tariff settings no longer affect this charge's cost.

    Args:
        event: The pending charge
        end_percentage: State of charge when unplugged (%)
        tariff: Tariff category (TariffType or stored label)
        settings: Current settings snapshot
        custom_price: Price per kWh, required for quick charges

    Returns:
        A new completed ChargeEvent

    Raises:
        RecordValidationError: If the charge is not pending, or the end percentage,
            tariff or custom price is invalid
    """
    if event.status != STATUS_PENDING:
        raise RecordValidationError(
            "Only pending charges can be completed",
            record_id=event.id,
            field="status",
            value=event.status
        )

    category = TariffType.parse(tariff)
    if category is None:
        raise RecordValidationError(
            f"Unknown tariff: {tariff}", record_id=event.id, field="tariff", value=tariff
        )

    if end_percentage is None or not MIN_PERCENTAGE <= end_percentage <= MAX_PERCENTAGE:
        raise RecordValidationError(
            "End percentage must be between 0 and 100",
            record_id=event.id,
            field="end_percentage",
            value=end_percentage
        )

    if end_percentage < event.start_percentage:
        raise RecordValidationError(
            "End percentage is below start percentage",
            record_id=event.id,
            field="end_percentage",
            value=end_percentage
        )

    if TARIFF_METADATA[category]["pricing"] is PricingKind.CUSTOM:
        if custom_price is None or custom_price <= 0:
            raise RecordValidationError(
                "Quick charges require a positive price per kWh",
                record_id=event.id,
                field="custom_price",
                value=custom_price
            )
    else:
        custom_price = None

    price = resolve_price(category, settings, custom_price)

    logger.info(
        f"Charge {event.id} completed: {event.start_percentage:.0f}% -> "
        f"{end_percentage:.0f}% at {price:.4f} EUR/kWh ({category.value})"
    )

    return replace(
        event,
        end_percentage=end_percentage,
        tariff=category,
        custom_price=custom_price,
        price_per_kwh=round(price, PRICE_DECIMALS),
        status=STATUS_COMPLETED,
    )


def process_charges(
    events: Iterable[ChargeEvent],
    settings: Settings,
    vehicle: Vehicle
) -> List[ProcessedCharge]:
    """
    Derive energy, cost and driving figures for a vehicle's completed charges.

    Pending or incomplete events are skipped. The rest are ordered by date
    (odometer as tie-break) and each is compared with its chronological
    predecessor to obtain the distance driven and the battery depletion of
    the driving segment in between.

    Args:
        events: Charge events of the active vehicle
        settings: Settings snapshot
        vehicle: Active vehicle (battery capacity)

    Returns:
        Processed charges in chronological order
    """
    events = list(events)
    completed = [e for e in events if e.is_completed and belongs_to_vehicle(e, vehicle)]
    ordered = sort_charges(completed)

    capacity = vehicle.battery_capacity_kwh
    efficiency = settings.charging_efficiency
    fuel_consumption = settings.gasoline_consumption_l_100km
    fuel_price = settings.gasoline_price_per_liter

    processed: List[ProcessedCharge] = []

    for index, charge in enumerate(ordered):
        kwh_stored = calculate_energy_stored(charge.start_percentage, charge.end_percentage, capacity)
        kwh_added = calculate_grid_energy(kwh_stored, efficiency)

        # Completed charges keep the price captured at completion
        if charge.price_per_kwh is not None:
            price = charge.price_per_kwh
        else:
            price = resolve_price(charge.tariff, settings, charge.custom_price)

        cost = calculate_charging_cost(kwh_added, price)

        distance = None
        segment_kwh = None
        segment_cost = None
        if index > 0:
            previous = processed[index - 1]
            distance = calculate_distance_delta(previous.odometer, charge.odometer)
            if distance is not None:
                segment_kwh = calculate_energy_from_soc_change(
                    previous.end_percentage, charge.start_percentage, capacity
                )
                # The energy driven on was bought at the previous charge
                segment_cost = calculate_charging_cost(
                    calculate_grid_energy(segment_kwh, efficiency), previous.price_per_kwh
                )

        gasoline_cost = calculate_gasoline_equivalent_cost(distance, fuel_consumption, fuel_price)

        values = charge.field_values()
        values["price_per_kwh"] = round(price, PRICE_DECIMALS)

        processed.append(ProcessedCharge(
            **values,
            kwh_added=round_or_none(kwh_added, ENERGY_DECIMALS),
            kwh_stored=round_or_none(kwh_stored, ENERGY_DECIMALS),
            cost=cost,
            distance_driven=distance,
            segment_kwh=round_or_none(segment_kwh, ENERGY_DECIMALS),
            segment_cost=segment_cost,
            consumption_kwh_100km=round_or_none(calculate_kwh_per_100km(segment_kwh, distance)),
            cost_per_100km=calculate_cost_per_100km(segment_cost, distance),
            gasoline_equivalent_cost=gasoline_cost,
            gasoline_equivalent_km=calculate_gasoline_equivalent_km(cost, fuel_consumption, fuel_price),
            savings=calculate_savings(gasoline_cost, segment_cost),
            co2_avoided_kg=calculate_co2_avoided_kg(distance, fuel_consumption, settings.co2_kg_per_liter),
        ))

    skipped = len(events) - len(processed)
    if skipped:
        logger.debug(f"Skipped {skipped} pending, incomplete or foreign charge events")

    return processed
