"""
Engine routes for EV Journal.

Stateless JSON endpoints over the derivation engine: every request carries
its raw events, settings and vehicle, and nothing is persisted.
"""

import logging
from typing import Any, Dict, List, Tuple

from flask import Blueprint, jsonify, request

from ..data.vehicles import list_vehicle_presets
from ..exceptions import ConfigurationError, RecordValidationError
from ..models import TARIFF_METADATA, ChargeEvent, MaintenanceEntry, Settings, TripEvent, Vehicle
from ..services import (
    complete_charge,
    generate_client_stats,
    generate_destination_stats,
    generate_stats,
    generate_trip_stats,
    process_charges,
    process_maintenance_entries,
    process_trips,
    summarize_maintenance_costs,
)
from ..utils.records import load_records
from ..utils.time_utils import PERIOD_GRANULARITIES
from ..utils.wide_events import track_operation

logger = logging.getLogger(__name__)

engine_bp = Blueprint('engine', __name__)


class InvalidRequest(Exception):
    """Request body that cannot be processed."""


def _request_body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise InvalidRequest("Request body must be a JSON object")
    return data


def _list_field(data: Dict[str, Any], key: str) -> List[Any]:
    value = data.get(key) or []
    if not isinstance(value, list):
        raise InvalidRequest(f"'{key}' must be a list")
    return value


def _context(data: Dict[str, Any]) -> Tuple[Settings, Vehicle]:
    return Settings.from_dict(data.get('settings')), Vehicle.from_dict(data.get('vehicle'))


def _check_period(period: str) -> None:
    if period not in PERIOD_GRANULARITIES:
        raise InvalidRequest(f"Unknown period: {period} (expected one of {', '.join(PERIOD_GRANULARITIES)})")


def _processed_charges(data, settings, vehicle, event):
    charges, errors = load_records(_list_field(data, 'charges'), ChargeEvent)
    event.add_business_metric('charges_in', len(charges) + len(errors))
    event.add_business_metric('charges_rejected', len(errors))
    processed = process_charges(charges, settings, vehicle)
    event.add_business_metric('charges_out', len(processed))
    return processed, errors


def _processed_trips(data, settings, vehicle, event):
    charges, _ = _processed_charges(data, settings, vehicle, event)
    trips, errors = load_records(_list_field(data, 'trips'), TripEvent)
    event.add_business_metric('trips_in', len(trips) + len(errors))
    event.add_business_metric('trips_rejected', len(errors))
    processed = process_trips(trips, settings, vehicle, charges)
    event.add_business_metric('trips_out', len(processed))
    return processed, errors


def _rejected(errors) -> List[Dict[str, Any]]:
    return [{'message': e.message, **e.details} for e in errors]


@engine_bp.errorhandler(InvalidRequest)
def handle_bad_request(error):
    return jsonify({'error': str(error)}), 400


@engine_bp.errorhandler(ConfigurationError)
def handle_configuration_error(error):
    logger.warning(f"Rejected request with invalid configuration: {error}")
    return jsonify({'error': error.message, 'details': error.details}), 400


@engine_bp.errorhandler(RecordValidationError)
def handle_record_error(error):
    return jsonify({'error': error.message, 'details': error.details}), 400


# ============================================================================
# Charges
# ============================================================================

@engine_bp.route('/charges/process', methods=['POST'])
def process_charges_endpoint():
    """
    Derive energy, cost and driving figures for a vehicle's charges.

    Body:
        charges: Raw charge records
        settings: Settings document (optional, defaults apply)
        vehicle: Active vehicle (optional, default capacity applies)
    """
    data = _request_body()
    settings, vehicle = _context(data)

    with track_operation('charges_process', vehicle=vehicle.name) as event:
        processed, errors = _processed_charges(data, settings, vehicle, event)

    return jsonify({
        'charges': [c.to_dict() for c in processed],
        'rejected': _rejected(errors),
    })


@engine_bp.route('/charges/complete', methods=['POST'])
def complete_charge_endpoint():
    """
    Complete a pending charge and capture its price.

    Body:
        charge: The pending charge record
        end_percentage: State of charge when unplugged
        tariff: Tariff label
        custom_price: Price per kWh (quick charges only)
        settings: Settings document
    """
    data = _request_body()
    settings = Settings.from_dict(data.get('settings'))
    raw_charge = data.get('charge')
    if not isinstance(raw_charge, dict):
        raise InvalidRequest("'charge' must be an object")

    with track_operation('charge_complete') as event:
        charge = ChargeEvent.from_dict(raw_charge)
        end_percentage = data.get('end_percentage', data.get('endPercentage'))
        custom_price = data.get('custom_price', data.get('customPrice'))
        try:
            end_percentage = float(end_percentage) if end_percentage is not None else None
            custom_price = float(custom_price) if custom_price is not None else None
        except (TypeError, ValueError):
            raise InvalidRequest("end_percentage and custom_price must be numbers")
        completed = complete_charge(charge, end_percentage, data.get('tariff'), settings, custom_price)
        event.add_context(tariff=completed.tariff.value, price_per_kwh=completed.price_per_kwh)

    return jsonify({'charge': completed.to_dict()})


# ============================================================================
# Trips
# ============================================================================

@engine_bp.route('/trips/process', methods=['POST'])
def process_trips_endpoint():
    """
    Price trips against the charge history.

    Body:
        trips: Raw trip records
        charges: Raw charge records of the same vehicle
        settings: Settings document
        vehicle: Active vehicle
    """
    data = _request_body()
    settings, vehicle = _context(data)

    with track_operation('trips_process', vehicle=vehicle.name) as event:
        processed, errors = _processed_trips(data, settings, vehicle, event)

    return jsonify({
        'trips': [t.to_dict() for t in processed],
        'rejected': _rejected(errors),
    })


@engine_bp.route('/trips/stats/<period>', methods=['POST'])
def trip_stats_endpoint(period):
    """Per-period, per-client and per-destination trip reports."""
    _check_period(period)
    data = _request_body()
    settings, vehicle = _context(data)

    with track_operation('trip_stats', vehicle=vehicle.name, granularity=period) as event:
        trips, _ = _processed_trips(data, settings, vehicle, event)
        periods = generate_trip_stats(trips, period)
        event.add_business_metric('buckets', len(periods))

    return jsonify({
        'periods': [s.to_dict() for s in periods],
        'clients': [s.to_dict() for s in generate_client_stats(trips)],
        'destinations': [s.to_dict() for s in generate_destination_stats(trips)],
    })


# ============================================================================
# Maintenance
# ============================================================================

@engine_bp.route('/maintenance/process', methods=['POST'])
def process_maintenance_endpoint():
    """Validate maintenance entries and summarize spend per category."""
    data = _request_body()

    with track_operation('maintenance_process') as event:
        entries, errors = load_records(_list_field(data, 'entries'), MaintenanceEntry)
        processed = process_maintenance_entries(entries)
        summary = summarize_maintenance_costs(processed)
        event.add_business_metric('entries_in', len(entries) + len(errors))
        event.add_business_metric('entries_out', len(processed))

    return jsonify({
        'entries': [e.to_dict() for e in processed],
        'summary': {
            'categories': [c.to_dict() for c in summary['categories']],
            'entry_count': summary['entry_count'],
            'total_cost': summary['total_cost'],
        },
        'rejected': _rejected(errors),
    })


# ============================================================================
# Statistics
# ============================================================================

@engine_bp.route('/stats/<period>', methods=['POST'])
def charge_stats_endpoint(period):
    """
    Aggregate processed charges into weekly, monthly or yearly buckets.

    Body:
        charges, settings, vehicle: As for /charges/process
        tariffs: Optional list of tariff labels to keep
    """
    _check_period(period)
    data = _request_body()
    settings, vehicle = _context(data)
    tariffs = _list_field(data, 'tariffs')

    with track_operation('stats_generate', vehicle=vehicle.name, granularity=period) as event:
        charges, _ = _processed_charges(data, settings, vehicle, event)
        stats = generate_stats(charges, period, settings, vehicle, tariffs)
        event.add_business_metric('buckets', len(stats))

    return jsonify({'period': period, 'stats': [s.to_dict() for s in stats]})


# ============================================================================
# Reference data
# ============================================================================

@engine_bp.route('/tariffs', methods=['GET'])
def get_tariffs():
    """Tariff classification table with the default rate of fixed-price tariffs."""
    defaults = Settings()
    tariffs = []
    for tariff, meta in TARIFF_METADATA.items():
        field_name = meta['settings_field']
        tariffs.append({
            'label': tariff.value,
            'name': tariff.name,
            'group': meta['group'],
            'period': meta['period'],
            'pricing': meta['pricing'].value,
            'speed': meta['speed'].value,
            'default_price_per_kwh': getattr(defaults, field_name) if field_name else None,
        })
    return jsonify({'tariffs': tariffs})


@engine_bp.route('/vehicles/presets', methods=['GET'])
def get_vehicle_presets():
    """Known vehicle models with their usable battery capacity."""
    return jsonify({'presets': [p.to_dict() for p in list_vehicle_presets()]})
