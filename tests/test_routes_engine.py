"""
Tests for the engine HTTP routes.

Every request carries its own events, settings and vehicle; the tests check
the derived figures, the rejected-record report and the 400 responses.
"""

import json

import pytest


VEHICLE = {'id': 'v1', 'name': 'Peugeot e-208 (50)', 'batteryCapacity': 50}


def post_json(client, url, payload):
    return client.post(url, data=json.dumps(payload), content_type='application/json')


class TestProcessChargesEndpoint:
    """Tests for POST /api/charges/process."""

    def test_processes_charges(self, client, sample_charge_records):
        response = post_json(client, '/api/charges/process', {
            'charges': sample_charge_records,
            'vehicle': VEHICLE,
        })

        assert response.status_code == 200
        data = response.get_json()
        assert [c['id'] for c in data['charges']] == ['c1', 'c2', 'c3']
        assert data['charges'][0]['distance_driven'] is None
        assert data['charges'][1]['distance_driven'] == 300
        assert data['charges'][1]['consumption_kwh_100km'] == 8.33
        assert data['charges'][2]['tariff'] == 'Recharge borne rapide'
        assert data['rejected'] == []

    def test_reports_rejected_records(self, client, sample_charge_records):
        bad = {'id': 'bad', 'date': 'hier', 'odometer': 1, 'startPercentage': 1}

        response = post_json(client, '/api/charges/process', {
            'charges': sample_charge_records + [bad],
            'vehicle': VEHICLE,
        })

        data = response.get_json()
        assert len(data['charges']) == 3
        assert data['rejected'][0]['record_id'] == 'bad'
        assert data['rejected'][0]['field'] == 'date'

    def test_missing_body(self, client):
        response = client.post('/api/charges/process', data='not json', content_type='application/json')

        assert response.status_code == 400
        assert 'error' in response.get_json()

    def test_charges_must_be_a_list(self, client):
        response = post_json(client, '/api/charges/process', {'charges': {'id': 'c1'}})

        assert response.status_code == 400

    def test_invalid_settings(self, client, sample_charge_records):
        response = post_json(client, '/api/charges/process', {
            'charges': sample_charge_records,
            'settings': {'chargingEfficiency': 1.5},
        })

        assert response.status_code == 400
        assert response.get_json()['details']['config_key'] == 'charging_efficiency'


class TestCompleteChargeEndpoint:
    """Tests for POST /api/charges/complete."""

    def test_completes_with_price_snapshot(self, client):
        response = post_json(client, '/api/charges/complete', {
            'charge': {'id': 'p1', 'date': '2024-03-01', 'odometer': 1000, 'startPercentage': 20,
                       'status': 'pending'},
            'end_percentage': 80,
            'tariff': 'Heures Pleines',
            'settings': {'pricePeak': 0.27},
        })

        assert response.status_code == 200
        charge = response.get_json()['charge']
        assert charge['status'] == 'completed'
        assert charge['price_per_kwh'] == 0.27

    def test_quick_charge_without_price(self, client):
        response = post_json(client, '/api/charges/complete', {
            'charge': {'id': 'p1', 'date': '2024-03-01', 'odometer': 1000, 'startPercentage': 20,
                       'status': 'pending'},
            'end_percentage': 80,
            'tariff': 'Recharge borne rapide',
        })

        assert response.status_code == 400
        assert response.get_json()['details']['field'] == 'custom_price'

    def test_completed_charge_keeps_its_price(self, client):
        response = post_json(client, '/api/charges/complete', {
            'charge': {'id': 'c1', 'date': '2024-03-01', 'odometer': 1000, 'startPercentage': 20,
                       'endPercentage': 80, 'tariff': 'Heures Pleines', 'pricePerKwh': 0.2,
                       'status': 'completed'},
            'end_percentage': 90,
            'tariff': 'Heures Pleines',
            'settings': {'pricePeak': 0.9},
        })

        assert response.status_code == 400
        assert response.get_json()['details']['field'] == 'status'

    def test_missing_charge(self, client):
        response = post_json(client, '/api/charges/complete', {'end_percentage': 80})

        assert response.status_code == 400


class TestProcessTripsEndpoint:
    """Tests for POST /api/trips/process."""

    def test_prices_trips(self, client, sample_charge_records, sample_trip_records):
        response = post_json(client, '/api/trips/process', {
            'trips': sample_trip_records,
            'charges': sample_charge_records,
            'vehicle': VEHICLE,
        })

        assert response.status_code == 200
        trips = response.get_json()['trips']
        assert [t['id'] for t in trips] == ['t2', 't1']
        assert trips[1]['priced_by_charge_id'] == 'c1'
        assert trips[1]['distance'] == 8
        assert trips[1]['billing_amount'] == 15
        assert trips[0]['billing_amount'] == 25

    def test_trip_before_any_charge(self, client, sample_trip_records):
        response = post_json(client, '/api/trips/process', {
            'trips': sample_trip_records,
            'vehicle': VEHICLE,
        })

        trips = response.get_json()['trips']
        assert all(t['cost'] is None for t in trips)
        assert all(t['distance'] is not None for t in trips)


class TestStatsEndpoints:
    """Tests for the period statistics endpoints."""

    def test_monthly_charge_stats(self, client, sample_charge_records):
        response = post_json(client, '/api/stats/monthly', {
            'charges': sample_charge_records,
            'vehicle': VEHICLE,
        })

        assert response.status_code == 200
        data = response.get_json()
        assert data['period'] == 'monthly'
        assert [s['name'] for s in data['stats']] == ['2024-03', '2024-04']
        assert data['stats'][0]['charge_count'] == 2
        assert 'Heures Creuses' in data['stats'][0]['kwh_per_tariff']

    def test_tariff_filter(self, client, sample_charge_records):
        response = post_json(client, '/api/stats/yearly', {
            'charges': sample_charge_records,
            'vehicle': VEHICLE,
            'tariffs': ['Recharge borne rapide'],
        })

        stats = response.get_json()['stats']
        assert stats[0]['charge_count'] == 1
        assert stats[0]['fast_charge_count'] == 1

    def test_unknown_period(self, client):
        response = post_json(client, '/api/stats/daily', {'charges': []})

        assert response.status_code == 400

    def test_trip_stats(self, client, sample_charge_records, sample_trip_records):
        response = post_json(client, '/api/trips/stats/monthly', {
            'trips': sample_trip_records,
            'charges': sample_charge_records,
            'vehicle': VEHICLE,
        })

        assert response.status_code == 200
        data = response.get_json()
        assert data['periods'][0]['trip_count'] == 2
        assert data['periods'][0]['total_billing_amount'] == 40
        assert [c['name'] for c in data['clients']] == ['Martin', 'Dupont']
        assert len(data['destinations']) == 2


class TestMaintenanceEndpoint:
    """Tests for POST /api/maintenance/process."""

    def test_summary(self, client):
        response = post_json(client, '/api/maintenance/process', {'entries': [
            {'id': 'm1', 'date': '2024-05-10', 'odometer': 12000, 'type': 'Lavage', 'cost': 15},
            {'id': 'm2', 'date': '2024-06-10', 'odometer': 13000, 'type': 'Pneus', 'cost': 480},
            {'id': 'm3', 'date': '2024-06-11', 'odometer': 13010, 'type': 'Peinture', 'cost': 80},
        ]})

        assert response.status_code == 200
        data = response.get_json()
        assert [e['id'] for e in data['entries']] == ['m1', 'm2']
        assert data['summary']['total_cost'] == 495
        assert data['summary']['categories'][1]['category'] == 'Pneus'
        assert data['rejected'][0]['record_id'] == 'm3'


class TestReferenceEndpoints:

    def test_tariffs(self, client):
        response = client.get('/api/tariffs')

        assert response.status_code == 200
        tariffs = {t['name']: t for t in response.get_json()['tariffs']}
        assert len(tariffs) == 10
        assert tariffs['QUICK_CHARGE']['speed'] == 'fast'
        assert tariffs['QUICK_CHARGE']['default_price_per_kwh'] is None
        assert tariffs['PEAK']['default_price_per_kwh'] == 0.2516

    def test_vehicle_presets(self, client):
        response = client.get('/api/vehicles/presets')

        presets = response.get_json()['presets']
        assert presets[-1]['battery_capacity_kwh'] == 0.0
        assert any(p['name'] == 'Renault ZOE R135' for p in presets)

    def test_health(self, client):
        assert client.get('/api/health').get_json() == {'status': 'ok'}
