"""
Pytest fixtures for EV Journal tests.
"""

import pytest

from evjournal.app import create_app
from evjournal.models import Settings, Vehicle


@pytest.fixture
def app():
    """Create application for testing."""
    flask_app = create_app()
    flask_app.config['TESTING'] = True
    yield flask_app


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def settings():
    """Default settings snapshot."""
    return Settings()


@pytest.fixture
def vehicle():
    """A 50 kWh vehicle, round numbers keep expected figures readable."""
    return Vehicle(name="Peugeot e-208 (50)", battery_capacity_kwh=50.0, id="veh-1")


@pytest.fixture
def sample_charge_records():
    """Raw charge records as stored (camelCase keys)."""
    return [
        {
            'id': 'c1',
            'date': '2024-03-01',
            'odometer': 1000,
            'startPercentage': 20,
            'endPercentage': 80,
            'tariff': 'Heures Creuses',
            'pricePerKwh': 0.2,
            'status': 'completed',
        },
        {
            'id': 'c2',
            'date': '2024-03-08',
            'odometer': 1300,
            'startPercentage': 30,
            'endPercentage': 90,
            'tariff': 'Heures Creuses',
            'pricePerKwh': 0.2,
            'status': 'completed',
        },
        {
            'id': 'c3',
            'date': '2024-04-02',
            'odometer': 1550,
            'startPercentage': 40,
            'endPercentage': 80,
            'tariff': 'Recharge borne rapide',
            'customPrice': 0.5,
            'pricePerKwh': 0.5,
            'status': 'completed',
        },
    ]


@pytest.fixture
def sample_trip_records():
    """Raw trip records as stored (camelCase keys)."""
    return [
        {
            'id': 't1',
            'date': '2024-03-02',
            'startOdometer': 1010,
            'endOdometer': 1018,
            'startPercentage': 80,
            'endPercentage': 78,
            'destination': 'Gare',
            'client': 'Dupont',
            'isBilled': True,
        },
        {
            'id': 't2',
            'date': '2024-03-09',
            'startOdometer': 1300,
            'endOdometer': 1320,
            'startPercentage': 90,
            'endPercentage': 86,
            'destination': 'Aéroport',
            'client': 'Martin',
            'isBilled': True,
        },
    ]
