"""
Tests for EV Journal value objects.
"""

import pytest

from evjournal.exceptions import ConfigurationError, RecordValidationError
from evjournal.models import (
    TARIFF_METADATA,
    ChargeEvent,
    ChargeSpeed,
    MaintenanceEntry,
    MaintenanceType,
    PricingKind,
    Settings,
    TariffType,
    TripEvent,
    Vehicle,
    is_fast_charge,
)


class TestTariffType:

    def test_metadata_is_exhaustive(self):
        assert set(TARIFF_METADATA) == set(TariffType)

    def test_fixed_tariffs_name_an_existing_setting(self):
        defaults = Settings()
        for tariff, meta in TARIFF_METADATA.items():
            if meta["pricing"] is PricingKind.FIXED:
                assert hasattr(defaults, meta["settings_field"]), tariff

    def test_only_quick_charge_is_fast(self):
        fast = [t for t in TariffType if is_fast_charge(t)]
        assert fast == [TariffType.QUICK_CHARGE]
        assert TARIFF_METADATA[TariffType.QUICK_CHARGE]["speed"] is ChargeSpeed.FAST

    def test_tempo_groups(self):
        assert TARIFF_METADATA[TariffType.TEMPO_RED_OFF_PEAK]["group"] == "tempo_red"
        assert TARIFF_METADATA[TariffType.TEMPO_RED_OFF_PEAK]["period"] == "off_peak"

    def test_parse_label(self):
        assert TariffType.parse("Borne gratuite") is TariffType.FREE_CHARGE

    def test_parse_member_name(self):
        assert TariffType.parse("tempo_blue_peak") is TariffType.TEMPO_BLUE_PEAK

    def test_parse_unknown(self):
        assert TariffType.parse("Heures Magiques") is None
        assert TariffType.parse(None) is None


class TestSettings:

    def test_defaults(self):
        settings = Settings()
        assert settings.price_peak == 0.2516
        assert settings.charging_efficiency == 0.9
        assert settings.billing_rate_local == 15

    def test_from_camel_case_document(self):
        settings = Settings.from_dict({"pricePeak": 0.27, "gasolineCarConsumption": 7.2, "billingRateMedium": 30})

        assert settings.price_peak == 0.27
        assert settings.gasoline_consumption_l_100km == 7.2
        assert settings.billing_rate_medium == 30
        assert settings.price_off_peak == Settings().price_off_peak

    def test_from_snake_case_document(self):
        assert Settings.from_dict({"price_off_peak": "0.15"}).price_off_peak == 0.15

    def test_from_none(self):
        assert Settings.from_dict(None) == Settings()

    @pytest.mark.parametrize("efficiency", [0, -0.5, 1.2])
    def test_invalid_efficiency(self, efficiency):
        with pytest.raises(ConfigurationError):
            Settings(charging_efficiency=efficiency)

    def test_invalid_value(self):
        with pytest.raises(ConfigurationError) as exc_info:
            Settings.from_dict({"pricePeak": "cher"})
        assert exc_info.value.config_key == "price_peak"


class TestVehicle:

    def test_negative_capacity_clamped(self):
        assert Vehicle(battery_capacity_kwh=-5).battery_capacity_kwh == 0.0

    def test_from_dict(self):
        vehicle = Vehicle.from_dict({"id": "v1", "name": "Renault ZOE R135", "batteryCapacity": 52})

        assert vehicle.id == "v1"
        assert vehicle.battery_capacity_kwh == 52.0

    def test_from_empty_dict_uses_default_capacity(self):
        assert Vehicle.from_dict({}).battery_capacity_kwh == 52.0

    def test_invalid_capacity(self):
        with pytest.raises(ConfigurationError):
            Vehicle.from_dict({"capacity": "grande"})


class TestChargeEvent:

    def test_from_stored_record(self):
        charge = ChargeEvent.from_dict({
            "id": "c1",
            "date": "2024-03-01",
            "odometer": "1000",
            "startPercentage": 20,
            "endPercentage": 80,
            "tariff": "Recharge borne rapide",
            "customPrice": 0.5,
            "vehicleId": "v1",
        })

        assert charge.tariff is TariffType.QUICK_CHARGE
        assert charge.odometer == 1000.0
        assert charge.custom_price == 0.5
        assert charge.vehicle_id == "v1"
        assert charge.occurred_at.year == 2024
        assert charge.is_completed

    def test_pending_is_not_completed(self):
        charge = ChargeEvent.from_dict({
            "id": "c1", "date": "2024-03-01", "odometer": 1000, "startPercentage": 20, "status": "pending",
        })
        assert not charge.is_completed

    def test_to_dict_uses_labels(self):
        charge = ChargeEvent(id="c1", date="2024-03-01", odometer=1000, start_percentage=20,
                             end_percentage=80, tariff=TariffType.OFF_PEAK)

        data = charge.to_dict()

        assert data["tariff"] == "Heures Creuses"
        assert "occurred_at" not in data

    def test_unknown_tariff(self):
        with pytest.raises(RecordValidationError):
            ChargeEvent.from_dict({"id": "c1", "date": "2024-03-01", "odometer": 1, "startPercentage": 1,
                                   "tariff": "Nucléaire"})

    def test_missing_odometer(self):
        with pytest.raises(RecordValidationError) as exc_info:
            ChargeEvent.from_dict({"id": "c1", "date": "2024-03-01", "startPercentage": 1})
        assert exc_info.value.field == "odometer"

    def test_invalid_date(self):
        with pytest.raises(RecordValidationError) as exc_info:
            ChargeEvent(id="c1", date="pas une date", odometer=1, start_percentage=1)
        assert exc_info.value.field == "date"

    def test_unknown_status(self):
        with pytest.raises(RecordValidationError):
            ChargeEvent(id="c1", date="2024-03-01", odometer=1, start_percentage=1, status="abandoned")

    def test_boolean_is_not_a_number(self):
        with pytest.raises(RecordValidationError):
            ChargeEvent.from_dict({"id": "c1", "date": "2024-03-01", "odometer": True, "startPercentage": 1})


class TestTripEvent:

    def test_from_stored_record(self):
        trip = TripEvent.from_dict({
            "id": "t1",
            "date": "2024-03-02",
            "startOdometer": 1000,
            "endOdometer": 1008,
            "startPercentage": 80,
            "endPercentage": 78,
            "destination": "Gare",
            "client": "",
            "isBilled": True,
        })

        assert trip.is_completed
        assert trip.is_billed
        assert trip.client is None
        assert trip.end_odometer == 1008.0

    def test_in_progress_trip(self):
        trip = TripEvent(id="t1", date="2024-03-02", start_odometer=1000, start_percentage=80)
        assert not trip.is_completed


class TestMaintenanceEntry:

    def test_from_stored_record(self):
        entry = MaintenanceEntry.from_dict({
            "id": "m1", "date": "2024-05-10", "odometer": 12000, "type": "Pneus", "cost": 480, "details": "Hiver",
        })

        assert entry.category is MaintenanceType.TIRES
        assert entry.to_dict()["category"] == "Pneus"

    def test_unknown_category(self):
        with pytest.raises(RecordValidationError):
            MaintenanceEntry.from_dict({"id": "m1", "date": "2024-05-10", "odometer": 1, "type": "Peinture", "cost": 1})
