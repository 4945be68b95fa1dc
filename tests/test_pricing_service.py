"""
Tests for tariff price resolution.
"""

import pytest

from evjournal.models import TARIFF_METADATA, Settings, TariffType
from evjournal.services.pricing_service import resolve_price


class TestResolvePrice:
    """Tests for resolve_price function."""

    @pytest.mark.parametrize("tariff", [t for t, m in TARIFF_METADATA.items() if m["settings_field"]])
    def test_fixed_tariffs_read_their_setting(self, settings, tariff):
        expected = getattr(settings, TARIFF_METADATA[tariff]["settings_field"])
        assert resolve_price(tariff, settings) == expected

    def test_peak_default(self, settings):
        assert resolve_price(TariffType.PEAK, settings) == 0.2516

    def test_tempo_red_peak_from_custom_settings(self):
        settings = Settings(price_tempo_red_peak=0.8)
        assert resolve_price(TariffType.TEMPO_RED_PEAK, settings) == 0.8

    def test_stored_label_accepted(self, settings):
        assert resolve_price("Heures Creuses", settings) == settings.price_off_peak

    def test_member_name_accepted(self, settings):
        assert resolve_price("off_peak", settings) == settings.price_off_peak

    def test_quick_charge_uses_custom_rate(self, settings):
        assert resolve_price(TariffType.QUICK_CHARGE, settings, 0.5) == 0.5

    def test_quick_charge_without_rate_is_free(self, settings):
        assert resolve_price(TariffType.QUICK_CHARGE, settings) == 0.0

    def test_free_charge(self, settings):
        assert resolve_price(TariffType.FREE_CHARGE, settings, 0.5) == 0.0

    def test_unknown_tariff_prices_at_zero(self, settings):
        assert resolve_price("Tarif inconnu", settings) == 0.0

    def test_none_tariff_prices_at_zero(self, settings):
        assert resolve_price(None, settings) == 0.0
