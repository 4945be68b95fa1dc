"""
Tests for lenient record loading.
"""

from evjournal.models import ChargeEvent, TripEvent
from evjournal.utils.records import load_records


class TestLoadRecords:

    def test_loads_valid_records(self, sample_charge_records):
        records, errors = load_records(sample_charge_records, ChargeEvent)

        assert [r.id for r in records] == ["c1", "c2", "c3"]
        assert errors == []

    def test_skips_invalid_records(self, sample_trip_records):
        raw = sample_trip_records + [{"id": "bad", "date": "2024-03-03", "startOdometer": "beaucoup"}]

        records, errors = load_records(raw, TripEvent)

        assert len(records) == 2
        assert len(errors) == 1
        assert errors[0].record_id == "bad"

    def test_rejects_non_objects(self):
        records, errors = load_records(["c1", None], ChargeEvent)

        assert records == []
        assert len(errors) == 2

    def test_none_input(self):
        assert load_records(None, ChargeEvent) == ([], [])
