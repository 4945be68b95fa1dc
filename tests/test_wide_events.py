"""
Tests for per-request canonical log lines.
"""

from unittest.mock import patch

import pytest

from evjournal.utils.wide_events import WideEvent, track_operation


class TestWideEvent:
    """Tests for WideEvent class."""

    def test_fields_of_a_fresh_event(self):
        fields = WideEvent("charges_process", request_id="req-1").as_fields()

        assert fields["operation"] == "charges_process"
        assert fields["request_id"] == "req-1"
        assert fields["success"] is True
        assert fields["duration_ms"] >= 0
        assert "business_metrics" not in fields

    def test_generated_request_ids_differ(self):
        assert WideEvent("a").request_id != WideEvent("a").request_id

    def test_context_and_metrics(self):
        event = WideEvent("stats_generate")
        event.add_context(vehicle="Renault ZOE R135", granularity="monthly")
        event.add_business_metric("charges_in", 42).add_business_metric("buckets", 12)

        fields = event.as_fields()

        assert fields["vehicle"] == "Renault ZOE R135"
        assert fields["business_metrics"] == {"charges_in": 42, "buckets": 12}

    def test_record_failure(self):
        event = WideEvent("trips_process").record_failure(ValueError("bad period"))

        fields = event.as_fields()

        assert fields["success"] is False
        assert fields["error"] == {"type": "ValueError", "message": "bad period"}

    def test_emit_success_logs_info(self):
        with patch("evjournal.utils.wide_events.log") as log:
            WideEvent("maintenance_process").emit()

        log.info.assert_called_once()
        assert log.info.call_args[0][0] == "maintenance_process_complete"
        log.error.assert_not_called()

    def test_emit_failure_logs_error(self):
        with patch("evjournal.utils.wide_events.log") as log:
            WideEvent("maintenance_process").record_failure(RuntimeError("boom")).emit()

        assert log.error.call_args[0][0] == "maintenance_process_failed"


class TestTrackOperation:
    """Tests for track_operation context manager."""

    def test_emits_once_on_success(self):
        with patch.object(WideEvent, "emit") as emit:
            with track_operation("charges_process", vehicle="Peugeot e-208") as event:
                event.add_business_metric("charges_out", 3)

        assert event.succeeded
        assert event.context == {"vehicle": "Peugeot e-208"}
        emit.assert_called_once_with()

    def test_records_failure_and_reraises(self):
        with patch.object(WideEvent, "emit") as emit:
            with pytest.raises(RuntimeError):
                with track_operation("charge_complete") as event:
                    raise RuntimeError("boom")

        assert not event.succeeded
        assert event.error["message"] == "boom"
        emit.assert_called_once_with()
