"""
Tests for custom exceptions.
"""

import pytest

from evjournal.exceptions import ConfigurationError, EVJournalError, RecordValidationError


class TestEVJournalError:

    def test_message_only(self):
        error = EVJournalError("Something failed")
        assert str(error) == "Something failed"
        assert error.details == {}

    def test_with_details(self):
        error = EVJournalError("Something failed", {"key": "value"})
        assert "key" in str(error)


class TestRecordValidationError:

    def test_details(self):
        error = RecordValidationError("Invalid number for odometer", record_id="c1", field="odometer", value="abc")

        assert error.details == {"record_id": "c1", "field": "odometer", "value": "abc"}
        assert error.record_id == "c1"

    def test_zero_value_kept(self):
        assert RecordValidationError("bad", value=0).details == {"value": 0}

    def test_is_evjournal_error(self):
        with pytest.raises(EVJournalError):
            raise RecordValidationError("bad")


class TestConfigurationError:

    def test_config_key(self):
        error = ConfigurationError("Invalid value", config_key="price_peak")
        assert error.details == {"config_key": "price_peak"}
        assert isinstance(error, EVJournalError)
