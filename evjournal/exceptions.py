"""
Custom exceptions for EV Journal.

The derivation engine itself degrades bad records to ``None`` fields instead
of raising; these exceptions are raised at the edges (record loading, charge
completion, settings validation) and caught where batches are assembled.
"""


class EVJournalError(Exception):
    """Base exception for all EV Journal errors."""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self):
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message


class RecordValidationError(EVJournalError):
    """A charge, trip or maintenance record is malformed."""

    def __init__(
        self,
        message: str,
        record_id: str = None,
        field: str = None,
        value=None
    ):
        details = {}
        if record_id:
            details['record_id'] = record_id
        if field:
            details['field'] = field
        if value is not None:
            details['value'] = value
        super().__init__(message, details)
        self.record_id = record_id
        self.field = field
        self.value = value


class ConfigurationError(EVJournalError):
    """Invalid or missing configuration."""

    def __init__(self, message: str, config_key: str = None):
        details = {}
        if config_key:
            details['config_key'] = config_key
        super().__init__(message, details)
        self.config_key = config_key
