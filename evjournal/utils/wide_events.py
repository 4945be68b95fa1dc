"""
Canonical log lines for engine requests.

Each HTTP request produces exactly one JSON line summarizing what the engine
did: which operation ran, how many records came in, how many were rejected
or produced, how long it took, and the exception if it failed.
"""

import time
import uuid
from contextlib import contextmanager
from typing import Any, Dict, Optional

import structlog

structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(ensure_ascii=False),
    ],
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

log = structlog.get_logger("evjournal.requests")


class WideEvent:
    """
    Summary of one engine operation, emitted as a single log line.

    Context fields describe the request (vehicle, granularity, tariff).
    Business metrics count records (charges_in, trips_rejected, buckets).
    """

    def __init__(self, operation: str, request_id: Optional[str] = None):
        self.operation = operation
        self.request_id = request_id or uuid.uuid4().hex
        self.context: Dict[str, Any] = {}
        self.metrics: Dict[str, Any] = {}
        self.error: Optional[Dict[str, str]] = None
        self.started = time.perf_counter()

    @property
    def succeeded(self) -> bool:
        return self.error is None

    def add_context(self, **fields) -> "WideEvent":
        self.context.update(fields)
        return self

    def add_business_metric(self, name: str, value: Any) -> "WideEvent":
        self.metrics[name] = value
        return self

    def record_failure(self, error: Exception) -> "WideEvent":
        self.error = {"type": type(error).__name__, "message": str(error)}
        return self

    def as_fields(self) -> Dict[str, Any]:
        """Everything the log line carries, minus the message."""
        fields = dict(self.context)
        fields.update(
            operation=self.operation,
            request_id=self.request_id,
            success=self.succeeded,
            duration_ms=round((time.perf_counter() - self.started) * 1000, 2),
        )
        if self.metrics:
            fields["business_metrics"] = dict(self.metrics)
        if self.error:
            fields["error"] = self.error
        return fields

    def emit(self) -> None:
        if self.succeeded:
            log.info(f"{self.operation}_complete", **self.as_fields())
        else:
            log.error(f"{self.operation}_failed", **self.as_fields())


@contextmanager
def track_operation(operation: str, **context):
    """
    Wrap an engine call so exactly one log line is emitted for it.

    Exceptions are recorded on the line and re-raised for the route's
    error handlers.
    """
    event = WideEvent(operation).add_context(**context)
    try:
        yield event
    except Exception as e:
        event.record_failure(e)
        raise
    finally:
        event.emit()
