"""
Lenient loading of plain records from the persistence layer.

One malformed record must never prevent the rest of a batch from being
processed: records that fail validation are logged and skipped.
"""

import logging
from typing import Any, Dict, Iterable, List, Tuple, Type, TypeVar

from ..exceptions import RecordValidationError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def load_records(
    raw_records: Iterable[Dict[str, Any]],
    record_cls: Type[T]
) -> Tuple[List[T], List[RecordValidationError]]:
    """
    Convert plain dicts into records with ``record_cls.from_dict``.

    Args:
        raw_records: Dicts as stored (camelCase or snake_case keys)
        record_cls: ChargeEvent, TripEvent or MaintenanceEntry

    Returns:
        Tuple of (valid records, validation errors of the skipped ones)
    """
    records: List[T] = []
    errors: List[RecordValidationError] = []

    for position, raw in enumerate(raw_records or []):
        if not isinstance(raw, dict):
            error = RecordValidationError(
                f"Expected an object, got {type(raw).__name__}", field=f"[{position}]"
            )
        else:
            try:
                records.append(record_cls.from_dict(raw))
                continue
            except RecordValidationError as e:
                error = e

        logger.warning(f"Skipping invalid {record_cls.__name__} at position {position}: {error}")
        errors.append(error)

    return records, errors
