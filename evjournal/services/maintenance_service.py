"""
Maintenance Tracking Service

Maintenance entries carry no derived fields; processing passes them through
so all three event families share the same processed access pattern.
"""

import logging
from typing import Dict, Iterable, List

from ..calculations import sum_known
from ..models import MaintenanceCategorySummary, MaintenanceEntry, ProcessedMaintenanceEntry

logger = logging.getLogger(__name__)


def process_maintenance_entries(entries: Iterable[MaintenanceEntry]) -> List[ProcessedMaintenanceEntry]:
    """Identity transform: entries come back unchanged, in input order."""
    return list(entries)


def summarize_maintenance_costs(entries: Iterable[MaintenanceEntry]) -> Dict:
    """
    Get spend per maintenance category plus overall totals.

    Categories appear in the order they are first seen.
    """
    entries = list(entries)
    by_category: Dict = {}

    for entry in entries:
        summary = by_category.get(entry.category)
        if summary is None:
            summary = MaintenanceCategorySummary(category=entry.category)
            by_category[entry.category] = summary
        summary.entry_count += 1
        summary.total_cost = round(summary.total_cost + entry.cost, 2)

    return {
        "categories": list(by_category.values()),
        "entry_count": len(entries),
        "total_cost": round(sum_known(e.cost for e in entries), 2),
    }
