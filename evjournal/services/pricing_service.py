"""
Tariff pricing for EV Journal.

Maps a tariff category to the effective price per kWh for a settings snapshot.
"""

import logging
from typing import Any, Optional

from ..models import TARIFF_METADATA, PricingKind, Settings, TariffType

logger = logging.getLogger(__name__)


def resolve_price(
    tariff: Any,
    settings: Settings,
    custom_rate: Optional[float] = None
) -> float:
    """
    Effective price per kWh for a tariff category.

    Fixed-rate categories read their rate from settings, the quick-charge
    category uses ``custom_rate`` as given (callers validate it), and the
    free category costs nothing. Unknown categories price at 0 so one bad
    record never aborts a batch.

    Args:
        tariff: TariffType, stored label or member name
        settings: Settings snapshot holding the fixed rates
        custom_rate: Price per kWh entered for a quick charge

    Returns:
        Price per kWh in EUR
    """
    category = TariffType.parse(tariff)
    if category is None:
        logger.debug(f"Unknown tariff {tariff!r}, pricing at 0")
        return 0.0

    metadata = TARIFF_METADATA[category]
    pricing = metadata["pricing"]

    if pricing is PricingKind.FIXED:
        return float(getattr(settings, metadata["settings_field"]))

    if pricing is PricingKind.CUSTOM:
        return float(custom_rate) if custom_rate is not None else 0.0

    return 0.0
