"""
Value objects for EV Journal.

Raw events arrive from the persistence layer as plain dicts (camelCase keys,
ISO date strings). ``from_dict`` turns them into records, ``to_dict`` turns
records back into JSON-serializable dicts with snake_case keys. Processed
records are computed fresh on every call and never persisted.
"""

from dataclasses import dataclass, field, fields
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from .config import Config
from .exceptions import ConfigurationError, RecordValidationError
from .utils.time_utils import parse_datetime

STATUS_PENDING = "pending"
STATUS_COMPLETED = "completed"
RECORD_STATUSES = (STATUS_PENDING, STATUS_COMPLETED)


class TariffType(str, Enum):
    """Electricity rate classes. Values are the labels stored on charge records."""

    PEAK = "Heures Pleines"
    OFF_PEAK = "Heures Creuses"
    TEMPO_BLUE_PEAK = "Tempo Bleu - Heures Pleines"
    TEMPO_BLUE_OFF_PEAK = "Tempo Bleu - Heures Creuses"
    TEMPO_WHITE_PEAK = "Tempo Blanc - Heures Pleines"
    TEMPO_WHITE_OFF_PEAK = "Tempo Blanc - Heures Creuses"
    TEMPO_RED_PEAK = "Tempo Rouge - Heures Pleines"
    TEMPO_RED_OFF_PEAK = "Tempo Rouge - Heures Creuses"
    QUICK_CHARGE = "Recharge borne rapide"
    FREE_CHARGE = "Borne gratuite"

    @classmethod
    def parse(cls, value: Any) -> Optional["TariffType"]:
        """Resolve a stored label or member name; unknown values give None."""
        if value is None:
            return None
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            pass
        try:
            return cls[str(value).strip().upper()]
        except KeyError:
            return None


class PricingKind(str, Enum):
    FIXED = "fixed"
    CUSTOM = "custom"
    FREE = "free"


class ChargeSpeed(str, Enum):
    SLOW = "slow"
    FAST = "fast"


# Exhaustive classification: every TariffType must appear here (checked below)
TARIFF_METADATA = {
    TariffType.PEAK: {
        "group": "standard",
        "period": "peak",
        "pricing": PricingKind.FIXED,
        "speed": ChargeSpeed.SLOW,
        "settings_field": "price_peak",
    },
    TariffType.OFF_PEAK: {
        "group": "standard",
        "period": "off_peak",
        "pricing": PricingKind.FIXED,
        "speed": ChargeSpeed.SLOW,
        "settings_field": "price_off_peak",
    },
    TariffType.TEMPO_BLUE_PEAK: {
        "group": "tempo_blue",
        "period": "peak",
        "pricing": PricingKind.FIXED,
        "speed": ChargeSpeed.SLOW,
        "settings_field": "price_tempo_blue_peak",
    },
    TariffType.TEMPO_BLUE_OFF_PEAK: {
        "group": "tempo_blue",
        "period": "off_peak",
        "pricing": PricingKind.FIXED,
        "speed": ChargeSpeed.SLOW,
        "settings_field": "price_tempo_blue_off_peak",
    },
    TariffType.TEMPO_WHITE_PEAK: {
        "group": "tempo_white",
        "period": "peak",
        "pricing": PricingKind.FIXED,
        "speed": ChargeSpeed.SLOW,
        "settings_field": "price_tempo_white_peak",
    },
    TariffType.TEMPO_WHITE_OFF_PEAK: {
        "group": "tempo_white",
        "period": "off_peak",
        "pricing": PricingKind.FIXED,
        "speed": ChargeSpeed.SLOW,
        "settings_field": "price_tempo_white_off_peak",
    },
    TariffType.TEMPO_RED_PEAK: {
        "group": "tempo_red",
        "period": "peak",
        "pricing": PricingKind.FIXED,
        "speed": ChargeSpeed.SLOW,
        "settings_field": "price_tempo_red_peak",
    },
    TariffType.TEMPO_RED_OFF_PEAK: {
        "group": "tempo_red",
        "period": "off_peak",
        "pricing": PricingKind.FIXED,
        "speed": ChargeSpeed.SLOW,
        "settings_field": "price_tempo_red_off_peak",
    },
    TariffType.QUICK_CHARGE: {
        "group": "quick",
        "period": None,
        "pricing": PricingKind.CUSTOM,
        "speed": ChargeSpeed.FAST,
        "settings_field": None,
    },
    TariffType.FREE_CHARGE: {
        "group": "free",
        "period": None,
        "pricing": PricingKind.FREE,
        "speed": ChargeSpeed.SLOW,
        "settings_field": None,
    },
}


def _check_tariff_metadata() -> None:
    missing = [tariff.name for tariff in TariffType if tariff not in TARIFF_METADATA]
    if missing:
        raise ConfigurationError(
            f"Tariffs without classification: {', '.join(missing)}",
            config_key="TARIFF_METADATA"
        )


_check_tariff_metadata()


def is_fast_charge(tariff: TariffType) -> bool:
    """True for tariff categories billed as DC fast charging."""
    return TARIFF_METADATA[tariff]["speed"] is ChargeSpeed.FAST


class MaintenanceType(str, Enum):
    """Maintenance spend categories. Values are the stored labels."""

    WASH = "Lavage"
    PERIODIC_SERVICE = "Entretien périodique"
    REPAIR = "Réparation"
    TIRES = "Pneus"
    WINDSHIELD = "Pare-brise"
    BODYWORK = "Carrosserie"

    @classmethod
    def parse(cls, value: Any) -> Optional["MaintenanceType"]:
        if value is None:
            return None
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            pass
        try:
            return cls[str(value).strip().upper()]
        except KeyError:
            return None


# ============================================================================
# Field helpers
# ============================================================================


def _pick(data: Dict[str, Any], *keys: str, default: Any = None) -> Any:
    """Return the first non-null value among alternative key spellings."""
    for key in keys:
        value = data.get(key)
        if value is not None:
            return value
    return default


def _to_float(value: Any, field_name: str, record_id: str = None, required: bool = False) -> Optional[float]:
    if value is None or value == "":
        if required:
            raise RecordValidationError(
                f"Missing required field: {field_name}",
                record_id=record_id,
                field=field_name
            )
        return None
    if isinstance(value, bool):
        raise RecordValidationError(
            f"Invalid number for {field_name}", record_id=record_id, field=field_name, value=value
        )
    try:
        return float(value)
    except (TypeError, ValueError):
        raise RecordValidationError(
            f"Invalid number for {field_name}", record_id=record_id, field=field_name, value=value
        )


def _parse_event_date(value: Any, record_id: str = None) -> datetime:
    parsed = parse_datetime(value)
    if parsed is None:
        raise RecordValidationError(
            "Invalid or missing date", record_id=record_id, field="date", value=value
        )
    return parsed


def _check_status(status: str, record_id: str = None) -> None:
    if status not in RECORD_STATUSES:
        raise RecordValidationError(
            f"Unknown record status: {status}", record_id=record_id, field="status", value=status
        )


def _serialize(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {_serialize(k): _serialize(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_serialize(v) for v in value]
    return value


class _Record:
    """Shared ``to_dict`` for dataclass records (init fields only)."""

    def field_values(self) -> Dict[str, Any]:
        """Constructor arguments of this record, unserialized."""
        return {f.name: getattr(self, f.name) for f in fields(self) if f.init}

    def to_dict(self) -> Dict[str, Any]:
        return {name: _serialize(value) for name, value in self.field_values().items()}


# ============================================================================
# Configuration snapshot and vehicle
# ============================================================================

# snake_case attribute -> camelCase key used by the stored settings document
_SETTINGS_ALIASES = {
    "price_peak": "pricePeak",
    "price_off_peak": "priceOffPeak",
    "price_tempo_blue_peak": "priceTempoBluePeak",
    "price_tempo_blue_off_peak": "priceTempoBlueOffPeak",
    "price_tempo_white_peak": "priceTempoWhitePeak",
    "price_tempo_white_off_peak": "priceTempoWhiteOffPeak",
    "price_tempo_red_peak": "priceTempoRedPeak",
    "price_tempo_red_off_peak": "priceTempoRedOffPeak",
    "gasoline_consumption_l_100km": "gasolineCarConsumption",
    "gasoline_price_per_liter": "gasolinePricePerLiter",
    "billing_rate_local": "billingRateLocal",
    "billing_rate_medium": "billingRateMedium",
    "charging_efficiency": "chargingEfficiency",
    "co2_kg_per_liter": "co2KgPerLiter",
}


@dataclass
class Settings(_Record):
    """Per-user pricing and comparison configuration."""

    price_peak: float = Config.DEFAULT_PRICE_PEAK
    price_off_peak: float = Config.DEFAULT_PRICE_OFF_PEAK
    price_tempo_blue_peak: float = Config.DEFAULT_PRICE_TEMPO_BLUE_PEAK
    price_tempo_blue_off_peak: float = Config.DEFAULT_PRICE_TEMPO_BLUE_OFF_PEAK
    price_tempo_white_peak: float = Config.DEFAULT_PRICE_TEMPO_WHITE_PEAK
    price_tempo_white_off_peak: float = Config.DEFAULT_PRICE_TEMPO_WHITE_OFF_PEAK
    price_tempo_red_peak: float = Config.DEFAULT_PRICE_TEMPO_RED_PEAK
    price_tempo_red_off_peak: float = Config.DEFAULT_PRICE_TEMPO_RED_OFF_PEAK
    gasoline_consumption_l_100km: float = Config.GASOLINE_CONSUMPTION_L_100KM
    gasoline_price_per_liter: float = Config.GASOLINE_PRICE_PER_LITER
    billing_rate_local: float = Config.BILLING_RATE_LOCAL
    billing_rate_medium: float = Config.BILLING_RATE_MEDIUM
    charging_efficiency: float = Config.CHARGING_EFFICIENCY
    co2_kg_per_liter: float = Config.CO2_KG_PER_LITER

    def __post_init__(self) -> None:
        if not 0 < self.charging_efficiency <= 1:
            raise ConfigurationError(
                f"Charging efficiency must be in (0, 1], got {self.charging_efficiency}",
                config_key="charging_efficiency"
            )

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Settings":
        """Build from a stored settings document; missing keys keep their defaults."""
        data = data or {}
        values = {}
        for attr, alias in _SETTINGS_ALIASES.items():
            raw = _pick(data, attr, alias)
            if raw is None:
                continue
            try:
                values[attr] = float(raw)
            except (TypeError, ValueError):
                raise ConfigurationError(f"Invalid value for {attr}: {raw!r}", config_key=attr)
        return cls(**values)


@dataclass
class Vehicle(_Record):
    """Active vehicle descriptor."""

    name: str = ""
    battery_capacity_kwh: float = Config.DEFAULT_BATTERY_CAPACITY_KWH
    id: Optional[str] = None

    def __post_init__(self) -> None:
        # Negative capacity is a misconfiguration; treat like an unknown (zero) capacity
        if self.battery_capacity_kwh is None or self.battery_capacity_kwh < 0:
            self.battery_capacity_kwh = 0.0

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Vehicle":
        data = data or {}
        capacity = _pick(data, "battery_capacity_kwh", "batteryCapacity", "capacity")
        try:
            capacity = float(capacity) if capacity is not None else Config.DEFAULT_BATTERY_CAPACITY_KWH
        except (TypeError, ValueError):
            raise ConfigurationError(f"Invalid battery capacity: {capacity!r}", config_key="battery_capacity_kwh")
        return cls(
            name=_pick(data, "name", "vehicleModel", default=""),
            battery_capacity_kwh=capacity,
            id=_pick(data, "id"),
        )


# ============================================================================
# Charges
# ============================================================================


@dataclass
class ChargeEvent(_Record):
    """A charging session as entered by the user."""

    id: Optional[str]
    date: str
    odometer: float
    start_percentage: float
    end_percentage: Optional[float] = None
    tariff: Optional[TariffType] = None
    custom_price: Optional[float] = None  # quick charge only
    price_per_kwh: Optional[float] = None  # snapshot captured at completion
    status: str = STATUS_COMPLETED
    vehicle_id: Optional[str] = None
    occurred_at: datetime = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        _check_status(self.status, self.id)
        self.occurred_at = _parse_event_date(self.date, self.id)

    @property
    def is_completed(self) -> bool:
        return (
            self.status == STATUS_COMPLETED
            and self.end_percentage is not None
            and self.tariff is not None
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ChargeEvent":
        record_id = _pick(data, "id")
        raw_tariff = _pick(data, "tariff")
        tariff = TariffType.parse(raw_tariff)
        if raw_tariff is not None and tariff is None:
            raise RecordValidationError(
                f"Unknown tariff: {raw_tariff}", record_id=record_id, field="tariff", value=raw_tariff
            )
        return cls(
            id=record_id,
            date=_pick(data, "date"),
            odometer=_to_float(_pick(data, "odometer"), "odometer", record_id, required=True),
            start_percentage=_to_float(
                _pick(data, "start_percentage", "startPercentage"), "start_percentage", record_id, required=True
            ),
            end_percentage=_to_float(_pick(data, "end_percentage", "endPercentage"), "end_percentage", record_id),
            tariff=tariff,
            custom_price=_to_float(_pick(data, "custom_price", "customPrice"), "custom_price", record_id),
            price_per_kwh=_to_float(_pick(data, "price_per_kwh", "pricePerKwh"), "price_per_kwh", record_id),
            status=_pick(data, "status", default=STATUS_COMPLETED),
            vehicle_id=_pick(data, "vehicle_id", "vehicleId"),
        )


@dataclass
class ProcessedCharge(ChargeEvent):
    """A completed charge enriched with energy, cost and driving figures."""

    kwh_added: Optional[float] = None  # metered at the supply, includes charging loss
    kwh_stored: Optional[float] = None  # reached the battery
    cost: Optional[float] = None
    distance_driven: Optional[float] = None
    segment_kwh: Optional[float] = None  # battery depletion since previous charge
    segment_cost: Optional[float] = None
    consumption_kwh_100km: Optional[float] = None
    cost_per_100km: Optional[float] = None
    gasoline_equivalent_cost: Optional[float] = None
    gasoline_equivalent_km: Optional[float] = None
    savings: Optional[float] = None
    co2_avoided_kg: Optional[float] = None


# ============================================================================
# Trips
# ============================================================================


@dataclass
class TripEvent(_Record):
    """A journey between two odometer/battery readings."""

    id: Optional[str]
    date: str
    start_odometer: float
    start_percentage: float
    end_odometer: Optional[float] = None
    end_percentage: Optional[float] = None
    destination: str = ""
    client: Optional[str] = None
    is_billed: bool = False
    status: str = STATUS_COMPLETED
    vehicle_id: Optional[str] = None
    occurred_at: datetime = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        _check_status(self.status, self.id)
        self.occurred_at = _parse_event_date(self.date, self.id)

    @property
    def is_completed(self) -> bool:
        return (
            self.status == STATUS_COMPLETED
            and self.end_odometer is not None
            and self.end_percentage is not None
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TripEvent":
        record_id = _pick(data, "id")
        return cls(
            id=record_id,
            date=_pick(data, "date"),
            start_odometer=_to_float(
                _pick(data, "start_odometer", "startOdometer"), "start_odometer", record_id, required=True
            ),
            start_percentage=_to_float(
                _pick(data, "start_percentage", "startPercentage"), "start_percentage", record_id, required=True
            ),
            end_odometer=_to_float(_pick(data, "end_odometer", "endOdometer"), "end_odometer", record_id),
            end_percentage=_to_float(_pick(data, "end_percentage", "endPercentage"), "end_percentage", record_id),
            destination=_pick(data, "destination", default=""),
            client=_pick(data, "client") or None,
            is_billed=bool(_pick(data, "is_billed", "isBilled", default=False)),
            status=_pick(data, "status", default=STATUS_COMPLETED),
            vehicle_id=_pick(data, "vehicle_id", "vehicleId"),
        )


@dataclass
class ProcessedTrip(TripEvent):
    """A completed trip priced against the preceding charge."""

    distance: Optional[float] = None
    kwh_consumed: Optional[float] = None
    price_per_kwh: Optional[float] = None
    priced_by_charge_id: Optional[str] = None
    cost: Optional[float] = None
    consumption_kwh_100km: Optional[float] = None
    gasoline_equivalent_cost: Optional[float] = None
    savings: Optional[float] = None
    billing_amount: Optional[float] = None


# ============================================================================
# Maintenance
# ============================================================================


@dataclass
class MaintenanceEntry(_Record):
    """A maintenance spend entry. Carries no derived fields."""

    id: Optional[str]
    date: str
    odometer: float
    category: MaintenanceType
    cost: float
    details: Optional[str] = None
    vehicle_id: Optional[str] = None
    occurred_at: datetime = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self.occurred_at = _parse_event_date(self.date, self.id)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MaintenanceEntry":
        record_id = _pick(data, "id")
        raw_category = _pick(data, "category", "type")
        category = MaintenanceType.parse(raw_category)
        if category is None:
            raise RecordValidationError(
                f"Unknown maintenance category: {raw_category}",
                record_id=record_id,
                field="category",
                value=raw_category
            )
        return cls(
            id=record_id,
            date=_pick(data, "date"),
            odometer=_to_float(_pick(data, "odometer"), "odometer", record_id, required=True),
            category=category,
            cost=_to_float(_pick(data, "cost"), "cost", record_id, required=True),
            details=_pick(data, "details"),
            vehicle_id=_pick(data, "vehicle_id", "vehicleId"),
        )


ProcessedMaintenanceEntry = MaintenanceEntry


@dataclass
class MaintenanceCategorySummary(_Record):
    category: MaintenanceType
    entry_count: int = 0
    total_cost: float = 0.0


# ============================================================================
# Period summaries
# ============================================================================


@dataclass
class StatsData(_Record):
    """Charge statistics for one weekly/monthly/yearly bucket."""

    name: str
    charge_count: int = 0
    total_kwh: float = 0.0
    kwh_per_tariff: Dict[TariffType, float] = field(default_factory=dict)
    cost_per_tariff: Dict[TariffType, float] = field(default_factory=dict)
    total_cost: float = 0.0
    total_distance: float = 0.0
    avg_consumption: Optional[float] = None
    avg_cost_per_100km: Optional[float] = None
    total_gasoline_cost: float = 0.0
    total_savings: float = 0.0
    avg_price_per_kwh: Optional[float] = None
    slow_charge_kwh: float = 0.0
    fast_charge_kwh: float = 0.0
    slow_charge_cost: float = 0.0
    fast_charge_cost: float = 0.0
    slow_charge_count: int = 0
    fast_charge_count: int = 0
    co2_avoided_kg: float = 0.0


@dataclass
class TripStatsData(_Record):
    name: str
    trip_count: int = 0
    total_distance: float = 0.0
    total_cost: float = 0.0
    total_savings: float = 0.0
    total_billing_amount: float = 0.0


@dataclass
class ClientStats(_Record):
    name: str
    trip_count: int = 0
    total_distance: float = 0.0
    total_billing_amount: float = 0.0


@dataclass
class DestinationStats(_Record):
    name: str
    trip_count: int = 0
    total_distance: float = 0.0
    avg_distance: float = 0.0
