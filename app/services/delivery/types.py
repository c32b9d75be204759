"""
Domain records for delivery estimates.

These are plain frozen dataclasses: the engine never touches the database,
so everything it needs is decoded into these types first (see snapshot.py).
"""
from dataclasses import dataclass, field
from datetime import date, datetime, time
from enum import Enum
from typing import Any, Dict, FrozenSet, Optional, Tuple

from .errors import InvalidRuleError

WILDCARD = "*"


class AggregationPolicy(str, Enum):
    LATEST = "latest"
    EARLIEST = "earliest"


class DateFormat(str, Enum):
    SHORT = "short"  # Mar 14
    LONG = "long"  # Mar 14, 2025


def normalize_code(value: Optional[str]) -> Optional[str]:
    """trim and upper-case a region or postal code, None if blank."""
    if value is None:
        return None
    value = str(value).strip().upper()
    return value or None


@dataclass(frozen=True)
class DeliveryRule:
    """a merchant delivery rule, already decoded and validated."""
    id: Any
    name: str
    countries: FrozenSet[str]
    min_days: int
    max_days: int
    processing_days: int = 0
    priority: int = 0
    is_active: bool = True
    created_at: Optional[datetime] = None
    regions: FrozenSet[str] = frozenset()
    postal_codes: FrozenSet[str] = frozenset()
    carrier: Optional[str] = None
    shipping_method: Optional[str] = None
    cutoff_time: Optional[time] = None
    timezone: str = "UTC"
    exclude_weekends: bool = True
    exclude_holidays: bool = True
    message_template: Optional[str] = None
    display: Dict[str, Any] = field(default_factory=dict, hash=False, compare=False)

    def __post_init__(self):
        if self.min_days < 0 or self.max_days < 0 or self.processing_days < 0:
            raise InvalidRuleError(f"rule {self.id}: day counts must be >= 0")
        if self.min_days > self.max_days:
            raise InvalidRuleError(
                f"rule {self.id}: min_days ({self.min_days}) > max_days ({self.max_days})"
            )

    @property
    def ships_everywhere(self) -> bool:
        return WILDCARD in self.countries

    def covers_country(self, country_code: str) -> bool:
        return self.ships_everywhere or country_code in self.countries


@dataclass(frozen=True)
class Holiday:
    name: str
    date: date
    is_recurring: bool = False
    country_code: Optional[str] = None


@dataclass(frozen=True)
class ProductOverride:
    """per-product (or per-variant) day overrides for one rule."""
    rule_id: Any
    product_id: str
    variant_id: Optional[str] = None
    min_days: Optional[int] = None
    max_days: Optional[int] = None
    processing_days: Optional[int] = None


@dataclass(frozen=True)
class MessageTemplate:
    message: str
    tone: str = "info"
    name: Optional[str] = None


@dataclass(frozen=True)
class Destination:
    country_code: str
    region: Optional[str] = None
    postal_code: Optional[str] = None

    def __post_init__(self):
        if not self.country_code or not str(self.country_code).strip():
            raise ValueError("country_code is required")
        object.__setattr__(self, "country_code", str(self.country_code).strip().upper())
        object.__setattr__(self, "region", normalize_code(self.region))
        object.__setattr__(self, "postal_code", normalize_code(self.postal_code))


@dataclass(frozen=True)
class DeliverySnapshot:
    """everything one calculation may read, captured once per request."""
    rules: Tuple[DeliveryRule, ...] = ()
    holidays: Tuple[Holiday, ...] = ()
    overrides: Tuple[ProductOverride, ...] = ()
    active_template: Optional[MessageTemplate] = None
    date_format: DateFormat = DateFormat.SHORT


@dataclass(frozen=True)
class ETAResult:
    min_date: date
    max_date: date
    min_days: int
    max_days: int
    message: str
    rule_id: Any = None
    rule_name: Optional[str] = None
    carrier: Optional[str] = None
    tone: str = "info"
