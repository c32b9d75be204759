"""
Delivery estimate services package.

This package contains the delivery ETA engine:
- Excluded-day calendar (weekends, holidays) and business-day projection
- Order cutoff evaluation in the rule's timezone
- Delivery rule resolution for a destination
- Message rendering and cart/checkout aggregation
"""

from .aggregator import aggregate
from .calculator import calculate
from .calendar import HolidayCalendar, is_excluded
from .cutoff import resolve_effective_order_date
from .errors import InvalidRuleError, MalformedRuleData, ProjectionError
from .messages import render
from .projector import add_countable_days
from .resolver import resolve
from .snapshot import load_snapshot
from .types import (
    AggregationPolicy,
    DeliveryRule,
    DeliverySnapshot,
    Destination,
    ETAResult,
    Holiday,
)

__all__ = [
    'AggregationPolicy',
    'DeliveryRule',
    'DeliverySnapshot',
    'Destination',
    'ETAResult',
    'Holiday',
    'HolidayCalendar',
    'InvalidRuleError',
    'MalformedRuleData',
    'ProjectionError',
    'add_countable_days',
    'aggregate',
    'calculate',
    'is_excluded',
    'load_snapshot',
    'render',
    'resolve',
    'resolve_effective_order_date',
]
