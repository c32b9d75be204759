"""
ETA calculation: rule resolution, cutoff, processing and transit windows,
then the shopper-facing message.
"""
import logging
from dataclasses import replace
from datetime import datetime
from typing import Any, Dict, Optional

from .calendar import HolidayCalendar, NO_HOLIDAYS
from .cutoff import resolve_effective_order_date, time_until_cutoff
from .messages import (
    DEFAULT_CARRIER,
    DEFAULT_COUNTDOWN,
    DEFAULT_CUTOFF_LABEL,
    DEFAULT_SHIPPING_METHOD,
    format_countdown,
    format_cutoff,
    format_date,
    render_or_default,
)
from .projector import add_countable_days
from .resolver import resolve
from .types import DeliveryRule, DeliverySnapshot, Destination, ETAResult, ProductOverride

logger = logging.getLogger(__name__)


def find_override(
    snapshot: DeliverySnapshot,
    rule: DeliveryRule,
    product_id: Optional[str],
    variant_id: Optional[str] = None,
) -> Optional[ProductOverride]:
    """variant-specific override if there is one, else the product-wide one."""
    if not product_id:
        return None

    product_wide = None
    for override in snapshot.overrides:
        if override.rule_id != rule.id or override.product_id != product_id:
            continue
        if variant_id and override.variant_id == variant_id:
            return override
        if override.variant_id is None and product_wide is None:
            product_wide = override
    return product_wide


def apply_override(rule: DeliveryRule, override: Optional[ProductOverride]) -> DeliveryRule:
    """copy of the rule with the override's day counts; re-validated on construction."""
    if override is None:
        return rule
    changes = {}
    if override.min_days is not None:
        changes["min_days"] = override.min_days
    if override.max_days is not None:
        changes["max_days"] = override.max_days
    if override.processing_days is not None:
        changes["processing_days"] = override.processing_days
    return replace(rule, **changes) if changes else rule


def holidays_for(snapshot: DeliverySnapshot, rule: DeliveryRule, destination: Destination) -> HolidayCalendar:
    if not rule.exclude_holidays:
        return NO_HOLIDAYS
    return HolidayCalendar.from_holidays(snapshot.holidays, destination.country_code)


def build_variables(
    rule: DeliveryRule,
    snapshot: DeliverySnapshot,
    min_date,
    max_date,
    order_ts: datetime,
) -> Dict[str, Any]:
    min_label = format_date(min_date, snapshot.date_format)
    max_label = format_date(max_date, snapshot.date_format)

    if rule.cutoff_time is not None:
        cutoff_label = format_cutoff(rule.cutoff_time)
        countdown = format_countdown(time_until_cutoff(order_ts, rule.cutoff_time, rule.timezone))
    else:
        cutoff_label = DEFAULT_CUTOFF_LABEL
        countdown = DEFAULT_COUNTDOWN

    return {
        "minDate": min_label,
        "maxDate": max_label,
        "minDays": rule.min_days,
        "maxDays": rule.max_days,
        "eta_min_date": min_label,
        "eta_max_date": max_label,
        "eta_date": max_label,
        "eta_min": rule.min_days,
        "eta_max": rule.max_days,
        "cutoff_time": cutoff_label,
        "countdown": countdown,
        "shipping_method": rule.shipping_method or DEFAULT_SHIPPING_METHOD,
        "carrier": rule.carrier or DEFAULT_CARRIER,
        "rule_name": rule.name,
    }


def calculate(
    snapshot: DeliverySnapshot,
    destination: Destination,
    order_ts: datetime,
    product_id: Optional[str] = None,
    variant_id: Optional[str] = None,
) -> Optional[ETAResult]:
    """estimate the delivery window for one order line.

    returns None when no rule ships to the destination country.
    """
    matched = resolve(snapshot.rules, destination)
    if matched is None:
        logger.info(f"No delivery rule matched country {destination.country_code}")
        return None

    rule = apply_override(matched, find_override(snapshot, matched, product_id, variant_id))
    holidays = holidays_for(snapshot, rule, destination)

    day_zero = resolve_effective_order_date(order_ts, rule.cutoff_time, rule.timezone)
    processed = add_countable_days(day_zero, rule.processing_days, rule.exclude_weekends, holidays)
    min_date = add_countable_days(processed, rule.min_days, rule.exclude_weekends, holidays)
    max_date = add_countable_days(processed, rule.max_days, rule.exclude_weekends, holidays)

    # the rule's own template is the most specific, then the store-wide one
    template = rule.message_template
    tone = rule.display.get("tone") or "info"
    if not (template and template.strip()) and snapshot.active_template is not None:
        template = snapshot.active_template.message
        tone = rule.display.get("tone") or snapshot.active_template.tone

    variables = build_variables(rule, snapshot, min_date, max_date, order_ts)
    message = render_or_default(template, variables, rule.min_days, rule.max_days)

    return ETAResult(
        min_date=min_date,
        max_date=max_date,
        min_days=rule.min_days,
        max_days=rule.max_days,
        message=message,
        rule_id=rule.id,
        rule_name=rule.name,
        carrier=rule.carrier,
        tone=tone,
    )
