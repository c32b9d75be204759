"""
Load a store's delivery data into an immutable DeliverySnapshot.

Rule lists are stored as JSON text. They are decoded here, once per request,
so the engine only ever sees typed sets. A rule whose data cannot be decoded
is skipped with a warning instead of failing every calculation for the store.
"""
import json
import logging
from typing import Any, FrozenSet, Iterable, List, Optional

from sqlalchemy.orm import Session

from app import models
from app.core.config import settings
from .cutoff import get_timezone, parse_cutoff
from .errors import MalformedRuleData
from .types import (
    DateFormat,
    DeliveryRule,
    DeliverySnapshot,
    Holiday,
    MessageTemplate,
    ProductOverride,
    normalize_code,
)

logger = logging.getLogger(__name__)


def decode_code_list(raw: Any, rule_id: Any, field: str) -> FrozenSet[str]:
    """decode a JSON list of codes ('["DE", "AT"]'); empty/None means no constraint."""
    if raw is None:
        return frozenset()
    if isinstance(raw, str):
        if not raw.strip():
            return frozenset()
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as e:
            raise MalformedRuleData(rule_id, field, f"invalid JSON: {e.msg}") from e
    if not isinstance(raw, list):
        raise MalformedRuleData(rule_id, field, f"expected a list, got {type(raw).__name__}")

    codes = set()
    for item in raw:
        if not isinstance(item, str):
            raise MalformedRuleData(rule_id, field, f"expected strings, got {item!r}")
        code = normalize_code(item)
        if code:
            codes.add(code)
    return frozenset(codes)


def decode_rule(row: models.DeliveryRule, default_timezone: Optional[str] = None) -> DeliveryRule:
    """turn a stored rule into a DeliveryRule.

    raises MalformedRuleData for undecodable list/cutoff/timezone/display data and
    InvalidRuleError when the day counts are inconsistent.
    """
    countries = decode_code_list(row.countries, row.id, "countries")
    if not countries:
        raise MalformedRuleData(row.id, "countries", "no countries configured")

    try:
        cutoff = parse_cutoff(row.cutoff_time)
    except ValueError as e:
        raise MalformedRuleData(row.id, "cutoff_time", str(e)) from e

    display = row.display or {}
    if not isinstance(display, dict):
        raise MalformedRuleData(row.id, "display", f"expected an object, got {type(display).__name__}")

    tz_name = row.timezone or default_timezone or settings.DEFAULT_TIMEZONE
    try:
        get_timezone(tz_name)
    except ValueError as e:
        raise MalformedRuleData(row.id, "timezone", str(e)) from e

    return DeliveryRule(
        id=row.id,
        name=row.name,
        countries=countries,
        regions=decode_code_list(row.regions, row.id, "regions"),
        postal_codes=decode_code_list(row.postal_codes, row.id, "postal_codes"),
        min_days=row.min_days,
        max_days=row.max_days,
        processing_days=row.processing_days or 0,
        priority=row.priority or 0,
        is_active=bool(row.is_active),
        created_at=row.created_at,
        carrier=row.carrier,
        shipping_method=row.shipping_method,
        cutoff_time=cutoff,
        timezone=tz_name,
        exclude_weekends=bool(row.exclude_weekends),
        exclude_holidays=bool(row.exclude_holidays),
        message_template=row.message_template,
        display=dict(display),
    )


def decode_rules(rows: Iterable[models.DeliveryRule], default_timezone: Optional[str] = None) -> List[DeliveryRule]:
    rules = []
    for row in rows:
        try:
            rules.append(decode_rule(row, default_timezone))
        except MalformedRuleData as e:
            logger.warning(f"Skipping delivery rule {row.id} ({row.name}): {e}")
    return rules


def load_snapshot(db: Session, store: models.Store) -> DeliverySnapshot:
    """read the store's active rules, holidays, overrides and template."""
    rule_rows = (
        db.query(models.DeliveryRule)
        .filter(models.DeliveryRule.store_id == store.id, models.DeliveryRule.is_active.is_(True))
        .order_by(models.DeliveryRule.priority.desc(), models.DeliveryRule.created_at.desc())
        .all()
    )
    holiday_rows = db.query(models.Holiday).filter(models.Holiday.store_id == store.id).all()
    targeting_rows = db.query(models.ProductTargeting).filter(models.ProductTargeting.store_id == store.id).all()

    holidays = tuple(
        Holiday(
            name=h.name,
            date=h.holiday_date,
            is_recurring=bool(h.is_recurring),
            country_code=(h.country_code or "").upper() or None,
        )
        for h in holiday_rows
    )
    overrides = tuple(
        ProductOverride(
            rule_id=t.rule_id,
            product_id=t.product_id,
            variant_id=t.variant_id,
            min_days=t.override_min_days,
            max_days=t.override_max_days,
            processing_days=t.override_processing_days,
        )
        for t in targeting_rows
    )

    active_template = None
    if store.active_template is not None:
        active_template = MessageTemplate(
            message=store.active_template.message,
            tone=store.active_template.tone_default or "info",
            name=store.active_template.name,
        )

    date_format = store.settings.date_format if store.settings else settings.DEFAULT_DATE_FORMAT
    try:
        date_format = DateFormat(date_format)
    except ValueError:
        logger.warning(f"Unknown date format {date_format!r} for store {store.shop}, using short")
        date_format = DateFormat.SHORT

    return DeliverySnapshot(
        rules=tuple(decode_rules(rule_rows)),
        holidays=holidays,
        overrides=overrides,
        active_template=active_template,
        date_format=date_format,
    )
