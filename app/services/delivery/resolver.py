"""
Delivery rule resolution.

Rules are tried in priority order and the first one that fits the
destination wins, so a higher-priority country-wide rule always beats a
lower-priority rule with tighter region/postal constraints.
"""
import logging
from typing import Iterable, List, Optional

from .types import DeliveryRule, Destination

logger = logging.getLogger(__name__)


def _created_key(rule: DeliveryRule) -> float:
    if rule.created_at is None:
        return float("-inf")
    return rule.created_at.timestamp()


def order_rules(rules: Iterable[DeliveryRule]) -> List[DeliveryRule]:
    """active rules, highest priority first, newest first within a priority."""
    active = [rule for rule in rules if rule.is_active]
    # two stable sorts: secondary key first
    active.sort(key=_created_key, reverse=True)
    active.sort(key=lambda rule: rule.priority, reverse=True)
    return active


def matches_country(rule: DeliveryRule, destination: Destination) -> bool:
    return rule.covers_country(destination.country_code)


def matches_region(rule: DeliveryRule, destination: Destination) -> bool:
    # an empty list, or a destination without a region, passes through
    if not rule.regions or destination.region is None:
        return True
    return destination.region in rule.regions


def matches_postal_code(rule: DeliveryRule, destination: Destination) -> bool:
    if not rule.postal_codes or destination.postal_code is None:
        return True
    return destination.postal_code in rule.postal_codes


def resolve(rules: Iterable[DeliveryRule], destination: Destination) -> Optional[DeliveryRule]:
    """pick the rule for a destination, or None when no rule ships to its country."""
    ordered = order_rules(rules)

    for rule in ordered:
        if (matches_country(rule, destination)
                and matches_region(rule, destination)
                and matches_postal_code(rule, destination)):
            return rule

    # nothing matched every constraint; settle for the first country match
    for rule in ordered:
        if matches_country(rule, destination):
            logger.debug(
                f"No rule matched region/postal for {destination.country_code}, "
                f"falling back to country-only rule {rule.id}"
            )
            return rule

    return None
