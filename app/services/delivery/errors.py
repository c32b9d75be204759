"""
Errors raised by the delivery estimate engine.

"No answer" outcomes (no rule for a destination, nothing to aggregate) are
returned as None and never raised.
"""


class DeliveryEngineError(Exception):
    """base class for delivery engine errors."""


class InvalidRuleError(DeliveryEngineError, ValueError):
    """rule data is inconsistent (e.g. min_days > max_days)."""


class MalformedRuleData(DeliveryEngineError, ValueError):
    """stored rule data could not be decoded."""

    def __init__(self, rule_id, field: str, reason: str):
        self.rule_id = rule_id
        self.field = field
        self.reason = reason
        super().__init__(f"rule {rule_id}: malformed {field} ({reason})")


class ProjectionError(DeliveryEngineError):
    """the calendar has no countable day within the projection horizon."""
