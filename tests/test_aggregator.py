"""
Tests for cart/checkout aggregation.

Run with: pytest tests/test_aggregator.py -v
"""
from datetime import date

import pytest

from app.services.delivery.aggregator import aggregate
from app.services.delivery.types import AggregationPolicy, ETAResult


def eta(min_date, max_date, rule_id=None) -> ETAResult:
    return ETAResult(min_date=min_date, max_date=max_date, min_days=0, max_days=0,
                     message="", rule_id=rule_id)


ITEM_1 = eta(date(2025, 3, 12), date(2025, 3, 14), rule_id=1)
ITEM_2 = eta(date(2025, 3, 13), date(2025, 3, 20), rule_id=2)


class TestAggregate:

    def test_latest_picks_slowest_item(self):
        assert aggregate([ITEM_1, ITEM_2], "latest") is ITEM_2

    def test_earliest_picks_fastest_item(self):
        assert aggregate([ITEM_1, ITEM_2], AggregationPolicy.EARLIEST) is ITEM_1

    def test_default_policy_is_latest(self):
        assert aggregate([ITEM_1, ITEM_2]) is ITEM_2

    def test_single_item(self):
        assert aggregate([ITEM_1], "earliest") is ITEM_1

    def test_empty_input_returns_none(self):
        assert aggregate([], "latest") is None

    def test_ties_go_to_first_occurrence(self):
        first = eta(date(2025, 3, 12), date(2025, 3, 20), rule_id="a")
        second = eta(date(2025, 3, 12), date(2025, 3, 20), rule_id="b")

        assert aggregate([first, second], "latest") is first
        assert aggregate([first, second], "earliest") is first

    def test_latest_has_max_of_all_max_dates(self):
        results = [eta(date(2025, 3, d), date(2025, 3, d + m)) for d, m in [(3, 4), (1, 9), (7, 1), (2, 8)]]
        chosen = aggregate(results, "latest")

        assert chosen in results
        assert chosen.max_date == max(r.max_date for r in results)

    def test_unknown_policy(self):
        with pytest.raises(ValueError):
            aggregate([ITEM_1], "average")
