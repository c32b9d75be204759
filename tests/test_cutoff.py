"""
Tests for cutoff evaluation.

Run with: pytest tests/test_cutoff.py -v
"""
from datetime import date, datetime, time, timedelta, timezone

import pytest

from app.services.delivery.cutoff import (
    get_timezone,
    parse_cutoff,
    resolve_effective_order_date,
    time_until_cutoff,
)

CUTOFF = time(14, 0)


class TestEffectiveOrderDate:
    """Day zero depends on the order time relative to the rule cutoff."""

    def test_no_cutoff_keeps_order_date(self):
        assert resolve_effective_order_date(datetime(2025, 3, 10, 23, 59)) == date(2025, 3, 10)

    def test_before_cutoff_is_same_day(self):
        assert resolve_effective_order_date(datetime(2025, 3, 10, 9, 0), CUTOFF) == date(2025, 3, 10)

    def test_exactly_at_cutoff_is_same_day(self):
        assert resolve_effective_order_date(datetime(2025, 3, 10, 14, 0), CUTOFF) == date(2025, 3, 10)

    def test_after_cutoff_is_next_day(self):
        assert resolve_effective_order_date(datetime(2025, 3, 10, 14, 0, 1), CUTOFF) == date(2025, 3, 11)

    def test_after_cutoff_on_friday_rolls_to_saturday(self):
        # next calendar day; weekend skipping happens in projection
        assert resolve_effective_order_date(datetime(2025, 3, 14, 15, 0), CUTOFF) == date(2025, 3, 15)

    def test_aware_timestamp_converted_to_rule_timezone(self):
        # 12:30 UTC is 13:30 in Berlin (CET): before cutoff
        order = datetime(2025, 3, 10, 12, 30, tzinfo=timezone.utc)
        assert resolve_effective_order_date(order, CUTOFF, "Europe/Berlin") == date(2025, 3, 10)
        # 13:30 UTC is 14:30 in Berlin: after cutoff
        order = datetime(2025, 3, 10, 13, 30, tzinfo=timezone.utc)
        assert resolve_effective_order_date(order, CUTOFF, "Europe/Berlin") == date(2025, 3, 11)

    def test_timezone_can_change_the_calendar_date(self):
        # 23:30 UTC Monday is already Tuesday morning in Tokyo
        order = datetime(2025, 3, 10, 23, 30, tzinfo=timezone.utc)
        assert resolve_effective_order_date(order, None, "Asia/Tokyo") == date(2025, 3, 11)

    def test_naive_timestamp_is_local_to_rule(self):
        order = datetime(2025, 3, 10, 13, 30)
        assert resolve_effective_order_date(order, CUTOFF, "America/New_York") == date(2025, 3, 10)


class TestTimeUntilCutoff:

    def test_remaining_time_before_cutoff(self):
        remaining = time_until_cutoff(datetime(2025, 3, 10, 11, 15), CUTOFF)
        assert remaining == timedelta(hours=2, minutes=45)

    def test_none_after_cutoff(self):
        assert time_until_cutoff(datetime(2025, 3, 10, 15, 0), CUTOFF) is None

    def test_none_without_cutoff(self):
        assert time_until_cutoff(datetime(2025, 3, 10, 11, 0), None) is None


class TestParsing:

    def test_parse_cutoff(self):
        assert parse_cutoff("09:30") == time(9, 30)
        assert parse_cutoff(" ") is None
        assert parse_cutoff(None) is None

    @pytest.mark.parametrize("raw", ["9", "25:00", "ab:cd", "14:00:00"])
    def test_parse_cutoff_rejects_garbage(self, raw):
        with pytest.raises(ValueError):
            parse_cutoff(raw)

    def test_unknown_timezone(self):
        with pytest.raises(ValueError):
            get_timezone("Mars/Olympus_Mons")

    def test_unset_timezone_is_utc(self):
        assert get_timezone(None) is timezone.utc
        assert get_timezone("") is timezone.utc
