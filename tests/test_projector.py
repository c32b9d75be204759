"""
Tests for business-day projection.

Run with: pytest tests/test_projector.py -v
"""
from datetime import date, timedelta

import pytest

from app.services.delivery.calendar import HolidayCalendar, NO_HOLIDAYS, is_excluded
from app.services.delivery.errors import ProjectionError
from app.services.delivery.projector import add_countable_days
from app.services.delivery.types import Holiday

MONDAY = date(2025, 3, 10)
FRIDAY = date(2025, 3, 14)
SATURDAY = date(2025, 3, 15)


class TestAddCountableDays:
    """add_countable_days over weekends and holidays."""

    @pytest.mark.parametrize("start", [MONDAY, SATURDAY])
    @pytest.mark.parametrize("exclude_weekends", [True, False])
    def test_zero_days_returns_start(self, start, exclude_weekends):
        assert add_countable_days(start, 0, exclude_weekends, NO_HOLIDAYS) == start

    def test_counts_calendar_days_without_exclusions(self):
        assert add_countable_days(FRIDAY, 3, False) == date(2025, 3, 17)

    def test_skips_weekend(self):
        assert add_countable_days(FRIDAY, 1, True) == date(2025, 3, 17)
        assert add_countable_days(FRIDAY, 3, True) == date(2025, 3, 19)

    def test_start_on_weekend(self):
        assert add_countable_days(SATURDAY, 1, True) == date(2025, 3, 17)

    def test_skips_holidays(self):
        holidays = HolidayCalendar.from_holidays([Holiday("Midweek", date(2025, 3, 12))])
        # Tue 11, (Wed 12 holiday), Thu 13
        assert add_countable_days(MONDAY, 2, True, holidays) == date(2025, 3, 13)

    def test_negative_days_rejected(self):
        with pytest.raises(ValueError):
            add_countable_days(MONDAY, -1, True)

    def test_calendar_without_countable_days_raises(self):
        every_day = HolidayCalendar(recurring=frozenset(
            ((date(2024, 1, 1) + timedelta(days=i)).month, (date(2024, 1, 1) + timedelta(days=i)).day)
            for i in range(366)
        ))
        with pytest.raises(ProjectionError):
            add_countable_days(MONDAY, 1, False, every_day)


class TestProjectionProperties:
    """Ordering and exclusion guarantees across a range of inputs."""

    HOLIDAYS = HolidayCalendar.from_holidays([
        Holiday("Spring", date(2025, 3, 19)),
        Holiday("Recurring", date(2000, 3, 24), is_recurring=True),
    ])

    @pytest.mark.parametrize("offset", range(7))
    @pytest.mark.parametrize("exclude_weekends", [True, False])
    def test_monotonic_and_never_lands_on_excluded_day(self, offset, exclude_weekends):
        start = MONDAY + timedelta(days=offset)
        previous = start
        for n in range(1, 15):
            reached = add_countable_days(start, n, exclude_weekends, self.HOLIDAYS)
            assert reached > previous
            assert not is_excluded(reached, exclude_weekends, self.HOLIDAYS)
            previous = reached

    def test_min_never_after_max(self):
        for min_days in range(0, 6):
            for max_days in range(min_days, 8):
                assert add_countable_days(MONDAY, min_days, True, self.HOLIDAYS) <= \
                    add_countable_days(MONDAY, max_days, True, self.HOLIDAYS)
