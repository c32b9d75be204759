"""
Tests for the excluded-day calendar.

Run with: pytest tests/test_calendar.py -v
"""
from datetime import date

from app.services.delivery.calendar import HolidayCalendar, NO_HOLIDAYS, is_excluded
from app.services.delivery.types import Holiday


# =============================================================================
# TESTS: WEEKENDS
# =============================================================================

class TestWeekends:
    """Weekend exclusion is controlled by the rule flag."""

    def test_saturday_and_sunday_excluded_when_enabled(self):
        assert is_excluded(date(2025, 3, 15), True, NO_HOLIDAYS)
        assert is_excluded(date(2025, 3, 16), True, NO_HOLIDAYS)

    def test_weekdays_not_excluded(self):
        for day in range(10, 15):  # Mon..Fri
            assert not is_excluded(date(2025, 3, day), True, NO_HOLIDAYS)

    def test_weekend_counts_when_disabled(self):
        assert not is_excluded(date(2025, 3, 15), False, NO_HOLIDAYS)


# =============================================================================
# TESTS: HOLIDAYS
# =============================================================================

class TestHolidays:
    """Exact and recurring holidays."""

    def test_exact_holiday_matches_only_its_year(self):
        calendar = HolidayCalendar.from_holidays([Holiday("Launch day", date(2025, 3, 12))])

        assert is_excluded(date(2025, 3, 12), False, calendar)
        assert not is_excluded(date(2026, 3, 12), False, calendar)

    def test_recurring_holiday_matches_every_year(self):
        calendar = HolidayCalendar.from_holidays([Holiday("Christmas", date(2020, 12, 25), is_recurring=True)])

        assert is_excluded(date(2025, 12, 25), False, calendar)
        assert is_excluded(date(2031, 12, 25), False, calendar)
        assert not is_excluded(date(2025, 12, 24), False, calendar)

    def test_country_scoped_holiday_only_for_that_country(self):
        holidays = [
            Holiday("German Unity Day", date(2025, 10, 3), is_recurring=True, country_code="DE"),
            Holiday("Company day", date(2025, 10, 6)),
        ]

        german = HolidayCalendar.from_holidays(holidays, "DE")
        american = HolidayCalendar.from_holidays(holidays, "US")

        assert date(2025, 10, 3) in german
        assert date(2025, 10, 3) not in american
        # unscoped holidays apply everywhere
        assert date(2025, 10, 6) in german
        assert date(2025, 10, 6) in american

    def test_empty_calendar_is_falsy(self):
        assert not NO_HOLIDAYS
        assert HolidayCalendar.from_holidays([Holiday("x", date(2025, 1, 1))])
