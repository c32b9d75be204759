"""
Excluded-day calendar: weekends and merchant holidays.
"""
from dataclasses import dataclass
from datetime import date
from typing import FrozenSet, Iterable, Optional, Tuple

from .types import Holiday

SATURDAY = 5
SUNDAY = 6


@dataclass(frozen=True)
class HolidayCalendar:
    """holiday dates for one calculation.

    exact dates match only that day; recurring entries are kept as
    (month, day) and match every year.
    """
    exact: FrozenSet[date] = frozenset()
    recurring: FrozenSet[Tuple[int, int]] = frozenset()

    @classmethod
    def from_holidays(cls, holidays: Iterable[Holiday], country_code: Optional[str] = None) -> "HolidayCalendar":
        """build a calendar, keeping unscoped holidays and those scoped to country_code."""
        exact = set()
        recurring = set()
        for holiday in holidays:
            if holiday.country_code and country_code and holiday.country_code.upper() != country_code.upper():
                continue
            if holiday.country_code and not country_code:
                continue
            if holiday.is_recurring:
                recurring.add((holiday.date.month, holiday.date.day))
            else:
                exact.add(holiday.date)
        return cls(exact=frozenset(exact), recurring=frozenset(recurring))

    def __contains__(self, day: date) -> bool:
        return day in self.exact or (day.month, day.day) in self.recurring

    def __bool__(self) -> bool:
        return bool(self.exact or self.recurring)


NO_HOLIDAYS = HolidayCalendar()


def is_weekend(day: date) -> bool:
    return day.weekday() in (SATURDAY, SUNDAY)


def is_excluded(day: date, exclude_weekends: bool, holidays: HolidayCalendar = NO_HOLIDAYS) -> bool:
    """check whether a day is skipped when counting delivery/processing days.

    pass NO_HOLIDAYS when the rule does not exclude holidays.
    """
    if exclude_weekends and is_weekend(day):
        return True
    return day in holidays
