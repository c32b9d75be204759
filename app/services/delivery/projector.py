"""
Business-day projection over the excluded-day calendar.
"""
from datetime import date, timedelta

from .calendar import HolidayCalendar, NO_HOLIDAYS, is_excluded
from .errors import ProjectionError

# upper bound on calendar days scanned in one projection; a calendar that
# needs more than this is treated as corrupt
MAX_SCAN_DAYS = 3660


def add_countable_days(
    start: date,
    days: int,
    exclude_weekends: bool,
    holidays: HolidayCalendar = NO_HOLIDAYS,
) -> date:
    """advance `days` countable days from start and return the day reached.

    the start day itself never counts. days == 0 returns start unchanged,
    which is what same-day rules rely on.
    """
    if days < 0:
        raise ValueError("days must be >= 0")
    if days == 0:
        return start

    current = start
    counted = 0
    scanned = 0
    while counted < days:
        current += timedelta(days=1)
        scanned += 1
        if scanned > MAX_SCAN_DAYS:
            raise ProjectionError(f"no {days} countable days within {MAX_SCAN_DAYS} days of {start.isoformat()}")
        if not is_excluded(current, exclude_weekends, holidays):
            counted += 1
    return current
