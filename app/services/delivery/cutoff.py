"""
Daily order cutoff evaluation.

Cutoffs are wall-clock times in the rule's own timezone, so the order
timestamp is always converted into that zone before comparing.
"""
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

TimezoneLike = Union[str, tzinfo, None]


def get_timezone(tz: TimezoneLike) -> tzinfo:
    """resolve an IANA name (or tzinfo) to a tzinfo, UTC when unset."""
    if tz is None or tz == "":
        return timezone.utc
    if isinstance(tz, tzinfo):
        return tz
    if tz.upper() == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(tz)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"Unknown timezone: {tz}") from e


def parse_cutoff(value: Union[str, time, None]) -> Optional[time]:
    """parse an HH:MM cutoff string."""
    if value is None or isinstance(value, time):
        return value
    value = value.strip()
    if not value:
        return None
    try:
        hour, minute = map(int, value.split(":"))
        return time(hour, minute)
    except ValueError as e:
        raise ValueError(f"Invalid cutoff time {value!r}. Use HH:MM") from e


def to_local(order_ts: datetime, tz: TimezoneLike) -> datetime:
    """convert to the rule's timezone; naive timestamps are taken as already local."""
    zone = get_timezone(tz)
    if order_ts.tzinfo is None:
        return order_ts.replace(tzinfo=zone)
    return order_ts.astimezone(zone)


def resolve_effective_order_date(
    order_ts: datetime,
    cutoff_time: Optional[time] = None,
    tz: TimezoneLike = "UTC",
) -> date:
    """day zero for projections.

    orders placed strictly after the cutoff count from the next calendar day.
    """
    local = to_local(order_ts, tz)
    if cutoff_time is None:
        return local.date()
    if local.time() > cutoff_time:
        return local.date() + timedelta(days=1)
    return local.date()


def time_until_cutoff(
    order_ts: datetime,
    cutoff_time: Optional[time],
    tz: TimezoneLike = "UTC",
) -> Optional[timedelta]:
    """time left before today's cutoff, None without a cutoff or once it has passed."""
    if cutoff_time is None:
        return None
    local = to_local(order_ts, tz)
    cutoff_at = datetime.combine(local.date(), cutoff_time, local.tzinfo)
    if local > cutoff_at:
        return None
    return cutoff_at - local
