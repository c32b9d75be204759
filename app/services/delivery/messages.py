"""
ETA message rendering.

Templates use `{token}` placeholders. Only tokens present in the variables
mapping are replaced; anything else (typos, tokens from newer templates)
is left as written.
"""
import re
from datetime import date, time, timedelta
from typing import Mapping, Optional

from .types import DateFormat

PLACEHOLDER = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}")

# shown when the rule leaves the corresponding field unset
DEFAULT_CUTOFF_LABEL = "5:00 PM"
DEFAULT_COUNTDOWN = "24 hours"
DEFAULT_SHIPPING_METHOD = "Express Shipping"
DEFAULT_CARRIER = "Standard Shipping"
PASSED_CUTOFF_COUNTDOWN = "tomorrow"


def format_date(day: date, date_format: DateFormat = DateFormat.SHORT) -> str:
    """short human-readable date, e.g. 'Mar 14' (or 'Mar 14, 2025' for the long format)."""
    text = f"{day:%b} {day.day}"
    if date_format == DateFormat.LONG:
        text = f"{text}, {day.year}"
    return text


def format_cutoff(cutoff: time) -> str:
    """12-hour clock label, e.g. '2:00 PM'."""
    hour = cutoff.hour % 12 or 12
    suffix = "AM" if cutoff.hour < 12 else "PM"
    return f"{hour}:{cutoff.minute:02d} {suffix}"


def format_countdown(remaining: Optional[timedelta]) -> str:
    if remaining is None:
        return PASSED_CUTOFF_COUNTDOWN
    total_minutes = int(remaining.total_seconds() // 60)
    hours, minutes = divmod(total_minutes, 60)
    return f"{hours}h {minutes}m"


def default_message(min_days: int, max_days: int) -> str:
    if min_days == max_days:
        unit = "days" if min_days > 1 else "day"
        return f"Delivery in {min_days} business {unit}"
    return f"Delivery in {min_days}-{max_days} business days"


def render(template: str, variables: Mapping[str, object]) -> str:
    """substitute known placeholders; unknown ones stay verbatim."""
    def _sub(match: re.Match) -> str:
        name = match.group(1)
        if name not in variables or variables[name] is None:
            return match.group(0)
        return str(variables[name])

    return PLACEHOLDER.sub(_sub, template)


def render_or_default(template: Optional[str], variables: Mapping[str, object], min_days: int, max_days: int) -> str:
    """render the template, or the default sentence when there is none."""
    if template is None or not template.strip():
        return default_message(min_days, max_days)
    return render(template, variables)
