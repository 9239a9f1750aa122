"""
Which listings are "on" for a given date window.

A run is on when its date range overlaps the window. When the window is a
single day and the listing has a weekly schedule, the run must also have a
matinee or evening performance on that weekday. Schedules that cannot be read
never hide a listing.

The public page runs the same logic in the browser (templates/index.html);
keep the two in step.
"""

import json
from datetime import date, timedelta
from typing import Any, Iterable, Optional

from dateutil.relativedelta import relativedelta

from musicals.models import WEEKDAYS, Musical

DEFAULT_WINDOW_MONTHS = 3
CLOSING_SOON_WEEKS = 4


def _has_performance(value: Any) -> bool:
    # Older rows store booleans instead of "HH:MM" strings
    if isinstance(value, str):
        return len(value) > 0
    return bool(value)


def plays_on(schedule: Optional[str], day: date) -> bool:
    """True if the schedule has a performance on day's weekday, or can't be read."""
    if not schedule:
        return True
    try:
        parsed = json.loads(schedule)
    except ValueError:
        return True
    if not isinstance(parsed, dict):
        return True
    entry = parsed.get(WEEKDAYS[day.weekday()])
    if entry is None or entry is False:
        return False
    if not isinstance(entry, dict):
        return True
    return _has_performance(entry.get("m")) or _has_performance(entry.get("e"))


def is_active(musical: Musical, window_start: date, window_end: date) -> bool:
    end = musical.end_date or date.max
    if not (musical.start_date <= window_end and end >= window_start):
        return False
    if window_start == window_end and musical.schedule:
        return plays_on(musical.schedule, window_start)
    return True


def filter_active(musicals: Iterable[Musical], window_start: date, window_end: date) -> list[Musical]:
    return [m for m in musicals if is_active(m, window_start, window_end)]


def default_window(today: date, months: int = DEFAULT_WINDOW_MONTHS) -> tuple[date, date]:
    """The public page opens on today through N months ahead."""
    return today, today + relativedelta(months=months)


def closing_soon(musicals: Iterable[Musical], today: date, weeks: int = CLOSING_SOON_WEEKS) -> list[Musical]:
    cutoff = today + timedelta(weeks=weeks)
    return [m for m in musicals if m.end_date and m.end_date <= cutoff]


def has_discount_tickets(musical: Musical) -> bool:
    return bool(musical.rush_url or musical.lottery_url)


def status(musical: Musical, today: date) -> str:
    """Admin table status: the run spans today or it doesn't."""
    running = musical.start_date <= today and (musical.end_date is None or musical.end_date >= today)
    return "Active" if running else "Ended"
