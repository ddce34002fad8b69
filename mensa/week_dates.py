# =============================================================================
# mensa/week_dates.py  —  ISO Week-Date Arithmetic
# =============================================================================
#
# The eat-api stores menus per ISO week: /{canteen}/{year}/{week}.json.
# Turning "2024-12-31" into (2025, 1) is the one piece of real logic in this
# project, and it is easy to get wrong around New Year:
#
#   2024-12-31 (Tuesday)   → ISO week 1 of 2025
#   2027-01-01 (Friday)    → ISO week 53 of 2026
#
# THE RULE:
#   Weeks start on Monday.  Week 1 is the week holding the year's first
#   Thursday (equivalently, the week holding January 4th).  A date belongs to
#   the ISO year of the Thursday in its own week.
#
# DATE SEMANTICS:
#   Everything here works on calendar dates (datetime.date).  A datetime is
#   truncated to its date before any arithmetic, so time of day and time zone
#   never influence the week.  "Today" is the only place a clock is read, and
#   both the clock and the zone can be injected (see today()).
# =============================================================================

from datetime import date, datetime, timedelta, tzinfo
from typing import NamedTuple, Optional, Union

DateLike = Union[str, date, datetime]

DATE_FORMAT = "%Y-%m-%d"


class WeekRef(NamedTuple):
    """An ISO week, as used in eat-api paths."""

    year: int
    week: int


def to_date(value: DateLike) -> date:
    """Normalize a "YYYY-MM-DD" string, date, or datetime to a date.

    Raises:
        ValueError: if a string is not a valid "YYYY-MM-DD" date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.strptime(value, DATE_FORMAT).date()


def _thursday_of_week(day: date) -> date:
    # weekday(): Monday = 0 ... Sunday = 6
    return day - timedelta(days=day.weekday()) + timedelta(days=3)


def get_week_year(value: DateLike) -> int:
    """Return the ISO week-year of a date (may differ from its calendar year)."""
    return _thursday_of_week(to_date(value)).year


def get_week_number(value: DateLike) -> int:
    """Return the ISO week number (1-53) of a date."""
    thursday = _thursday_of_week(to_date(value))
    first_thursday = _thursday_of_week(date(thursday.year, 1, 4))
    # Both days are Thursdays, so the difference is a whole number of weeks.
    return 1 + round((thursday - first_thursday).days / 7)


def date_to_api_path(value: DateLike) -> WeekRef:
    """Return the (year, week) pair used to build the eat-api menu path."""
    return WeekRef(year=get_week_year(value), week=get_week_number(value))


def format_week(ref: WeekRef) -> str:
    return f"{ref.year}-{ref.week:02d}"


def date_to_week_format(value: DateLike) -> str:
    """Return the week as "YYYY-WW", e.g. "2025-24" for 2025-06-15."""
    return format_week(date_to_api_path(value))


# -----------------------------------------------------------------------------
# "Current" helpers
# -----------------------------------------------------------------------------
# `now` lets callers (and tests) pin the clock; `tz` picks the zone whose
# calendar date counts as "today".  With neither, the process-local clock
# is used.
# -----------------------------------------------------------------------------
def today(now: Optional[datetime] = None, tz: Optional[tzinfo] = None) -> date:
    """Return the reference calendar date."""
    if now is None:
        now = datetime.now(tz)
    elif tz is not None and now.tzinfo is not None:
        now = now.astimezone(tz)
    return now.date()


def get_current_week_number(now: Optional[datetime] = None, tz: Optional[tzinfo] = None) -> int:
    return get_week_number(today(now, tz))


def get_current_week(now: Optional[datetime] = None, tz: Optional[tzinfo] = None) -> str:
    """Return the current week as "YYYY-WW"."""
    return date_to_week_format(today(now, tz))


def is_current_week(
    value: DateLike,
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
) -> bool:
    """True when ``value`` falls in the same ISO week (and week-year) as today.

    Compares the formatted "YYYY-WW" strings, so the same week number in a
    different year never matches.
    """
    return get_current_week(now, tz) == date_to_week_format(value)
