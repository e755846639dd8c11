"""Weekday parsing and next-occurrence date calculation."""

from datetime import date, timedelta
from enum import IntEnum
from typing import Optional

from .exceptions import UnparsableWeekdayError


class Weekday(IntEnum):
    """Days of the week numbered like date.weekday(): Monday is 0."""

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6


def parse_weekday(text: str) -> Weekday:
    """Parse a weekday from its English name or three-letter abbreviation.

    Matching is case-insensitive: 'Friday', 'friday', 'FRI' and 'Fri' all
    give Weekday.FRIDAY.

    Raises:
        UnparsableWeekdayError: If text names no weekday
    """
    key = text.strip().lower()
    for day in Weekday:
        full = day.name.lower()
        if key == full or key == full[:3]:
            return day
    raise UnparsableWeekdayError(text)


def next_weekday_date(weekday: Weekday, today: Optional[date] = None) -> str:
    """Return the ISO date (yyyy-mm-dd) of the next occurrence of weekday.

    Today counts as the next occurrence when it already is that weekday.

    Args:
        weekday: Target day of the week
        today: Reference date; defaults to the local calendar date

    Example:
        >>> next_weekday_date(Weekday.FRIDAY, date(2024, 6, 3))
        '2024-06-07'
    """
    if today is None:
        today = date.today()
    days_ahead = (weekday - today.weekday() + 7) % 7
    return (today + timedelta(days=days_ahead)).isoformat()
