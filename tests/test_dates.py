"""Tests for weekday parsing and next-date calculation."""

from datetime import date, timedelta

import pytest

from eventmail.preparation.dates import Weekday, next_weekday_date, parse_weekday
from eventmail.preparation.exceptions import UnparsableWeekdayError


@pytest.mark.parametrize(
    "text,expected",
    [
        ("Monday", Weekday.MONDAY),
        ("mon", Weekday.MONDAY),
        ("Friday", Weekday.FRIDAY),
        ("FRI", Weekday.FRIDAY),
        ("  sunday ", Weekday.SUNDAY),
        ("Wed", Weekday.WEDNESDAY),
    ],
)
def test_parse_weekday(text, expected):
    """Test full names and abbreviations in any case."""
    assert parse_weekday(text) is expected


@pytest.mark.parametrize("text", ["", "Fr", "Fridays", "next friday", "2024-06-07", "Freitag"])
def test_parse_weekday_rejects_other_text(text):
    with pytest.raises(UnparsableWeekdayError) as exc_info:
        parse_weekday(text)

    assert exc_info.value.value == text
    assert "not a weekday" in str(exc_info.value)


def test_weekday_numbering_matches_date_weekday():
    assert Weekday.MONDAY == 0
    assert Weekday.SUNDAY == 6
    assert Weekday(date(2024, 6, 7).weekday()) is Weekday.FRIDAY


def test_next_friday_from_monday(monday):
    assert next_weekday_date(Weekday.FRIDAY, monday) == "2024-06-07"


def test_today_is_included():
    wednesday = date(2024, 6, 5)
    assert next_weekday_date(Weekday.WEDNESDAY, wednesday) == "2024-06-05"


def test_wraps_into_next_week():
    saturday = date(2024, 6, 8)
    assert next_weekday_date(Weekday.FRIDAY, saturday) == "2024-06-14"


def test_wraps_across_month_and_year():
    assert next_weekday_date(Weekday.MONDAY, date(2024, 12, 31)) == "2025-01-06"


@pytest.mark.parametrize("weekday", list(Weekday))
@pytest.mark.parametrize("offset", range(7))
def test_next_occurrence_is_within_a_week(weekday, offset, monday):
    today = monday + timedelta(days=offset)

    result = date.fromisoformat(next_weekday_date(weekday, today))

    assert result.weekday() == weekday
    assert 0 <= (result - today).days < 7


@pytest.mark.parametrize("weekday", list(Weekday))
def test_repeating_from_the_day_after_gives_next_week(weekday, monday):
    """The day after an occurrence leads to the occurrence a week later."""
    first = date.fromisoformat(next_weekday_date(weekday, monday))

    second = date.fromisoformat(next_weekday_date(weekday, first + timedelta(days=1)))

    assert second == first + timedelta(days=7)


def test_defaults_to_local_today():
    today = date.today()
    assert next_weekday_date(Weekday(today.weekday())) == today.isoformat()
