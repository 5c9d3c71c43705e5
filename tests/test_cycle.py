"""
Tests for cycle day calculation.
"""
import pytest
from datetime import date, datetime, timedelta, timezone

from cyclefit.services.cycle import calculate_day_of_cycle, calculate_elapsed_days, parse_period_date
from cyclefit.services.exceptions import InvalidInputError

LAST_PERIOD = date(2024, 1, 1)

def day_for(elapsed: int) -> int:
    return calculate_day_of_cycle(LAST_PERIOD, LAST_PERIOD + timedelta(days=elapsed))

def test_same_day_log_is_day_one():
    assert day_for(0) == 1

@pytest.mark.parametrize("elapsed", [1, 3, 5, 6, 14, 15, 17, 18, 20, 27, 28])
def test_days_within_first_cycle(elapsed):
    assert day_for(elapsed) == elapsed

@pytest.mark.parametrize("elapsed,expected", [
    (29, 1),
    (35, 7),
    (56, 28),
    (57, 1),
    (100, 16),
])
def test_wraparound(elapsed, expected):
    assert day_for(elapsed) == expected
    assert day_for(elapsed) == ((elapsed - 1) % 28) + 1

def test_thirty_five_days_is_day_seven():
    """The documented wraparound example."""
    assert calculate_day_of_cycle("2024-01-01", date(2024, 2, 5)) == 7

def test_future_period_date_is_clamped_to_day_one():
    assert calculate_day_of_cycle(date(2024, 1, 10), date(2024, 1, 1)) == 1
    assert calculate_elapsed_days(date(2024, 1, 10), date(2024, 1, 1)) == 0

def test_partial_day_counts_as_started_day():
    """A datetime 'now' rounds elapsed time up to whole days."""
    now = datetime(2024, 1, 4, 10, 30)
    assert calculate_elapsed_days(LAST_PERIOD, now) == 4
    assert calculate_day_of_cycle(LAST_PERIOD, now) == 4

def test_midnight_datetime_matches_date():
    now = datetime(2024, 1, 4, 0, 0, tzinfo=timezone.utc)
    assert calculate_day_of_cycle(LAST_PERIOD, now) == 3

def test_custom_cycle_length():
    assert calculate_day_of_cycle(LAST_PERIOD, LAST_PERIOD + timedelta(days=31), cycle_length=30) == 1

def test_defaults_to_today():
    today = date.today()
    assert calculate_day_of_cycle(today - timedelta(days=2)) == 2

@pytest.mark.parametrize("value,expected", [
    ("2024-01-05", date(2024, 1, 5)),
    (" 2024-01-05 ", date(2024, 1, 5)),
    ("2024-01-05T13:45:00", date(2024, 1, 5)),
    ("2024-01-05T00:00:00.000Z", date(2024, 1, 5)),
    (date(2024, 1, 5), date(2024, 1, 5)),
    (datetime(2024, 1, 5, 8, 0), date(2024, 1, 5)),
])
def test_parse_period_date(value, expected):
    assert parse_period_date(value) == expected

@pytest.mark.parametrize("value", [None, "", "   ", "not-a-date", "2024-13-01", "05/01/2024", "20240105", 1704412800])
def test_parse_period_date_rejects_invalid(value):
    with pytest.raises(InvalidInputError):
        parse_period_date(value)

def test_calculate_day_of_cycle_rejects_missing_date():
    with pytest.raises(InvalidInputError, match="missing"):
        calculate_day_of_cycle(None, LAST_PERIOD)
