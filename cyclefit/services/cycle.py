"""
Service module for menstrual cycle day calculations.

The cycle is normalized to a fixed 28-day length; elapsed time past the
end of a cycle wraps into the next one.

Typical usage:
    last_period = parse_period_date(profile.last_period_date)
    day = calculate_day_of_cycle(last_period)
"""
import math
from datetime import date, datetime, time, timedelta
from typing import Optional, Union

from cyclefit.services.constants import CYCLE_LENGTH, FIRST_CYCLE_DAY
from cyclefit.services.exceptions import InvalidInputError

DateInput = Union[date, datetime, str, None]

def parse_period_date(value: DateInput) -> date:
    """
    Parse a last-period date from a profile field.

    Args:
        value: date, datetime or ISO 8601 string (date or date-time)

    Returns:
        The calendar date of the last period start

    Raises:
        InvalidInputError: If the value is missing or cannot be parsed

    Example:
        >>> parse_period_date("2024-01-05")
        datetime.date(2024, 1, 5)
    """
    if value is None:
        raise InvalidInputError("Last period date is missing")
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = str(value).strip()
    if not text:
        raise InvalidInputError("Last period date is empty")
    if text.isdigit():
        # Bare numbers (20240105, epoch values) are not accepted as dates
        raise InvalidInputError(f"Unparsable last period date: {value!r}")

    try:
        return date.fromisoformat(text)
    except ValueError:
        pass

    try:
        # Accept a trailing Z, which fromisoformat rejects before Python 3.11
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError as e:
        raise InvalidInputError(f"Unparsable last period date: {value!r}") from e

def calculate_elapsed_days(last_period_date: date, now: Union[date, datetime]) -> int:
    """
    Whole days since the last period started, rounded up.

    With a datetime, time elapsed since midnight of the period date counts
    as a started day. Negative values (period date in the future) are
    clamped to 0.
    """
    if isinstance(now, datetime):
        start = datetime.combine(last_period_date, time.min, tzinfo=now.tzinfo)
        elapsed = math.ceil((now - start) / timedelta(days=1))
    else:
        elapsed = (now - last_period_date).days
    return max(elapsed, 0)

def calculate_day_of_cycle(
    last_period_date: DateInput,
    now: Optional[Union[date, datetime]] = None,
    cycle_length: int = CYCLE_LENGTH
) -> int:
    """
    Calculate the current 1-based day of the cycle.

    Args:
        last_period_date: Start date of the most recent period
        now: Date to calculate for, defaults to today
        cycle_length: Normalized cycle length in days

    Returns:
        Day of cycle in the range 1..cycle_length

    Raises:
        InvalidInputError: If last_period_date is missing or unparsable

    Example:
        >>> calculate_day_of_cycle(date(2024, 1, 1), date(2024, 2, 5))
        7
    """
    period_start = parse_period_date(last_period_date)
    if now is None:
        now = date.today()

    elapsed = calculate_elapsed_days(period_start, now)
    if elapsed == 0:
        return FIRST_CYCLE_DAY
    if elapsed > cycle_length:
        return ((elapsed - 1) % cycle_length) + 1
    return elapsed
