"""Rent computation from a booking range and a daily rate."""

from rental_ledger.exceptions import InvalidRangeError

# One day in the unit of booking timestamps (Unix seconds)
DAY_LENGTH = 86_400


def days_between(start: int, end: int, day_length: int = DAY_LENGTH) -> int:
    """Return the number of whole days in ``[start, end)``.

    Parameters
    ----------
    start, end : int
        Range bounds in the same unit as ``day_length``.
    day_length : int
        Length of one day.

    Raises
    ------
    InvalidRangeError
        If the range is reversed or not a whole number of days.
    """
    span = end - start
    if span < 0:
        raise InvalidRangeError(f"Range end {end} is before start {start}")
    days, remainder = divmod(span, day_length)
    if remainder:
        raise InvalidRangeError(
            f"Range {start}..{end} is not a whole number of days of length {day_length}"
        )
    return days


def price_for(
    price_per_day: int,
    start: int,
    end: int,
    day_length: int = DAY_LENGTH,
) -> int:
    """Return the rent owed for ``[start, end)`` at ``price_per_day``."""
    return days_between(start, end, day_length) * price_per_day
