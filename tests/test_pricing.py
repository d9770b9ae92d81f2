"""Tests for rent pricing."""

import pytest

from rental_ledger.exceptions import InvalidRangeError
from rental_ledger.pricing import DAY_LENGTH, days_between, price_for


class TestDaysBetween:
    """Tests for days_between."""

    def test_whole_days(self) -> None:
        assert days_between(0, 3 * DAY_LENGTH) == 3

    def test_empty_range(self) -> None:
        assert days_between(DAY_LENGTH, DAY_LENGTH) == 0

    def test_reversed_range(self) -> None:
        with pytest.raises(InvalidRangeError):
            days_between(2 * DAY_LENGTH, DAY_LENGTH)

    def test_partial_day(self) -> None:
        with pytest.raises(InvalidRangeError, match="whole number of days"):
            days_between(0, DAY_LENGTH + 1)

    def test_custom_day_length(self) -> None:
        """Test millisecond timestamps with a matching day length."""
        assert days_between(86_400_000, 86_400_000 * 2, day_length=86_400_000) == 1


class TestPriceFor:
    """Tests for price_for."""

    def test_price(self) -> None:
        assert price_for(10, 0, 2 * DAY_LENGTH) == 20

    def test_zero_range_is_free(self) -> None:
        assert price_for(10, 0, 0) == 0

    def test_zero_rate(self) -> None:
        assert price_for(0, 0, 5 * DAY_LENGTH) == 0

    @pytest.mark.parametrize("rate", [1, 10, 250])
    @pytest.mark.parametrize("days", [1, 3, 30])
    def test_linear_in_range(self, rate: int, days: int) -> None:
        """Test doubling the range doubles the price."""
        start = 20_000 * DAY_LENGTH
        single = price_for(rate, start, start + days * DAY_LENGTH)
        double = price_for(rate, start, start + 2 * days * DAY_LENGTH)

        assert double == 2 * single

    def test_independent_of_start(self) -> None:
        """Test only the span matters, not where it starts."""
        assert price_for(7, 0, 4 * DAY_LENGTH) == price_for(
            7, 100 * DAY_LENGTH, 104 * DAY_LENGTH
        )
