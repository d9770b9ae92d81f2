"""Tests for StatisticsAggregator."""

import pytest

from rental_ledger.models import StatisticsRecord
from rental_ledger.statistics import StatisticsAggregator


@pytest.fixture
def stats() -> StatisticsAggregator:
    return StatisticsAggregator()


class TestRecordBooking:
    """Tests for record_booking."""

    def test_directions(self, stats: StatisticsAggregator, owner: str, guest: str) -> None:
        """Test the owner earns and the guest spends."""
        stats.record_booking(owner, guest, days=2, amount=20)

        assert stats.get_statistic(owner) == StatisticsRecord(
            total_earned=20, days_booked_as_owner=2, times_booked_as_owner=1
        )
        assert stats.get_statistic(guest) == StatisticsRecord(
            total_spent=20, days_booked_as_guest=2, times_booked_as_guest=1
        )

    def test_accumulates(self, stats: StatisticsAggregator, owner: str, guest: str) -> None:
        """Test repeated bookings add up."""
        stats.record_booking(owner, guest, days=2, amount=20)
        stats.record_booking(owner, guest, days=5, amount=50)

        assert stats.get_statistic(owner).total_earned == 70
        assert stats.get_statistic(owner).times_booked_as_owner == 2
        assert stats.get_statistic(guest).days_booked_as_guest == 7

    def test_same_identity_both_sides(self, stats: StatisticsAggregator, owner: str) -> None:
        """Test a self-booking updates both halves of one record."""
        stats.record_booking(owner, owner, days=1, amount=10)

        record = stats.get_statistic(owner)
        assert record.total_earned == 10
        assert record.total_spent == 10
        assert record.times_booked_as_owner == 1
        assert record.times_booked_as_guest == 1


class TestGetStatistic:
    """Tests for get_statistic."""

    def test_unknown_identity(self, stats: StatisticsAggregator, stranger: str) -> None:
        assert stats.get_statistic(stranger) == StatisticsRecord()
        assert stats.participants() == []

    def test_records_are_read_only(
        self, stats: StatisticsAggregator, owner: str, guest: str
    ) -> None:
        stats.record_booking(owner, guest, days=1, amount=10)

        with pytest.raises(AttributeError):
            stats.get_statistic(owner).total_earned = 0  # type: ignore[misc]


class TestSnapshot:
    """Tests for snapshot/restore."""

    def test_restore_removes_new_records(
        self, stats: StatisticsAggregator, owner: str, guest: str
    ) -> None:
        saved = stats.snapshot(owner, guest)
        stats.record_booking(owner, guest, days=1, amount=10)

        stats.restore(saved)

        assert stats.participants() == []

    def test_restore_previous_values(
        self, stats: StatisticsAggregator, owner: str, guest: str
    ) -> None:
        stats.record_booking(owner, guest, days=1, amount=10)
        saved = stats.snapshot(owner, guest)
        stats.record_booking(owner, guest, days=3, amount=30)

        stats.restore(saved)

        assert stats.get_statistic(owner).total_earned == 10
        assert stats.get_statistic(guest).days_booked_as_guest == 1
