"""Lifetime booking statistics per identity."""

from dataclasses import dataclass, field, replace

from rental_ledger.models import Identity, StatisticsRecord

# Snapshot of the records for a set of identities; None means "no record yet"
StatisticsSnapshot = dict[Identity, StatisticsRecord | None]


@dataclass
class StatisticsAggregator:
    """Accumulates owner and guest counters for every booking.

    Records are created on the first booking that involves an identity and
    are never reset. Unbooking does not touch them.
    """

    _records: dict[Identity, StatisticsRecord] = field(default_factory=dict)

    def record_booking(
        self,
        owner: Identity,
        guest: Identity,
        days: int,
        amount: int,
    ) -> None:
        """Credit ``owner`` and debit ``guest`` for one booking."""
        owner_stats = self.get_statistic(owner)
        self._records[owner] = replace(
            owner_stats,
            total_earned=owner_stats.total_earned + amount,
            days_booked_as_owner=owner_stats.days_booked_as_owner + days,
            times_booked_as_owner=owner_stats.times_booked_as_owner + 1,
        )
        # Re-read so an owner booking their own listing accumulates both sides
        guest_stats = self.get_statistic(guest)
        self._records[guest] = replace(
            guest_stats,
            total_spent=guest_stats.total_spent + amount,
            days_booked_as_guest=guest_stats.days_booked_as_guest + days,
            times_booked_as_guest=guest_stats.times_booked_as_guest + 1,
        )

    def get_statistic(self, identity: Identity) -> StatisticsRecord:
        """Return the counters for ``identity`` (all zero if never seen)."""
        return self._records.get(identity, StatisticsRecord())

    def participants(self) -> list[Identity]:
        """Identities that took part in at least one booking."""
        return list(self._records)

    def snapshot(self, *identities: Identity) -> StatisticsSnapshot:
        """Capture the current records of ``identities`` for a later restore."""
        return {identity: self._records.get(identity) for identity in identities}

    def restore(self, snapshot: StatisticsSnapshot) -> None:
        """Put back the records captured by :meth:`snapshot`."""
        for identity, record in snapshot.items():
            if record is None:
                self._records.pop(identity, None)
            else:
                self._records[identity] = record
