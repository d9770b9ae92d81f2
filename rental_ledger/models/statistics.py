"""Per-identity lifetime booking statistics."""

from dataclasses import dataclass


@dataclass(frozen=True)
class StatisticsRecord:
    """Lifetime counters for one identity.

    Every field only ever grows; cancellations never decrement them.
    """

    total_earned: int = 0
    total_spent: int = 0
    days_booked_as_owner: int = 0
    days_booked_as_guest: int = 0
    times_booked_as_owner: int = 0
    times_booked_as_guest: int = 0
