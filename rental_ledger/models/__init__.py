"""Domain models for the rental ledger."""

from rental_ledger.models.base import Event, Identity
from rental_ledger.models.enums import (
    BookingPolicy,
    PropertyState,
    RefundPolicy,
    TransferKind,
)
from rental_ledger.models.property import PropertyRecord
from rental_ledger.models.statistics import StatisticsRecord
from rental_ledger.models.transfer import Transfer

__all__ = [
    "BookingPolicy",
    "Event",
    "Identity",
    "PropertyRecord",
    "PropertyState",
    "RefundPolicy",
    "StatisticsRecord",
    "Transfer",
    "TransferKind",
]
