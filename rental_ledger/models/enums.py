"""Enumeration types for the rental ledger."""

from enum import Enum


class BookingPolicy(str, Enum):
    """Who may book a listed property.

    ``WHITELIST`` is the canonical policy. ``OPEN`` reproduces the early
    ungated behaviour and is only used when configured explicitly.
    """

    WHITELIST = "WHITELIST"
    OPEN = "OPEN"


class RefundPolicy(str, Enum):
    """How owner-initiated cancellations check the refund amount."""

    OWNER_TRUSTED = "OWNER_TRUSTED"
    STRICT = "STRICT"


class PropertyState(str, Enum):
    LISTED_UNBOOKED = "LISTED_UNBOOKED"
    LISTED_BOOKED = "LISTED_BOOKED"
    UNLISTED = "UNLISTED"


class TransferKind(str, Enum):
    BOOKING_PAYMENT = "BOOKING_PAYMENT"
    OWNER_REFUND = "OWNER_REFUND"
