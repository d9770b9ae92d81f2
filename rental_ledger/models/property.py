"""Property listing record."""

from dataclasses import dataclass

from rental_ledger.models.base import Identity
from rental_ledger.models.enums import PropertyState


@dataclass
class PropertyRecord:
    """A listed property and its current booking.

    Listing fields are fixed when the property is listed. Only the ledger
    mutates ``is_active`` and the booking fields; readers receive copies.
    """

    property_id: int
    name: str
    address: str
    description: str
    image_url: str
    price_per_day: int  # smallest currency unit per day
    number_of_rooms: int
    area: int
    owner: Identity
    is_active: bool = True
    guest: Identity | None = None
    booking_starts_at: int = 0
    booking_ends_at: int = 0
    paid_amount: int = 0  # collected by the current booking

    @property
    def is_booked(self) -> bool:
        return self.guest is not None

    @property
    def state(self) -> PropertyState:
        if not self.is_active:
            return PropertyState.UNLISTED
        if self.is_booked:
            return PropertyState.LISTED_BOOKED
        return PropertyState.LISTED_UNBOOKED

    def clear_booking(self) -> None:
        """Reset the booking fields to the unbooked defaults."""
        self.guest = None
        self.booking_starts_at = 0
        self.booking_ends_at = 0
        self.paid_amount = 0
