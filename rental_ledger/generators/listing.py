"""Listing and identity generators for seeding a ledger."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Iterator

from rental_ledger.generators.base import BaseGenerator
from rental_ledger.models import Identity


@dataclass
class ListingDraft:
    """Arguments for one ``list_property`` call."""

    name: str
    address: str
    description: str
    image_url: str
    price_per_day: int
    number_of_rooms: int
    area: int

    def as_kwargs(self) -> dict[str, Any]:
        return asdict(self)


class IdentityGenerator(BaseGenerator):
    """Generate opaque account-style identities (``0x`` + 40 hex digits)."""

    def generate(self) -> Identity:
        return "0x" + self.fake.sha1(raw_output=False)

    def generate_batch(self, count: int) -> list[Identity]:
        """Generate ``count`` distinct identities."""
        identities: list[Identity] = []
        seen: set[Identity] = set()
        while len(identities) < count:
            identity = self.generate()
            if identity not in seen:
                seen.add(identity)
                identities.append(identity)
        return identities


class ListingGenerator(BaseGenerator):
    """Generate synthetic short-term-rental listings."""

    KINDS = ["Apartment", "Loft", "Cottage", "Studio", "Villa", "Cabin"]

    # Daily rate ranges by room count (smallest currency unit)
    PRICE_RANGES = {
        1: (40, 120),
        2: (70, 200),
        3: (110, 320),
        4: (160, 480),
    }

    def generate(self) -> ListingDraft:
        """Generate a single listing.

        Returns
        -------
        ListingDraft
            Generated listing fields.
        """
        rooms = self.random.randint(1, 4)
        low, high = self.PRICE_RANGES[rooms]
        kind = self.random.choice(self.KINDS)
        city = self.fake.city()

        return ListingDraft(
            name=f"{kind} in {city}",
            address=f"{self.fake.street_address()}, {city}",
            description=self.fake.sentence(nb_words=12),
            image_url=self.fake.image_url(),
            price_per_day=self.random.randint(low, high),
            number_of_rooms=rooms,
            area=self.random.randint(20, 45) * rooms,
        )

    def generate_batch(self, count: int) -> Iterator[ListingDraft]:
        """Generate multiple listings.

        Parameters
        ----------
        count : int
            Number of listings to generate.

        Yields
        ------
        ListingDraft
            Generated listings.
        """
        for _ in range(count):
            yield self.generate()
