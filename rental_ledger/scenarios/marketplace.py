"""Marketplace scenario: hosts list, whitelisted guests book and cancel."""

import logging
import random
from dataclasses import replace
from typing import Any

from rental_ledger.config import LedgerConfig, ScenarioConfig
from rental_ledger.generators import IdentityGenerator, ListingGenerator
from rental_ledger.ledger import RentalLedger
from rental_ledger.models import BookingPolicy, Identity
from rental_ledger.pricing import price_for
from rental_ledger.settlement.base import SettlementBridge
from rental_ledger.settlement.memory import InMemorySettlementBridge

logger = logging.getLogger(__name__)

# 2026-01-01T00:00:00Z, a whole number of days since the epoch
BOOKING_EPOCH = 1_767_225_600


class MarketplaceScenario:
    """Drive a ledger through a seeded round of marketplace activity.

    This scenario creates:
    - An admin, a set of hosts and a set of guests
    - Listings for every host
    - Whitelist entries for every guest, unless the ledger runs the
      OPEN booking policy
    - Bookings on a share of the listings, paid in full
    - Cancellations on a share of the bookings, split between guests
      (forfeit) and owners (full refund)
    """

    def __init__(
        self,
        num_hosts: int = 5,
        num_guests: int = 10,
        listings_per_host: int = 2,
        booking_rate: float = 0.6,
        cancellation_rate: float = 0.2,
        seed: int | None = None,
        settlement: SettlementBridge | None = None,
        ledger_config: LedgerConfig | None = None,
    ) -> None:
        """Initialize marketplace scenario.

        Parameters
        ----------
        num_hosts : int
            Number of identities that list properties.
        num_guests : int
            Number of identities that book.
        listings_per_host : int
            Listings created by each host.
        booking_rate : float
            Share of listings that get booked (0.0 to 1.0).
        cancellation_rate : float
            Share of bookings that are cancelled afterwards (0.0 to 1.0).
        seed : int | None
            Random seed for reproducibility.
        settlement : SettlementBridge | None
            Bridge for the ledger; in-memory when omitted.
        ledger_config : LedgerConfig | None
            Ledger policies. A generated admin is used when it names none.
        """
        self.num_hosts = num_hosts
        self.num_guests = num_guests
        self.listings_per_host = listings_per_host
        self.booking_rate = booking_rate
        self.cancellation_rate = cancellation_rate
        self.seed = seed

        self._random = random.Random(seed)
        self._identity_gen = IdentityGenerator(seed=seed)
        self._listing_gen = ListingGenerator(seed=seed)

        ledger_config = ledger_config if ledger_config is not None else LedgerConfig()
        if not ledger_config.admin:
            ledger_config = replace(ledger_config, admin=self._identity_gen.generate())
        self.admin: Identity = ledger_config.admin
        self.settlement = settlement if settlement is not None else InMemorySettlementBridge()
        self.ledger = RentalLedger(ledger_config, settlement=self.settlement)

        self.hosts: list[Identity] = []
        self.guests: list[Identity] = []
        self._bookings = 0
        self._guest_cancellations = 0
        self._owner_cancellations = 0

    @classmethod
    def from_config(
        cls,
        config: ScenarioConfig,
        seed: int | None = None,
        settlement: SettlementBridge | None = None,
        ledger_config: LedgerConfig | None = None,
    ) -> "MarketplaceScenario":
        return cls(
            num_hosts=config.num_hosts,
            num_guests=config.num_guests,
            listings_per_host=config.listings_per_host,
            booking_rate=config.booking_rate,
            cancellation_rate=config.cancellation_rate,
            seed=seed,
            settlement=settlement,
            ledger_config=ledger_config,
        )

    def generate(self) -> RentalLedger:
        """Run the scenario.

        Returns
        -------
        RentalLedger
            Ledger holding the resulting state.
        """
        logger.info(
            "Starting marketplace scenario: %d hosts, %d guests, %d listings each",
            self.num_hosts,
            self.num_guests,
            self.listings_per_host,
        )

        identities = self._identity_gen.generate_batch(self.num_hosts + self.num_guests + 1)
        # One spare in case the admin is drawn again
        identities = [i for i in identities if i != self.admin]
        self.hosts = identities[: self.num_hosts]
        self.guests = identities[self.num_hosts : self.num_hosts + self.num_guests]

        if self.ledger.config.booking_policy is BookingPolicy.WHITELIST:
            for guest in self.guests:
                self.ledger.add_user_to_whitelist(self.admin, guest)

        property_ids = self._list_properties()
        if self.guests:
            self._book_properties(property_ids)

        logger.info("Marketplace scenario complete: %s", self.get_summary())
        return self.ledger

    def _list_properties(self) -> list[int]:
        property_ids = []
        for host in self.hosts:
            for draft in self._listing_gen.generate_batch(self.listings_per_host):
                property_ids.append(self.ledger.list_property(host, **draft.as_kwargs()))
        return property_ids

    def _book_properties(self, property_ids: list[int]) -> None:
        day = self.ledger.config.day_length
        for property_id in property_ids:
            if self._random.random() >= self.booking_rate:
                continue

            guest = self._random.choice(self.guests)
            start = BOOKING_EPOCH + self._random.randint(0, 90) * day
            end = start + self._random.randint(1, 14) * day
            record = self.ledger.properties(property_id)
            amount = price_for(record.price_per_day, start, end, day)

            self.ledger.book_property(guest, property_id, start, end, amount)
            self._bookings += 1

            if self._random.random() < self.cancellation_rate:
                if self._random.random() < 0.5:
                    self.ledger.unbook_property_by_guest(guest, property_id)
                    self._guest_cancellations += 1
                else:
                    self.ledger.unbook_property_by_owner(record.owner, property_id, amount)
                    self._owner_cancellations += 1

    def get_summary(self) -> dict[str, Any]:
        """Get summary statistics for the run."""
        earned = {
            host: self.ledger.get_statistic(host).total_earned for host in self.hosts
        }
        return {
            **self.ledger.summary(),
            "bookings": self._bookings,
            "guest_cancellations": self._guest_cancellations,
            "owner_cancellations": self._owner_cancellations,
            "total_earned": sum(earned.values()),
            "top_host": max(earned, key=earned.get) if earned else None,
        }
