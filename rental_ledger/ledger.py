"""Property ledger: the listing/booking state machine and its entry points."""

import logging
import threading
from contextlib import contextmanager
from dataclasses import fields, replace
from typing import Iterator

from rental_ledger.config import LedgerConfig
from rental_ledger.exceptions import (
    AlreadyBookedError,
    AlreadyUnlistedError,
    InvalidRangeError,
    InvalidRequestError,
    PropertyBookedError,
    PropertyInactiveError,
    PropertyNotBookedError,
    RentalLedgerError,
    SettlementFailedError,
    WrongPaymentError,
    WrongRefundError,
)
from rental_ledger.gate import PermissionGate
from rental_ledger.logging import call_context
from rental_ledger.models import (
    BookingPolicy,
    Identity,
    PropertyRecord,
    RefundPolicy,
    StatisticsRecord,
    Transfer,
    TransferKind,
)
from rental_ledger.pricing import days_between, price_for
from rental_ledger.settlement.base import SettlementBridge
from rental_ledger.settlement.memory import InMemorySettlementBridge
from rental_ledger.statistics import StatisticsAggregator
from rental_ledger.store import PropertyStore

logger = logging.getLogger(__name__)


class RentalLedger:
    """Authoritative ledger of listings, bookings and participant statistics.

    Every entry point takes the authenticated caller as its first argument.
    Mutating calls are serialized by one re-entrant lock and are atomic:
    when the settlement bridge rejects a transfer, the record and the
    statistics touched by the call are put back as they were.

    Parameters
    ----------
    config : LedgerConfig | str
        Ledger configuration, or just the admin identity.
    settlement : SettlementBridge | None
        Bridge that moves payments and refunds. Defaults to an
        :class:`InMemorySettlementBridge`.
    """

    def __init__(
        self,
        config: LedgerConfig | str,
        settlement: SettlementBridge | None = None,
    ) -> None:
        if isinstance(config, str):
            config = LedgerConfig(admin=config)
        config.validate()

        self.config = config
        self.settlement = settlement if settlement is not None else InMemorySettlementBridge()
        self.gate = PermissionGate(config.admin)
        self.store = PropertyStore()
        self.stats = StatisticsAggregator()
        self._lock = threading.RLock()

        if config.booking_policy is BookingPolicy.OPEN:
            logger.warning("Ledger running with OPEN booking policy: whitelist is not enforced")

    # Mutating entry points

    def list_property(
        self,
        caller: Identity,
        name: str,
        address: str,
        description: str,
        image_url: str,
        price_per_day: int,
        number_of_rooms: int,
        area: int,
    ) -> int:
        """List a new property owned by ``caller``.

        Returns
        -------
        int
            The new property id, equal to the counter before the call.
        """
        with self._call("list_property", caller):
            for label, value in (
                ("price_per_day", price_per_day),
                ("number_of_rooms", number_of_rooms),
                ("area", area),
            ):
                _require_non_negative(label, value)

            prop = self.store.add_property(
                owner=caller,
                name=name,
                address=address,
                description=description,
                image_url=image_url,
                price_per_day=price_per_day,
                number_of_rooms=number_of_rooms,
                area=area,
            )

        logger.info("Property %d listed by %s at %d/day", prop.property_id, caller, price_per_day)
        return prop.property_id

    def unlist_property(self, caller: Identity, property_id: int) -> None:
        """Retire an unbooked property. Unlisting cannot be undone."""
        with self._call("unlist_property", caller, property_id):
            record = self.store.get_property(property_id)
            self.gate.require_owner(record, caller)
            if not record.is_active:
                raise AlreadyUnlistedError(f"Property {property_id} is already unlisted")
            if record.is_booked:
                raise PropertyBookedError(f"Property {property_id} is booked by {record.guest}")

            record.is_active = False

        logger.info("Property %d unlisted by %s", property_id, caller)

    def book_property(
        self,
        caller: Identity,
        property_id: int,
        start: int,
        end: int,
        paid_amount: int,
    ) -> None:
        """Book ``[start, end)`` for ``caller``, paying the owner in full.

        Raises
        ------
        NotWhitelistedError
            Caller is not whitelisted and the booking policy is ``WHITELIST``.
        InvalidRequestError
            ``start``, ``end`` or ``paid_amount`` is not a non-negative integer.
        InvalidRangeError
            ``end <= start`` or the range is not a whole number of days.
        PropertyInactiveError
            The property is unlisted.
        AlreadyBookedError
            The property already has a guest.
        WrongPaymentError
            ``paid_amount`` is not the rent for the range.
        SettlementFailedError
            The payment could not be settled; nothing was booked.
        """
        with self._call("book_property", caller, property_id):
            record = self.store.get_property(property_id)
            if self.config.booking_policy is BookingPolicy.WHITELIST:
                self.gate.require_whitelisted(caller)
            for label, value in (("start", start), ("end", end), ("paid_amount", paid_amount)):
                _require_non_negative(label, value)
            if end <= start:
                raise InvalidRangeError(f"Booking end {end} must be after start {start}")
            days = days_between(start, end, self.config.day_length)
            if not record.is_active:
                raise PropertyInactiveError(f"Property {property_id} is not active")
            if record.is_booked:
                raise AlreadyBookedError(f"Property {property_id} is already booked")

            expected = price_for(record.price_per_day, start, end, self.config.day_length)
            if paid_amount != expected:
                raise WrongPaymentError(
                    f"Booking {days} days of property {property_id} costs {expected}, "
                    f"got {paid_amount}"
                )

            with self._atomic(record, record.owner, caller):
                record.guest = caller
                record.booking_starts_at = start
                record.booking_ends_at = end
                record.paid_amount = paid_amount
                self.stats.record_booking(record.owner, caller, days, paid_amount)
                self._settle(
                    Transfer(
                        kind=TransferKind.BOOKING_PAYMENT,
                        property_id=property_id,
                        payer=caller,
                        recipient=record.owner,
                        amount=paid_amount,
                    )
                )

        logger.info(
            "Property %d booked by %s for %d days (%d paid)",
            property_id,
            caller,
            days,
            paid_amount,
        )

    def unbook_property_by_guest(self, caller: Identity, property_id: int) -> None:
        """Cancel the caller's booking. The payment is forfeited."""
        with self._call("unbook_property_by_guest", caller, property_id):
            record = self.store.get_property(property_id)
            self.gate.require_guest(record, caller)
            record.clear_booking()

        logger.info("Property %d released by guest %s", property_id, caller)

    def unbook_property_by_owner(
        self,
        caller: Identity,
        property_id: int,
        refund_amount: int,
    ) -> None:
        """Cancel the current booking and refund ``refund_amount`` to the guest.

        Under ``RefundPolicy.OWNER_TRUSTED`` the refund is forwarded as given.
        Under ``RefundPolicy.STRICT`` it must equal the amount collected at
        booking time.
        """
        with self._call("unbook_property_by_owner", caller, property_id):
            record = self.store.get_property(property_id)
            self.gate.require_owner(record, caller)
            if not record.is_booked:
                raise PropertyNotBookedError(f"Property {property_id} has no guest")
            _require_non_negative("refund_amount", refund_amount)
            if (
                self.config.refund_policy is RefundPolicy.STRICT
                and refund_amount != record.paid_amount
            ):
                raise WrongRefundError(
                    f"Refund for property {property_id} must be {record.paid_amount}, "
                    f"got {refund_amount}"
                )

            guest = record.guest
            with self._atomic(record):
                record.clear_booking()
                self._settle(
                    Transfer(
                        kind=TransferKind.OWNER_REFUND,
                        property_id=property_id,
                        payer=caller,
                        recipient=guest,
                        amount=refund_amount,
                    )
                )

        logger.info(
            "Property %d released by owner %s, refunded %d to %s",
            property_id,
            caller,
            refund_amount,
            guest,
        )

    def add_user_to_whitelist(self, caller: Identity, identity: Identity) -> None:
        """Allow ``identity`` to book. Only the admin may call this."""
        with self._call("add_user_to_whitelist", caller):
            self.gate.require_admin(caller)
            added = self.gate.add(identity)

        if added:
            logger.info("Whitelisted %s", identity)

    # Reads

    def properties(self, property_id: int) -> PropertyRecord:
        """Return a detached copy of the record for ``property_id``."""
        with self._lock:
            return replace(self.store.get_property(property_id))

    def whitelist(self, identity: Identity) -> bool:
        return self.gate.is_whitelisted(identity)

    @property
    def counter(self) -> int:
        """Id the next listing will receive."""
        return self.store.counter

    @property
    def admin(self) -> Identity:
        return self.gate.admin

    def get_property_rent_price(self, property_id: int) -> int:
        """Rent for the property's current booking range (0 when unbooked)."""
        with self._lock:
            record = self.store.get_property(property_id)
            return price_for(
                record.price_per_day,
                record.booking_starts_at,
                record.booking_ends_at,
                self.config.day_length,
            )

    def get_statistic(self, identity: Identity) -> StatisticsRecord:
        with self._lock:
            return self.stats.get_statistic(identity)

    def summary(self) -> dict[str, int]:
        """Return summary counts of the ledger state."""
        with self._lock:
            return {
                **self.store.summary(),
                "whitelisted": len(self.gate.whitelisted()),
                "participants": len(self.stats.participants()),
            }

    # Internals

    @contextmanager
    def _call(
        self,
        operation: str,
        caller: Identity,
        property_id: int | None = None,
    ) -> Iterator[None]:
        """Serialize a mutating call and log its rejection, if any."""
        with self._lock:
            try:
                yield
            except RentalLedgerError as exc:
                logger.warning(
                    "%s rejected: %s: %s",
                    operation,
                    type(exc).__name__,
                    exc,
                    extra=call_context(
                        operation=operation, caller=caller, property_id=property_id
                    ),
                )
                raise

    @contextmanager
    def _atomic(self, record: PropertyRecord, *identities: Identity) -> Iterator[None]:
        """Restore ``record`` and the statistics of ``identities`` on failure."""
        saved_record = replace(record)
        saved_stats = self.stats.snapshot(*identities)
        try:
            yield
        except BaseException:
            for f in fields(record):
                setattr(record, f.name, getattr(saved_record, f.name))
            self.stats.restore(saved_stats)
            logger.debug("Rolled back property %d", record.property_id)
            raise

    def _settle(self, transfer: Transfer) -> None:
        try:
            self.settlement.transfer(transfer)
        except SettlementFailedError:
            logger.error(
                "Settlement of %s for property %d failed",
                transfer.kind.value,
                transfer.property_id,
            )
            raise


def _require_non_negative(label: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidRequestError(f"{label} must be a non-negative integer, got {value!r}")
