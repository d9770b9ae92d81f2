"""Property-rental ledger: listings, bookings, pricing and lifetime statistics."""

from rental_ledger.ledger import RentalLedger

__version__ = "0.1.0"

__all__ = ["RentalLedger", "__version__"]
