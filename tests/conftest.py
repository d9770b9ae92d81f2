"""Pytest configuration and fixtures."""

import pytest

from rental_ledger.config import LedgerConfig
from rental_ledger.ledger import RentalLedger
from rental_ledger.pricing import DAY_LENGTH
from rental_ledger.settlement.memory import InMemorySettlementBridge


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def admin() -> str:
    """Ledger administrator."""
    return "0xadmin"


@pytest.fixture
def owner() -> str:
    """Identity that lists properties."""
    return "0xowner"


@pytest.fixture
def guest() -> str:
    """Whitelisted identity that books properties."""
    return "0xguest"


@pytest.fixture
def stranger() -> str:
    """Identity with no role in the ledger."""
    return "0xstranger"


@pytest.fixture
def bridge() -> InMemorySettlementBridge:
    """Fresh in-memory settlement bridge."""
    return InMemorySettlementBridge()


@pytest.fixture
def ledger(admin: str, guest: str, bridge: InMemorySettlementBridge) -> RentalLedger:
    """Ledger with ``guest`` already whitelisted."""
    ledger = RentalLedger(LedgerConfig(admin=admin), settlement=bridge)
    ledger.add_user_to_whitelist(admin, guest)
    return ledger


@pytest.fixture
def listing() -> dict:
    """Listing fields for a 10-per-day property."""
    return {
        "name": "home",
        "address": "home address",
        "description": "some description",
        "image_url": "imgUrl",
        "price_per_day": 10,
        "number_of_rooms": 2,
        "area": 68,
    }


@pytest.fixture
def property_id(ledger: RentalLedger, owner: str, listing: dict) -> int:
    """Id of a property listed by ``owner``."""
    return ledger.list_property(owner, **listing)


@pytest.fixture
def day_one() -> int:
    """2026-01-01T00:00:00Z as Unix seconds, a whole number of days."""
    return 20_454 * DAY_LENGTH
