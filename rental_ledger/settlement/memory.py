"""In-memory settlement bridge with balances and a transfer journal."""

import logging
from dataclasses import dataclass, field

from rental_ledger.exceptions import SettlementFailedError
from rental_ledger.models import Identity, Transfer
from rental_ledger.settlement.base import SettlementBridge

logger = logging.getLogger(__name__)


@dataclass
class InMemorySettlementBridge(SettlementBridge):
    """Settle transfers by adjusting in-memory balances.

    Balances can go negative: the payer is whoever made the ledger call and
    funding is the caller's concern, not the bridge's.
    """

    balances: dict[Identity, int] = field(default_factory=dict)
    journal: list[Transfer] = field(default_factory=list)
    _failures_pending: int = 0

    def fail_next(self, count: int = 1) -> None:
        """Make the next ``count`` transfers fail."""
        self._failures_pending += count

    def transfer(self, transfer: Transfer) -> None:
        if self._failures_pending:
            self._failures_pending -= 1
            raise SettlementFailedError(
                f"Transfer of {transfer.amount} to {transfer.recipient} was rejected"
            )

        self.balances[transfer.payer] = self.balances.get(transfer.payer, 0) - transfer.amount
        self.balances[transfer.recipient] = (
            self.balances.get(transfer.recipient, 0) + transfer.amount
        )
        self.journal.append(transfer)
        logger.debug(
            "Settled %s: %s -> %s (%d)",
            transfer.kind.value,
            transfer.payer,
            transfer.recipient,
            transfer.amount,
        )

    def balance_of(self, identity: Identity) -> int:
        """Net amount received by ``identity`` so far."""
        return self.balances.get(identity, 0)

    def transfers_to(self, identity: Identity) -> list[Transfer]:
        """Get all settled transfers received by ``identity``."""
        return [t for t in self.journal if t.recipient == identity]
