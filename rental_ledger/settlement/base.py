"""Settlement bridge interface."""

from abc import ABC, abstractmethod

from rental_ledger.models import Transfer


class SettlementBridge(ABC):
    """Moves value between identities on behalf of the ledger.

    The ledger only decides amounts. A bridge must either complete the
    transfer or raise :class:`~rental_ledger.exceptions.SettlementFailedError`,
    which aborts the ledger call that requested it.
    """

    @abstractmethod
    def transfer(self, transfer: Transfer) -> None:
        """Settle ``transfer`` or raise ``SettlementFailedError``."""

    def close(self) -> None:
        """Release any resources held by the bridge."""
