"""Settlement transfer request."""

from dataclasses import dataclass

from rental_ledger.models.base import Identity
from rental_ledger.models.enums import TransferKind


@dataclass(frozen=True)
class Transfer:
    """Value the ledger asks the settlement layer to move.

    ``payer`` is the identity whose call funded the transfer: the guest for
    a booking payment, the owner for a refund.
    """

    kind: TransferKind
    property_id: int
    payer: Identity
    recipient: Identity
    amount: int
