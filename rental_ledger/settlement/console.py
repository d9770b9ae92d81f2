"""Console settlement bridge for debugging and development."""

import json

from rental_ledger.models import Transfer
from rental_ledger.settlement.base import SettlementBridge
from rental_ledger.settlement.serialization import to_dict


class ConsoleSettlementBridge(SettlementBridge):
    """Print each transfer to stdout and treat it as settled."""

    def __init__(self, pretty: bool = False) -> None:
        """Initialize console bridge.

        Parameters
        ----------
        pretty : bool
            Pretty-print JSON output.
        """
        self.pretty = pretty
        self._counts: dict[str, int] = {}
        self._totals: dict[str, int] = {}

    def transfer(self, transfer: Transfer) -> None:
        data = to_dict(transfer)
        if self.pretty:
            print(json.dumps(data, indent=2, ensure_ascii=False))
        else:
            print(json.dumps(data, ensure_ascii=False))

        kind = transfer.kind.value
        self._counts[kind] = self._counts.get(kind, 0) + 1
        self._totals[kind] = self._totals.get(kind, 0) + transfer.amount

    def close(self) -> None:
        """Print summary and close."""
        print(f"\n{'='*60}")
        print("Console Settlement Summary")
        print("=" * 60)
        for kind, count in self._counts.items():
            print(f"  {kind}: {count} transfers, {self._totals[kind]} total")
