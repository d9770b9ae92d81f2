"""Settlement bridges that carry out the ledger's transfers."""

from rental_ledger.settlement.base import SettlementBridge
from rental_ledger.settlement.console import ConsoleSettlementBridge
from rental_ledger.settlement.kafka import KafkaSettlementBridge
from rental_ledger.settlement.memory import InMemorySettlementBridge

__all__ = [
    "ConsoleSettlementBridge",
    "InMemorySettlementBridge",
    "KafkaSettlementBridge",
    "SettlementBridge",
]
