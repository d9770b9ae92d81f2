"""Kafka settlement bridge publishing transfers to a settlement topic."""

import json
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from confluent_kafka import KafkaException, Producer

from rental_ledger.config import KafkaConfig
from rental_ledger.exceptions import SettlementFailedError
from rental_ledger.models import Event, Transfer
from rental_ledger.settlement.base import SettlementBridge
from rental_ledger.settlement.serialization import to_dict

logger = logging.getLogger(__name__)

EVENT_SOURCE = "rental-ledger"


@dataclass
class ProducerStats:
    """Track producer delivery statistics."""

    sent: int = 0
    delivered: int = 0
    failed: int = 0

    @property
    def success_rate(self) -> float:
        """Calculate success rate."""
        total = self.delivered + self.failed
        return self.delivered / total if total > 0 else 0.0


class KafkaSettlementBridge(SettlementBridge):
    """Hand transfers to a settlement service through a Kafka topic.

    Each transfer is produced as one :class:`Event` keyed by the recipient
    and flushed before :meth:`transfer` returns, so a delivery error surfaces
    as ``SettlementFailedError`` inside the ledger call that caused it.
    """

    def __init__(self, config: KafkaConfig | str) -> None:
        """Initialize Kafka bridge.

        Parameters
        ----------
        config : KafkaConfig | str
            Producer configuration or bootstrap servers string.
        """
        if isinstance(config, str):
            config = KafkaConfig(bootstrap_servers=config)

        self.config = config
        self.producer = Producer(config.to_dict())
        self.stats = ProducerStats()
        self._last_error: Any = None
        self._discarding = False

    def _delivery_callback(self, err: Any, msg: Any) -> None:
        """Handle delivery reports."""
        if self._discarding:
            return
        if err:
            self.stats.failed += 1
            self._last_error = err
            logger.error("Settlement delivery failed: %s", err)
        else:
            self.stats.delivered += 1
            logger.debug("Delivered to %s[%d]@%d", msg.topic(), msg.partition(), msg.offset())

    def _discard_queued(self) -> None:
        """Drop messages still waiting in the local queue.

        The ledger rolls back a failed transfer, so its event must never reach
        the topic on a later flush. Reports for purged messages are ignored.
        """
        self._discarding = True
        try:
            self.producer.purge(in_queue=True, in_flight=False)
            self.producer.poll(0)
        finally:
            self._discarding = False

    def to_event(self, transfer: Transfer) -> Event:
        """Wrap a transfer in the standard event envelope."""
        return Event(
            event_id=uuid.uuid4().hex,
            event_type=f"transfer.{transfer.kind.value.lower()}",
            event_time=datetime.now(timezone.utc),
            source=EVENT_SOURCE,
            subject=str(transfer.property_id),
            data=to_dict(transfer),
        )

    def transfer(self, transfer: Transfer) -> None:
        event = self.to_event(transfer)
        value = json.dumps(to_dict(event), ensure_ascii=False, default=str).encode("utf-8")
        self._last_error = None

        try:
            self.producer.produce(
                topic=self.config.topic,
                key=transfer.recipient.encode("utf-8"),
                value=value,
                callback=self._delivery_callback,
            )
        except (BufferError, KafkaException) as exc:
            raise SettlementFailedError(f"Could not enqueue settlement event: {exc}") from exc
        self.stats.sent += 1

        remaining = self.producer.flush(self.config.flush_timeout)
        if remaining:
            self._discard_queued()
            self.stats.failed += remaining
            raise SettlementFailedError(
                f"Settlement event {event.event_id} not confirmed within "
                f"{self.config.flush_timeout}s"
            )
        if self._last_error is not None:
            self._discard_queued()
            raise SettlementFailedError(f"Settlement event rejected: {self._last_error}")

    def close(self) -> None:
        """Flush and close the producer."""
        self.producer.flush(self.config.flush_timeout)
        logger.info(
            "Kafka settlement bridge closed: sent=%d, delivered=%d, failed=%d",
            self.stats.sent,
            self.stats.delivered,
            self.stats.failed,
        )
