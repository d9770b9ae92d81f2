"""Configuration management for rental-ledger."""

from dataclasses import dataclass, field
from typing import Any

from rental_ledger.exceptions import ConfigurationError
from rental_ledger.models.enums import BookingPolicy, RefundPolicy
from rental_ledger.pricing import DAY_LENGTH


@dataclass
class LedgerConfig:
    """Ledger policy configuration.

    ``admin`` is fixed for the lifetime of a ledger built from this config.
    """

    admin: str | None = None
    booking_policy: BookingPolicy = BookingPolicy.WHITELIST
    refund_policy: RefundPolicy = RefundPolicy.OWNER_TRUSTED
    day_length: int = DAY_LENGTH

    def validate(self) -> None:
        """Check the configuration can build a ledger.

        Raises
        ------
        ConfigurationError
            If the admin is missing or the day length is not positive.
        """
        if not self.admin:
            raise ConfigurationError("Ledger admin identity is required")
        if self.day_length <= 0:
            raise ConfigurationError(f"Day length must be positive, got {self.day_length}")
        if not isinstance(self.booking_policy, BookingPolicy):
            raise ConfigurationError(f"Unknown booking policy {self.booking_policy!r}")
        if not isinstance(self.refund_policy, RefundPolicy):
            raise ConfigurationError(f"Unknown refund policy {self.refund_policy!r}")


@dataclass
class KafkaConfig:
    """Kafka producer configuration for the settlement topic."""

    bootstrap_servers: str = "localhost:9092"
    acks: str = "all"
    linger_ms: int = 0
    compression: str = "snappy"
    retries: int = 3
    topic: str = "rental.settlements"
    flush_timeout: float = 10.0

    def to_dict(self) -> dict[str, Any]:
        """Convert to confluent-kafka config dict."""
        return {
            "bootstrap.servers": self.bootstrap_servers,
            "acks": self.acks,
            "linger.ms": self.linger_ms,
            "compression.type": self.compression,
            "retries": self.retries,
        }


@dataclass
class ScenarioConfig:
    """Configuration for a marketplace simulation run."""

    num_hosts: int = 5
    num_guests: int = 10
    listings_per_host: int = 2
    booking_rate: float = 0.6
    cancellation_rate: float = 0.2


@dataclass
class RentalLedgerConfig:
    """Main configuration for rental-ledger."""

    ledger: LedgerConfig = field(default_factory=LedgerConfig)
    kafka: KafkaConfig = field(default_factory=KafkaConfig)
    scenario: ScenarioConfig | None = None
    seed: int | None = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "RentalLedgerConfig":
        """Create config from environment variables."""
        import os

        try:
            ledger = LedgerConfig(
                admin=os.getenv("LEDGER_ADMIN"),
                booking_policy=BookingPolicy(os.getenv("BOOKING_POLICY", "WHITELIST").upper()),
                refund_policy=RefundPolicy(os.getenv("REFUND_POLICY", "OWNER_TRUSTED").upper()),
                day_length=int(os.getenv("DAY_LENGTH", str(DAY_LENGTH))),
            )
        except ValueError as exc:
            raise ConfigurationError(f"Invalid ledger configuration: {exc}") from exc

        kafka = KafkaConfig(
            bootstrap_servers=os.getenv("KAFKA_BOOTSTRAP_SERVERS", "localhost:9092"),
            acks=os.getenv("KAFKA_ACKS", "all"),
            topic=os.getenv("SETTLEMENT_TOPIC", "rental.settlements"),
        )

        return cls(
            ledger=ledger,
            kafka=kafka,
            seed=int(os.getenv("SEED")) if os.getenv("SEED") else None,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )
