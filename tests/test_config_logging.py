"""Tests for config and logging."""

import json
import logging
import os
import sys
from unittest.mock import patch

import pytest

from rental_ledger.config import (
    KafkaConfig,
    LedgerConfig,
    RentalLedgerConfig,
    ScenarioConfig,
)
from rental_ledger.exceptions import ConfigurationError
from rental_ledger.logging import (
    ContextFormatter,
    JsonFormatter,
    call_context,
    get_logger,
    setup_logging,
)
from rental_ledger.models import BookingPolicy, RefundPolicy
from rental_ledger.pricing import DAY_LENGTH

ENV_VARS = [
    "LEDGER_ADMIN",
    "BOOKING_POLICY",
    "REFUND_POLICY",
    "DAY_LENGTH",
    "KAFKA_BOOTSTRAP_SERVERS",
    "KAFKA_ACKS",
    "SETTLEMENT_TOPIC",
    "SEED",
    "LOG_LEVEL",
]


@pytest.fixture
def clean_env():
    """Environment without any rental-ledger variables."""
    env = {k: v for k, v in os.environ.items() if k not in ENV_VARS}
    with patch.dict(os.environ, env, clear=True):
        yield


class TestLedgerConfig:
    """Tests for LedgerConfig."""

    def test_default_values(self) -> None:
        """Test default configuration values."""
        config = LedgerConfig()

        assert config.admin is None
        assert config.booking_policy is BookingPolicy.WHITELIST
        assert config.refund_policy is RefundPolicy.OWNER_TRUSTED
        assert config.day_length == DAY_LENGTH

    def test_validate_ok(self) -> None:
        """Test a config with an admin validates."""
        LedgerConfig(admin="0xadmin").validate()

    def test_validate_missing_admin(self) -> None:
        """Test the admin is required."""
        with pytest.raises(ConfigurationError, match="admin"):
            LedgerConfig().validate()

    def test_validate_day_length(self) -> None:
        """Test the day length must be positive."""
        with pytest.raises(ConfigurationError, match="Day length"):
            LedgerConfig(admin="0xadmin", day_length=0).validate()

    def test_validate_policy_type(self) -> None:
        """Test policies must be enum members."""
        with pytest.raises(ConfigurationError, match="booking policy"):
            LedgerConfig(admin="0xadmin", booking_policy="whitelist").validate()  # type: ignore[arg-type]


class TestKafkaConfig:
    """Tests for KafkaConfig."""

    def test_default_values(self) -> None:
        """Test default configuration values."""
        config = KafkaConfig()

        assert config.bootstrap_servers == "localhost:9092"
        assert config.acks == "all"
        assert config.topic == "rental.settlements"
        assert config.flush_timeout == 10.0

    def test_to_dict(self) -> None:
        """Test conversion to confluent-kafka config dict."""
        config = KafkaConfig(bootstrap_servers="kafka:9092", acks="1", retries=5)

        result = config.to_dict()

        assert result["bootstrap.servers"] == "kafka:9092"
        assert result["acks"] == "1"
        assert result["retries"] == 5
        assert result["linger.ms"] == 0
        assert result["compression.type"] == "snappy"
        assert "topic" not in result


class TestScenarioConfig:
    """Tests for ScenarioConfig."""

    def test_default_values(self) -> None:
        config = ScenarioConfig()

        assert config.num_hosts == 5
        assert config.num_guests == 10
        assert config.listings_per_host == 2
        assert config.booking_rate == 0.6
        assert config.cancellation_rate == 0.2


class TestRentalLedgerConfig:
    """Tests for RentalLedgerConfig."""

    def test_default_values(self) -> None:
        """Test default configuration values."""
        config = RentalLedgerConfig()

        assert isinstance(config.ledger, LedgerConfig)
        assert isinstance(config.kafka, KafkaConfig)
        assert config.scenario is None
        assert config.seed is None
        assert config.log_level == "INFO"

    def test_from_env_default(self, clean_env: None) -> None:
        """Test creating config from environment with defaults."""
        config = RentalLedgerConfig.from_env()

        assert config.ledger.admin is None
        assert config.ledger.booking_policy is BookingPolicy.WHITELIST
        assert config.ledger.refund_policy is RefundPolicy.OWNER_TRUSTED
        assert config.ledger.day_length == DAY_LENGTH
        assert config.kafka.bootstrap_servers == "localhost:9092"
        assert config.seed is None
        assert config.log_level == "INFO"

    def test_from_env_custom(self, clean_env: None) -> None:
        """Test creating config from custom environment variables."""
        env = {
            "LEDGER_ADMIN": "0xadmin",
            "BOOKING_POLICY": "open",
            "REFUND_POLICY": "strict",
            "DAY_LENGTH": "86400000",
            "KAFKA_BOOTSTRAP_SERVERS": "kafka-cluster:9092",
            "KAFKA_ACKS": "1",
            "SETTLEMENT_TOPIC": "prod.settlements",
            "SEED": "12345",
            "LOG_LEVEL": "DEBUG",
        }
        with patch.dict(os.environ, env):
            config = RentalLedgerConfig.from_env()

        assert config.ledger.admin == "0xadmin"
        assert config.ledger.booking_policy is BookingPolicy.OPEN
        assert config.ledger.refund_policy is RefundPolicy.STRICT
        assert config.ledger.day_length == 86_400_000
        assert config.kafka.bootstrap_servers == "kafka-cluster:9092"
        assert config.kafka.acks == "1"
        assert config.kafka.topic == "prod.settlements"
        assert config.seed == 12345
        assert config.log_level == "DEBUG"

    def test_from_env_invalid_policy(self, clean_env: None) -> None:
        """Test an unknown policy name is a configuration error."""
        with patch.dict(os.environ, {"BOOKING_POLICY": "everyone"}):
            with pytest.raises(ConfigurationError):
                RentalLedgerConfig.from_env()


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_setup_logging_default(self) -> None:
        """Test default logging setup."""
        setup_logging()

        logger = logging.getLogger("rental_ledger")
        assert logger.level == logging.INFO

    def test_setup_logging_debug(self) -> None:
        """Test debug level logging setup."""
        setup_logging(level="DEBUG")

        assert logging.getLogger().level == logging.DEBUG

    def test_setup_logging_invalid_level(self) -> None:
        """Test logging with invalid level defaults to INFO."""
        setup_logging(level="INVALID")

        assert logging.getLogger().level == logging.INFO

    def test_setup_logging_json_format(self) -> None:
        """Test JSON format logging."""
        setup_logging(format_type="json")

        logger = logging.getLogger()
        assert any(isinstance(h.formatter, JsonFormatter) for h in logger.handlers)

    def test_setup_logging_replaces_handlers(self) -> None:
        """Test that setup_logging replaces existing handlers."""
        logger = logging.getLogger()
        logger.addHandler(logging.StreamHandler())
        logger.addHandler(logging.StreamHandler())

        setup_logging()

        assert len(logger.handlers) == 1

    def test_external_loggers_quieted(self) -> None:
        """Test that external library loggers are quieted."""
        setup_logging(level="DEBUG")

        assert logging.getLogger("confluent_kafka").level == logging.WARNING
        assert logging.getLogger("faker").level == logging.WARNING


class TestContextFormatter:
    """Tests for the text formatter."""

    def _record(self) -> logging.LogRecord:
        return logging.LogRecord(
            name="rental_ledger.ledger",
            level=logging.WARNING,
            pathname="/path/to/ledger.py",
            lineno=42,
            msg="book_property rejected",
            args=(),
            exc_info=None,
        )

    def test_appends_call_context(self) -> None:
        record = self._record()
        record.__dict__.update(
            call_context(operation="book_property", caller="0xguest", property_id=3)
        )

        line = ContextFormatter(fmt="%(levelname)s | %(message)s").format(record)

        assert line == (
            "WARNING | book_property rejected | "
            "operation=book_property caller=0xguest property_id=3"
        )

    def test_plain_record_unchanged(self) -> None:
        line = ContextFormatter(fmt="%(levelname)s | %(message)s").format(self._record())

        assert line == "WARNING | book_property rejected"

    def test_standard_setup_uses_context_formatter(self) -> None:
        setup_logging(format_type="standard")

        handlers = logging.getLogger().handlers
        assert isinstance(handlers[0].formatter, ContextFormatter)


class TestJsonFormatter:
    """Tests for JsonFormatter."""

    def _record(self, **kwargs) -> logging.LogRecord:
        return logging.LogRecord(
            name="test.logger",
            level=kwargs.pop("level", logging.INFO),
            pathname="/path/to/file.py",
            lineno=42,
            msg=kwargs.pop("msg", "Test message"),
            args=(),
            exc_info=kwargs.pop("exc_info", None),
        )

    def test_format_basic(self) -> None:
        """Test basic log formatting."""
        data = json.loads(JsonFormatter().format(self._record()))

        assert data["level"] == "INFO"
        assert data["logger"] == "test.logger"
        assert data["message"] == "Test message"
        assert "timestamp" in data

    def test_format_with_exception(self) -> None:
        """Test formatting with exception info."""
        try:
            raise ValueError("Test error")
        except ValueError:
            exc_info = sys.exc_info()

        data = json.loads(
            JsonFormatter().format(self._record(level=logging.ERROR, exc_info=exc_info))
        )

        assert data["level"] == "ERROR"
        assert "ValueError" in data["exception"]

    def test_format_with_extra(self) -> None:
        """Test formatting with extra fields."""
        record = self._record()
        record.extra = {"caller": "0xguest", "property_id": 3}

        data = json.loads(JsonFormatter().format(record))

        assert data["caller"] == "0xguest"
        assert data["property_id"] == 3


class TestRejectionLogging:
    """Tests for ledger rejection logs."""

    def test_rejection_logged_with_context(
        self, caplog: pytest.LogCaptureFixture, admin: str, stranger: str
    ) -> None:
        """Test a rejected call is logged at WARNING with caller context."""
        from rental_ledger.exceptions import NotAdminError
        from rental_ledger.ledger import RentalLedger

        ledger = RentalLedger(admin)
        with caplog.at_level(logging.WARNING, logger="rental_ledger.ledger"):
            with pytest.raises(NotAdminError):
                ledger.add_user_to_whitelist(stranger, stranger)

        record = caplog.records[-1]
        assert record.levelno == logging.WARNING
        assert "NotAdminError" in record.getMessage()
        assert record.extra["caller"] == stranger


class TestGetLogger:
    """Tests for get_logger function."""

    def test_get_logger(self) -> None:
        """Test getting a logger."""
        logger = get_logger("test.module")

        assert isinstance(logger, logging.Logger)
        assert logger.name == "test.module"

    def test_get_logger_same_instance(self) -> None:
        """Test that get_logger returns same instance for same name."""
        assert get_logger("test.same") is get_logger("test.same")


class TestPackageInit:
    """Tests for rental_ledger __init__.py."""

    def test_version_exported(self) -> None:
        """Test that __version__ is exported."""
        from rental_ledger import __version__

        assert isinstance(__version__, str)


class TestCallContext:
    """Tests for call_context."""

    def test_wraps_fields(self) -> None:
        assert call_context(caller="0xguest", property_id=3) == {
            "extra": {"caller": "0xguest", "property_id": 3}
        }

    def test_drops_none(self) -> None:
        assert call_context(caller="0xadmin", property_id=None) == {
            "extra": {"caller": "0xadmin"}
        }

    def test_zero_kept(self) -> None:
        assert call_context(property_id=0) == {"extra": {"property_id": 0}}
