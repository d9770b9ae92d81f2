#!/usr/bin/env python3
"""Run a seeded marketplace simulation against a fresh rental ledger.

Hosts list generated properties, whitelisted guests book a share of them and
some bookings are cancelled. Transfers go to one of:
- memory: in-memory balances (default), printed at the end
- console: one JSON line per transfer on stdout
- kafka: settlement events produced to a Kafka topic
"""

import argparse
import logging
import sys
import time
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from rental_ledger.config import KafkaConfig, RentalLedgerConfig, ScenarioConfig
from rental_ledger.logging import setup_logging
from rental_ledger.scenarios import MarketplaceScenario
from rental_ledger.settlement import (
    ConsoleSettlementBridge,
    InMemorySettlementBridge,
    KafkaSettlementBridge,
    SettlementBridge,
)

logger = logging.getLogger(__name__)


def build_bridge(kind: str, kafka: KafkaConfig) -> SettlementBridge:
    """Create the settlement bridge selected on the command line."""
    if kind == "console":
        return ConsoleSettlementBridge()
    if kind == "kafka":
        return KafkaSettlementBridge(kafka)
    return InMemorySettlementBridge()


def print_summary(summary: dict, elapsed: float) -> None:
    """Print the scenario summary."""
    print(f"\n{'='*60}")
    print("Marketplace Simulation Summary")
    print("=" * 60)
    for key, value in summary.items():
        print(f"  {key}: {value}")
    print(f"  elapsed: {elapsed:.2f}s")


def main() -> None:
    """Main entry point."""
    config = RentalLedgerConfig.from_env()
    defaults = config.scenario or ScenarioConfig()

    parser = argparse.ArgumentParser(
        description="Simulate hosts and guests trading on a rental ledger"
    )
    parser.add_argument(
        "--hosts", type=int, default=defaults.num_hosts, help="Number of hosts (default: 5)"
    )
    parser.add_argument(
        "--guests", type=int, default=defaults.num_guests, help="Number of guests (default: 10)"
    )
    parser.add_argument(
        "--listings-per-host",
        type=int,
        default=defaults.listings_per_host,
        help="Listings per host (default: 2)",
    )
    parser.add_argument(
        "--booking-rate",
        type=float,
        default=defaults.booking_rate,
        help="Share of listings that get booked (default: 0.6)",
    )
    parser.add_argument(
        "--cancellation-rate",
        type=float,
        default=defaults.cancellation_rate,
        help="Share of bookings that get cancelled (default: 0.2)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=config.seed if config.seed is not None else 42,
        help="Random seed (default: $SEED or 42)",
    )
    parser.add_argument(
        "--settlement",
        choices=["memory", "console", "kafka"],
        default="memory",
        help="Where transfers are settled (default: memory)",
    )
    parser.add_argument(
        "--kafka-bootstrap",
        type=str,
        default=config.kafka.bootstrap_servers,
        help="Kafka bootstrap servers (default: $KAFKA_BOOTSTRAP_SERVERS)",
    )
    parser.add_argument(
        "--log-format",
        choices=["standard", "json"],
        default="standard",
        help="Log output format (default: standard)",
    )
    args = parser.parse_args()

    setup_logging(level=config.log_level, format_type=args.log_format)

    config.kafka.bootstrap_servers = args.kafka_bootstrap
    bridge = build_bridge(args.settlement, config.kafka)

    config.scenario = ScenarioConfig(
        num_hosts=args.hosts,
        num_guests=args.guests,
        listings_per_host=args.listings_per_host,
        booking_rate=args.booking_rate,
        cancellation_rate=args.cancellation_rate,
    )
    logger.info(
        "Ledger policies: booking=%s, refund=%s",
        config.ledger.booking_policy.value,
        config.ledger.refund_policy.value,
    )

    start = time.perf_counter()
    scenario = MarketplaceScenario.from_config(
        config.scenario,
        seed=args.seed,
        settlement=bridge,
        ledger_config=config.ledger,
    )
    try:
        scenario.generate()
    finally:
        bridge.close()
    elapsed = time.perf_counter() - start

    print_summary(scenario.get_summary(), elapsed)

    if isinstance(bridge, InMemorySettlementBridge):
        print("\nBalances:")
        for identity, balance in sorted(bridge.balances.items(), key=lambda kv: -kv[1]):
            received = len(bridge.transfers_to(identity))
            print(f"  {identity}: {balance} ({received} transfers received)")


if __name__ == "__main__":
    main()
