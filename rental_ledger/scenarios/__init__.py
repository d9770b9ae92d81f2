"""Scenarios that drive a ledger through realistic marketplace activity."""

from rental_ledger.scenarios.marketplace import MarketplaceScenario

__all__ = ["MarketplaceScenario"]
