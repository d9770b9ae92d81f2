"""Synthetic data generators for seeding and simulation."""

from rental_ledger.generators.listing import (
    IdentityGenerator,
    ListingDraft,
    ListingGenerator,
)

__all__ = ["IdentityGenerator", "ListingDraft", "ListingGenerator"]
