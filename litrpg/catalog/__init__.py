"""
Catalog module - reference definitions and their providers.

Provides:
- Class/profession and ability definitions
- Providers (in-memory, JSON on disk)
- CatalogRepository with TTL/invalidate() caching
"""

from litrpg.catalog.definitions import (
    AbilityDefinition,
    AbilityTier,
    ProgressionDefinition,
    MAX_TIER,
    parse_tier,
    tier_name,
)
from litrpg.catalog.repository import (
    CatalogProvider,
    CatalogRepository,
    CatalogSnapshot,
    JsonCatalogProvider,
    StaticCatalogProvider,
)

__all__ = [
    # Definitions
    "AbilityDefinition",
    "AbilityTier",
    "ProgressionDefinition",
    "MAX_TIER",
    "parse_tier",
    "tier_name",
    # Access
    "CatalogProvider",
    "CatalogRepository",
    "CatalogSnapshot",
    "JsonCatalogProvider",
    "StaticCatalogProvider",
]
