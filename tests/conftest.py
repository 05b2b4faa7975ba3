import pytest

from litcore.core.events import EventBus
from litrpg.catalog import (
    AbilityDefinition,
    AbilityTier,
    CatalogRepository,
    ProgressionDefinition,
    StaticCatalogProvider,
)
from litrpg.components import Character, ProgressionInterval, StatBonuses


RECRUIT = ProgressionDefinition(
    id=1, name="Recruit", tier=1, unlock_level=1,
    stat_bonuses=StatBonuses(STR=1), ability_ids=frozenset({101}),
)
SCOUT = ProgressionDefinition(
    id=9, name="Scout", tier=2, unlock_level=10, prerequisite_id=1,
    stat_bonuses=StatBonuses(PER=1), ability_ids=frozenset({102}),
)
HUNTER = ProgressionDefinition(
    id=12, name="Hunter", tier=2, unlock_level=10, prerequisite_id=1,
    stat_bonuses=StatBonuses(DEX=1),
)
OPERATIVE = ProgressionDefinition(
    id=30, name="Operative", tier=3, unlock_level=32, prerequisite_id=9,
    stat_bonuses=StatBonuses(MEM=1),
)

TINKERER = ProgressionDefinition(
    id=201, name="Tinkerer", tier=1, unlock_level=16,
    stat_bonuses=StatBonuses(INT=1), ability_ids=frozenset({301}),
)
MEDIC = ProgressionDefinition(
    id=202, name="Medic", tier=1, unlock_level=18,
    stat_bonuses=StatBonuses(CHA=1),
)
ENGINEER = ProgressionDefinition(
    id=210, name="Engineer", tier=2, unlock_level=25, prerequisite_id=201,
    stat_bonuses=StatBonuses(INT=2),
)

POWER_STRIKE = AbilityDefinition(
    id=101, name="Power Strike", max_level=3, evolution_id=103,
    tiers=(
        AbilityTier(level=1, duration="Instant", cooldown="30 sec", energy_cost=10),
        AbilityTier(level=2, duration="Instant", cooldown="25 sec", energy_cost=12),
        AbilityTier(level=3, duration="Instant", cooldown="20 sec", energy_cost=14),
    ),
)
KEEN_EYE = AbilityDefinition(id=102, name="Keen Eye", max_level=1)
CRUSHING_BLOW = AbilityDefinition(id=103, name="Crushing Blow", max_level=5)
FIELD_REPAIR = AbilityDefinition(id=301, name="Field Repair", max_level=2)
STEALTH = AbilityDefinition(id=401, name="Stealth", max_level=1)


@pytest.fixture
def event_bus():
    """Fresh EventBus for each test."""
    return EventBus()


@pytest.fixture
def catalog_provider():
    return StaticCatalogProvider(
        classes=[RECRUIT, SCOUT, HUNTER, OPERATIVE],
        professions=[TINKERER, MEDIC, ENGINEER],
        abilities=[POWER_STRIKE, KEEN_EYE, CRUSHING_BLOW, FIELD_REPAIR, STEALTH],
    )


@pytest.fixture
def catalog_repository(catalog_provider):
    return CatalogRepository(catalog_provider)


@pytest.fixture
def catalog(catalog_repository):
    """Immutable snapshot of the test catalog."""
    return catalog_repository.snapshot()


@pytest.fixture
def character():
    """Level 1 Recruit with no allocations."""
    return Character(
        name="Kira",
        current_class_id=RECRUIT.id,
        class_activated_at_level=1,
        class_history=[ProgressionInterval(entity_name="Recruit", activated_at_level=1)],
    )
