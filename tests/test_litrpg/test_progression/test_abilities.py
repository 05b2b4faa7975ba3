import pytest

from litrpg.catalog import AbilityDefinition, CatalogSnapshot
from litrpg.components import Character, ProgressionInterval, Track
from litrpg.progression.abilities import (
    combat_abilities,
    evolve_ability,
    professional_abilities,
    unlearned_abilities,
)


@pytest.fixture
def veteran():
    return Character(
        level=20,
        current_class_id=9,
        class_activated_at_level=10,
        class_history=[
            ProgressionInterval(entity_name="Recruit", activated_at_level=1, deactivated_at_level=10),
            ProgressionInterval(entity_name="Scout", activated_at_level=10),
        ],
        current_profession_name="Tinkerer",
        profession_activated_at_level=16,
        profession_history=[ProgressionInterval(entity_name="Tinkerer", activated_at_level=16)],
        abilities={"Power Strike": 1, "Keen Eye": 1, "Stealth": 1, "Field Repair": 1},
    )


def names(abilities):
    return [ability.name for ability in abilities]


def test_combat_abilities_retained(veteran, catalog):
    assert names(combat_abilities(veteran, catalog)) == ["Power Strike", "Keen Eye", "Stealth"]

def test_professional_abilities(veteran, catalog):
    assert names(professional_abilities(veteran, catalog)) == ["Field Repair"]

def test_reheld_class_listed_once(catalog):
    character = Character(
        level=20,
        current_class_id=1,
        class_activated_at_level=14,
        class_history=[
            ProgressionInterval(entity_name="Recruit", activated_at_level=1, deactivated_at_level=10),
            ProgressionInterval(entity_name="Scout", activated_at_level=10, deactivated_at_level=14),
            ProgressionInterval(entity_name="Recruit", activated_at_level=14),
        ],
    )
    assert names(combat_abilities(character, catalog)) == ["Power Strike", "Keen Eye"]

def test_unlearned_abilities(veteran, catalog):
    assert names(unlearned_abilities(veteran, catalog)) == ["Crushing Blow"]
    assert names(unlearned_abilities(veteran, catalog, search="BLOW")) == ["Crushing Blow"]
    assert unlearned_abilities(veteran, catalog, search="fire") == []

def test_evolve_at_max_level(veteran, catalog):
    veteran.abilities = {**veteran.abilities, "Power Strike": 3}
    power_strike = catalog.ability_by_name("Power Strike")

    assert evolve_ability(veteran, power_strike, catalog)
    assert "Power Strike" not in veteran.abilities
    assert veteran.abilities["Crushing Blow"] == 1
    assert veteran.journal[0] == "Evolved Power Strike into Crushing Blow"

def test_evolve_requires_max_level(veteran, catalog):
    power_strike = catalog.ability_by_name("Power Strike")
    assert not evolve_ability(veteran, power_strike, catalog)
    assert veteran.abilities["Power Strike"] == 1

def test_evolve_requires_resolvable_evolution(veteran, catalog):
    keen_eye = catalog.ability_by_name("Keen Eye")
    assert not evolve_ability(veteran, keen_eye, catalog)

    dangling = AbilityDefinition(id=500, name="Odd Trick", max_level=1, evolution_id=999)
    snapshot = CatalogSnapshot(abilities=catalog.abilities + (dangling,))
    veteran.abilities = {**veteran.abilities, "Odd Trick": 1}
    assert not evolve_ability(veteran, dangling, snapshot)
