import pytest

from litrpg.components import Track
from litrpg.progression.curve import ADVANCED_CLASS_SELECTION, total_xp_for_level
from litrpg.systems import ProgressionEvent, ProgressionSystem


@pytest.fixture
def system(catalog_repository, event_bus):
    return ProgressionSystem(catalog_repository, event_bus)


def record(event_bus, event_type):
    received = []
    def handler(event):
        received.append(event)
    event_bus.subscribe(event_type, handler, weak=False)
    return received


def test_battle_result_levels_up(system, event_bus, character):
    level_ups = record(event_bus, ProgressionEvent.LEVEL_UP)

    updated, result = system.apply_battle_result(
        character, xp=total_xp_for_level(10), credits=100, description="Cleared the Warrens",
    )

    assert updated.level == 10
    assert updated.xp == total_xp_for_level(10)
    assert updated.credits == 100
    assert result.attribute_points == 21
    assert updated.journal[0] == f"Reached Lvl 10 ({ADVANCED_CLASS_SELECTION})"
    assert updated.journal[1].startswith("Cleared the Warrens")
    assert character.level == 1

    assert len(level_ups) == 1
    assert level_ups[0]["result"] is result

def test_battle_result_without_level_up(system, event_bus, character):
    level_ups = record(event_bus, ProgressionEvent.LEVEL_UP)
    updated, result = system.apply_battle_result(character, xp=50)

    assert updated.level == 1
    assert updated.xp == 50
    assert not result.leveled_up
    assert updated.journal == []
    assert level_ups == []

def test_negative_xp_rejected(system, character):
    with pytest.raises(ValueError):
        system.apply_battle_result(character, xp=-1)

def test_summary(system, character):
    character.level = 10
    summary = system.summary(character)

    assert summary.class_bonuses.STR == 9
    assert summary.profession_bonuses.is_zero
    assert summary.effective.STR == 12
    assert summary.available_attribute_points == 21
    assert summary.available_ability_points == 8
    assert summary.cooldown_reduction == pytest.approx(3 / 203)
    assert summary.unlocks[Track.CLASS].is_eligible
    assert not summary.unlocks[Track.PROFESSION].is_eligible
    assert summary.has_pending_choice

def test_select_publishes(system, event_bus, catalog, character):
    selections = record(event_bus, ProgressionEvent.CLASS_SELECTED)
    character.level = 10
    scout = catalog.find_by_name(Track.CLASS, "Scout")

    updated = system.select(character, Track.CLASS, scout)

    assert updated.current_class_id == scout.id
    assert selections[0]["definition"] == scout
    assert not system.summary(updated).unlocks[Track.CLASS].is_eligible

def test_select_profession(system, event_bus, catalog, character):
    selections = record(event_bus, ProgressionEvent.PROFESSION_SELECTED)
    character.level = 16
    tinkerer = catalog.find_by_name(Track.PROFESSION, "Tinkerer")

    updated = system.select(character, Track.PROFESSION, tinkerer)

    assert updated.current_profession_name == "Tinkerer"
    assert len(selections) == 1

def test_select_not_on_offer(system, catalog, character):
    scout = catalog.find_by_name(Track.CLASS, "Scout")
    with pytest.raises(ValueError):
        system.select(character, Track.CLASS, scout)

def test_bank_publishes(system, event_bus, character):
    banked_events = record(event_bus, ProgressionEvent.BONUSES_BANKED)
    character.level = 10

    banked = system.bank(character)

    assert banked.base_stats.STR == 12
    assert banked_events[0]["attributes"]["STR"] == 12

def test_works_without_event_bus(catalog_repository, character):
    system = ProgressionSystem(catalog_repository)
    updated, _ = system.apply_battle_result(character, xp=total_xp_for_level(3))
    assert updated.level == 3
