"""
Ability retention and evolution.

Abilities granted by a class or profession stay available after the
character moves on. Abilities learned from disks are listed with the
combat abilities unless a held profession grants them.
"""

from __future__ import annotations

import logging
from typing import Iterable

from litrpg.catalog.definitions import AbilityDefinition, ProgressionDefinition
from litrpg.catalog.repository import CatalogSnapshot
from litrpg.components.character import Character, Track

logger = logging.getLogger(__name__)


def held_entities(character: Character, track: Track, catalog: CatalogSnapshot) -> list[ProgressionDefinition]:
    """Every entity held on track, history order then current, without repeats."""
    held: list[ProgressionDefinition] = []
    seen: set[int] = set()

    names = [entry.entity_name for entry in character.history_for(track)]
    resolved = [catalog.find_by_name(track, name) for name in names]
    resolved.append(catalog.current_entity(character, track))

    for definition in resolved:
        if definition is not None and definition.id not in seen:
            held.append(definition)
            seen.add(definition.id)
    return held


def _abilities_of(
    entities: Iterable[ProgressionDefinition],
    catalog: CatalogSnapshot,
) -> list[AbilityDefinition]:
    result: list[AbilityDefinition] = []
    added: set[str] = set()
    for entity in entities:
        for ability_id in sorted(entity.ability_ids):
            ability = catalog.ability_by_id(ability_id)
            if ability is None:
                logger.warning(f"{entity.name} lists unknown ability id {ability_id}")
                continue
            if ability.name not in added:
                result.append(ability)
                added.add(ability.name)
    return result


def professional_abilities(character: Character, catalog: CatalogSnapshot) -> list[AbilityDefinition]:
    return _abilities_of(held_entities(character, Track.PROFESSION, catalog), catalog)


def combat_abilities(character: Character, catalog: CatalogSnapshot) -> list[AbilityDefinition]:
    """Class abilities (past then current), then disk-learned non-professional ones."""
    result = _abilities_of(held_entities(character, Track.CLASS, catalog), catalog)
    added = {ability.name for ability in result}

    professional_ids = {
        ability_id
        for entity in held_entities(character, Track.PROFESSION, catalog)
        for ability_id in entity.ability_ids
    }

    for name in character.abilities:
        if name in added:
            continue
        ability = catalog.ability_by_name(name)
        if ability is not None and ability.id not in professional_ids:
            result.append(ability)
            added.add(name)
    return result


def unlearned_abilities(character: Character, catalog: CatalogSnapshot, search: str = "") -> list[AbilityDefinition]:
    """Abilities not yet learned whose name contains search (case-insensitive)."""
    needle = search.lower()
    return [
        ability for ability in catalog.abilities
        if ability.name not in character.abilities and needle in ability.name.lower()
    ]


def can_evolve(character: Character, ability: AbilityDefinition, catalog: CatalogSnapshot) -> bool:
    if ability.evolution_id is None:
        return False
    if character.abilities.get(ability.name, 0) < ability.max_level:
        return False
    return catalog.ability_by_id(ability.evolution_id) is not None


def evolve_ability(character: Character, ability: AbilityDefinition, catalog: CatalogSnapshot) -> bool:
    """
    Replace a maxed ability with its evolution at level 1.

    Returns:
        False, changing nothing, unless the ability is at max level and
        its evolution resolves in the catalog
    """
    if not can_evolve(character, ability, catalog):
        return False

    evolved = catalog.ability_by_id(ability.evolution_id)
    abilities = {name: lvl for name, lvl in character.abilities.items() if name != ability.name}
    abilities.setdefault(evolved.name, 1)
    character.abilities = abilities
    character.journal.insert(0, f"Evolved {ability.name} into {evolved.name}")
    return True
