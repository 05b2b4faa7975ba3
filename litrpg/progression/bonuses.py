"""
Historical bonus accumulator.

Each class or profession grants its stat bonuses once per level it is
held. Both tracks follow the same rule:

- a closed interval contributes deactivated - activated levels, counted
  only from the last banking onward;
- the open interval contributes level - watermark, and only once that
  is positive, so nothing accrues on the level a selection is made.

Banking folds everything accrued so far into the base attributes and
moves the watermarks to the current level, so a second banking at the
same level finds nothing left to add.
"""

from __future__ import annotations

import logging
from typing import Iterator, Optional

from litrpg.catalog.repository import CatalogSnapshot
from litrpg.components.character import (
    Attribute,
    AttributeSet,
    Character,
    ProgressionInterval,
    StatBonuses,
    Track,
)
from litrpg.progression.ledger import spent_attribute_points

logger = logging.getLogger(__name__)


def levels_held(interval: ProgressionInterval, character: Character, track: Track) -> int:
    """Levels of interval that still accrue bonus."""
    if interval.is_open:
        watermark = character.watermark_for(track) or interval.activated_at_level
        return max(0, character.level - watermark)

    start = interval.activated_at_level
    if character.bonuses_banked_at_level is not None:
        start = max(start, character.bonuses_banked_at_level)
    return max(0, interval.deactivated_at_level - start)


def _accruing_intervals(
    character: Character,
    track: Track,
    catalog: CatalogSnapshot,
) -> Iterator[ProgressionInterval]:
    history = character.history_for(track)
    yield from history

    if character.open_interval(track) is None:
        # Records created before intervals were kept: treat the active
        # entity as held since its watermark
        current = catalog.current_entity(character, track)
        if current is not None:
            yield ProgressionInterval(
                entity_name=current.name,
                activated_at_level=character.watermark_for(track) or character.level,
            )


def track_bonuses(character: Character, track: Track, catalog: CatalogSnapshot) -> StatBonuses:
    """Bonus accrued on one track, per attribute."""
    total = StatBonuses()
    for interval in _accruing_intervals(character, track, catalog):
        held = levels_held(interval, character, track)
        if held <= 0:
            continue

        definition = catalog.find_by_name(track, interval.entity_name)
        if definition is None:
            logger.warning(f"{track.name} '{interval.entity_name}' not in catalog; no bonus counted")
            continue

        contribution = definition.stat_bonuses.scaled(held)
        logger.debug(
            f"{track.name} bonus: {interval.entity_name} held {held} levels "
            f"-> {contribution.nonzero()}"
        )
        total = total + contribution
    return total


def accrued_bonus(
    attr: Attribute,
    character: Character,
    track: Track,
    catalog: CatalogSnapshot,
) -> int:
    return track_bonuses(character, track, catalog).get(attr)


def total_bonuses(character: Character, catalog: CatalogSnapshot) -> StatBonuses:
    return track_bonuses(character, Track.CLASS, catalog) + track_bonuses(character, Track.PROFESSION, catalog)


def effective_attributes(
    character: Character,
    catalog: CatalogSnapshot,
    bonuses: Optional[StatBonuses] = None,
) -> AttributeSet:
    """Editable attributes plus both tracks' accrued bonuses."""
    if bonuses is None:
        bonuses = total_bonuses(character, catalog)
    return AttributeSet(**{
        attr.value: max(1, value + bonuses.get(attr))
        for attr, value in character.attributes.items()
    })


def effective_attribute(attr: Attribute, character: Character, catalog: CatalogSnapshot) -> int:
    return effective_attributes(character, catalog).get(attr)


def bank_bonuses(character: Character, catalog: CatalogSnapshot) -> Character:
    """
    Fold accrued bonuses and pending allocations into the base.

    Returns a new character; the input is left untouched. Banking with
    nothing accrued only moves the watermarks.
    """
    bonuses = total_bonuses(character, catalog)
    pending = spent_attribute_points(character.attributes, character.base_stats)

    banked_values = AttributeSet(**{
        attr.value: max(1, max(value, character.base_stats.get(attr)) + bonuses.get(attr))
        for attr, value in character.attributes.items()
    })

    banked = character.clone()
    banked.attributes = banked_values
    banked.base_stats = banked_values.clone()
    banked.banked_attribute_points += pending
    banked.class_activated_at_level = character.level
    if character.has_profession:
        banked.profession_activated_at_level = character.level
    banked.bonuses_banked_at_level = character.level

    if pending or not bonuses.is_zero:
        banked.journal.insert(0, f"Banked bonuses at Lvl {character.level}: {bonuses.nonzero()}")
        logger.info(
            f"Banked {character.name or 'character'} at level {character.level}: "
            f"bonuses {bonuses.nonzero()}, {pending} allocated points"
        )
    return banked
