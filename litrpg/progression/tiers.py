"""
Tier unlock state machine, one per track (class, profession).

The state is never stored. evaluate_tier_unlock() derives it from the
character and the catalog every time, so it cannot drift from
reference data edited elsewhere:

    LOCKED    nothing to choose
    ELIGIBLE  a higher tier is open; candidates lists the choices
    RESOLVED  returned by select_candidate() right after a choice;
              re-evaluating afterwards yields LOCKED again until the
              next tier's requirements are met
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from litrpg.catalog.definitions import ProgressionDefinition, tier_name
from litrpg.catalog.repository import CatalogSnapshot
from litrpg.components.character import Character, ProgressionInterval, Track
from litrpg.config import ProgressionConfig, resolve_config

logger = logging.getLogger(__name__)


class UnlockStatus(Enum):
    LOCKED = auto()
    ELIGIBLE = auto()
    RESOLVED = auto()


@dataclass(frozen=True)
class TierUnlockState:
    """Result of evaluating a track."""
    status: UnlockStatus
    track: Track
    target_tier: Optional[int] = None
    candidates: tuple[ProgressionDefinition, ...] = ()
    selected: Optional[ProgressionDefinition] = None

    @classmethod
    def locked(cls, track: Track) -> TierUnlockState:
        return cls(status=UnlockStatus.LOCKED, track=track)

    @property
    def is_eligible(self) -> bool:
        return self.status is UnlockStatus.ELIGIBLE


def holds_entity(character: Character, track: Track) -> bool:
    if track is Track.CLASS:
        return character.current_class_id is not None
    return character.has_profession


def highest_tier(character: Character, track: Track) -> int:
    if track is Track.CLASS:
        return character.highest_tier_achieved
    return character.highest_profession_tier


def first_pick_threshold(catalog: CatalogSnapshot, track: Track) -> Optional[int]:
    """Lowest unlock level among tier-1 entries, None if there are none."""
    levels = [entry.unlock_level for entry in catalog.entries(track) if entry.tier == 1]
    return min(levels) if levels else None


def evaluate_tier_unlock(character: Character, track: Track, catalog: CatalogSnapshot) -> TierUnlockState:
    """
    Derive the unlock state of a track.

    With an entity held: eligible when its tier has caught up with the
    highest tier reached on the track and some entry of a higher tier
    names it as prerequisite and is within the character's level. The
    target is the nearest such tier.

    With nothing held (typically the first profession): eligible once
    the level reaches the lowest tier-1 unlock level; no prerequisite.
    """
    if not holds_entity(character, track):
        return _evaluate_first_pick(character, track, catalog)

    current = catalog.current_entity(character, track)
    if current is None:
        logger.warning(f"Current {track.name} of {character.name or 'character'} not in catalog")
        return TierUnlockState.locked(track)

    if current.tier < highest_tier(character, track):
        return TierUnlockState.locked(track)

    higher = [
        entry for entry in catalog.entries(track)
        if entry.tier > current.tier
        and entry.prerequisite_id == current.id
        and character.level >= entry.unlock_level
    ]
    if not higher:
        return TierUnlockState.locked(track)

    target = min(entry.tier for entry in higher)
    return TierUnlockState(
        status=UnlockStatus.ELIGIBLE,
        track=track,
        target_tier=target,
        candidates=tuple(entry for entry in higher if entry.tier == target),
    )


def _evaluate_first_pick(character: Character, track: Track, catalog: CatalogSnapshot) -> TierUnlockState:
    threshold = first_pick_threshold(catalog, track)
    if threshold is None or character.level < threshold:
        return TierUnlockState.locked(track)

    return TierUnlockState(
        status=UnlockStatus.ELIGIBLE,
        track=track,
        target_tier=1,
        candidates=tuple(
            entry for entry in catalog.entries(track)
            if entry.tier == 1 and entry.unlock_level <= character.level
        ),
    )


def is_current(character: Character, track: Track, definition: ProgressionDefinition) -> bool:
    if track is Track.CLASS:
        return character.current_class_id == definition.id
    return character.current_profession_name == definition.name


def switch_entity(
    character: Character,
    track: Track,
    definition: ProgressionDefinition,
    catalog: CatalogSnapshot,
    config: Optional[ProgressionConfig] = None,
) -> Character:
    """
    Make definition the active entity of track.

    Closes the open interval at the current level, opens a new one,
    moves the track watermark and raises the track's highest tier.
    Re-selecting the entity already held changes nothing.

    Returns:
        A new character (the same object when nothing changed)
    """
    if is_current(character, track, definition):
        return character

    level = character.level
    updated = character.clone()
    history = updated.history_for(track)

    open_entry = updated.open_interval(track)
    if open_entry is not None:
        open_entry.deactivated_at_level = max(level, open_entry.activated_at_level)
    else:
        previous = catalog.current_entity(character, track)
        if previous is not None:
            start = character.watermark_for(track) or level
            history.append(ProgressionInterval(
                entity_name=previous.name,
                activated_at_level=min(start, level),
                deactivated_at_level=level,
            ))

    history.append(ProgressionInterval(entity_name=definition.name, activated_at_level=level))

    if track is Track.CLASS:
        previous_highest = updated.highest_tier_achieved
        updated.current_class_id = definition.id
        updated.class_activated_at_level = level
        updated.highest_tier_achieved = max(previous_highest, definition.tier)

        entry = f"Advanced to {tier_name(definition.tier)}: {definition.name} at Lvl {level}"
        if updated.highest_tier_achieved > previous_highest:
            bonus = (updated.highest_tier_achieved - previous_highest) * resolve_config(config).tier_upgrade_ability_bonus
            entry += f" (+{bonus} Ability Points)"
    else:
        updated.current_profession_name = definition.name
        updated.profession_activated_at_level = level
        updated.highest_profession_tier = max(updated.highest_profession_tier, definition.tier)
        entry = f"Advanced profession to {tier_name(definition.tier)}: {definition.name} at Lvl {level}"

    updated.journal.insert(0, entry)
    logger.info(f"{character.name or 'character'}: {entry}")
    return updated


def select_candidate(
    character: Character,
    state: TierUnlockState,
    definition: ProgressionDefinition,
    catalog: CatalogSnapshot,
    config: Optional[ProgressionConfig] = None,
) -> tuple[Character, TierUnlockState]:
    """
    Resolve an ELIGIBLE state with the player's choice.

    Raises:
        ValueError: if the state is not ELIGIBLE or definition is not a candidate
    """
    if not state.is_eligible:
        raise ValueError(f"{state.track.name} track has no pending tier choice")
    if definition not in state.candidates:
        raise ValueError(f"{definition.name} is not a candidate for {tier_name(state.target_tier)}")

    updated = switch_entity(character, state.track, definition, catalog, config)
    resolved = TierUnlockState(
        status=UnlockStatus.RESOLVED,
        track=state.track,
        target_tier=definition.tier,
        selected=definition,
    )
    return updated, resolved
