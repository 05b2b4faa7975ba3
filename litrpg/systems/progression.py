"""
Progression system - the entry point the presentation layer calls.

Ties the catalog, the progression rules and the event bus together.
Every call takes a character and returns a new one; persisting the
result is the caller's job (see litrpg.save).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional

from litcore.core.events import EventBus
from litrpg.catalog.definitions import ProgressionDefinition
from litrpg.catalog.repository import CatalogRepository
from litrpg.components.character import AttributeSet, Character, StatBonuses, Track
from litrpg.config import ProgressionConfig, resolve_config
from litrpg.progression.bonuses import bank_bonuses, effective_attributes, track_bonuses
from litrpg.progression.curve import (
    CumulativePoints,
    LevelUpResult,
    XpProgress,
    apply_xp_gain,
    cumulative_points,
    xp_progress,
)
from litrpg.progression.display import cooldown_reduction_fraction, duration_extension_fraction
from litrpg.progression.ledger import available_ability_points, available_attribute_points
from litrpg.progression.tiers import (
    TierUnlockState,
    UnlockStatus,
    evaluate_tier_unlock,
    select_candidate,
)

logger = logging.getLogger(__name__)


class ProgressionEvent(Enum):
    """Progression system events."""
    LEVEL_UP = auto()
    CLASS_SELECTED = auto()
    PROFESSION_SELECTED = auto()
    BONUSES_BANKED = auto()


_SELECTION_EVENTS = {
    Track.CLASS: ProgressionEvent.CLASS_SELECTED,
    Track.PROFESSION: ProgressionEvent.PROFESSION_SELECTED,
}


@dataclass
class CharacterSummary:
    """Everything a character sheet shows, computed in one pass."""
    level: int
    xp: XpProgress
    cumulative: CumulativePoints
    available_attribute_points: int
    available_ability_points: int
    class_bonuses: StatBonuses
    profession_bonuses: StatBonuses
    effective: AttributeSet
    cooldown_reduction: float
    duration_extension: float
    unlocks: dict[Track, TierUnlockState] = field(default_factory=dict)

    @property
    def has_pending_choice(self) -> bool:
        return any(state.is_eligible for state in self.unlocks.values())


class ProgressionSystem:
    """
    Applies progression rules to characters.

    Features:
    - XP gains with aggregated level rewards
    - Class and profession selection through the tier state machine
    - Bonus banking
    - Event publishing for each of the above

    Usage:
        system = ProgressionSystem(CatalogRepository(provider), event_bus)
        character, result = system.apply_battle_result(character, xp=120, credits=300)
        summary = system.summary(character)
    """

    def __init__(
        self,
        catalog_repository: CatalogRepository,
        event_bus: Optional[EventBus] = None,
        config: Optional[ProgressionConfig] = None,
    ):
        self.catalog_repository = catalog_repository
        self.event_bus = event_bus
        self.config = resolve_config(config)

    def _publish(self, event_type: ProgressionEvent, **data) -> None:
        if self.event_bus:
            self.event_bus.publish(event_type, **data)

    def apply_battle_result(
        self,
        character: Character,
        xp: int,
        credits: int = 0,
        description: str = "",
    ) -> tuple[Character, LevelUpResult]:
        """
        Award XP and credits.

        Args:
            character: Character before the battle
            xp: XP gained
            credits: Credits gained
            description: What was fought, for the journal

        Returns:
            The updated character and the level-up outcome

        Raises:
            ValueError: if xp is negative
        """
        result = apply_xp_gain(character.level, character.xp, xp, self.config)

        updated = character.clone()
        updated.xp = result.xp
        updated.level = result.new_level
        updated.credits += credits

        if description:
            updated.journal.insert(0, f"{description}: +{xp} XP, +{credits} Credits")

        if result.leveled_up:
            entry = f"Reached Lvl {result.new_level}"
            if result.unlocks:
                entry += f" ({', '.join(result.unlocks)})"
            updated.journal.insert(0, entry)
            logger.info(
                f"{character.name or 'character'} leveled up {result.old_level} -> {result.new_level}: "
                f"+{result.attribute_points} attribute, +{result.ability_points} ability points"
            )
            self._publish(ProgressionEvent.LEVEL_UP, character=updated, result=result)

        return updated, result

    def summary(self, character: Character) -> CharacterSummary:
        catalog = self.catalog_repository.snapshot()

        class_bonuses = track_bonuses(character, Track.CLASS, catalog)
        profession_bonuses = track_bonuses(character, Track.PROFESSION, catalog)
        effective = effective_attributes(character, catalog, class_bonuses + profession_bonuses)

        return CharacterSummary(
            level=character.level,
            xp=xp_progress(character.level, character.xp, self.config),
            cumulative=cumulative_points(character.level),
            available_attribute_points=available_attribute_points(character),
            available_ability_points=available_ability_points(character, self.config),
            class_bonuses=class_bonuses,
            profession_bonuses=profession_bonuses,
            effective=effective,
            cooldown_reduction=cooldown_reduction_fraction(effective.MEM, self.config),
            duration_extension=duration_extension_fraction(effective.INT, self.config),
            unlocks={track: evaluate_tier_unlock(character, track, catalog) for track in Track},
        )

    def select(self, character: Character, track: Track, definition: ProgressionDefinition) -> Character:
        """
        Choose a class or profession offered by the track's unlock state.

        Raises:
            ValueError: if definition is not currently on offer
        """
        catalog = self.catalog_repository.snapshot()
        state = evaluate_tier_unlock(character, track, catalog)
        updated, resolved = select_candidate(character, state, definition, catalog, self.config)

        if resolved.status is UnlockStatus.RESOLVED:
            self._publish(_SELECTION_EVENTS[track], character=updated, definition=definition, state=resolved)
        return updated

    def bank(self, character: Character) -> Character:
        """Fold accrued bonuses into the base attributes."""
        catalog = self.catalog_repository.snapshot()
        updated = bank_bonuses(character, catalog)
        self._publish(
            ProgressionEvent.BONUSES_BANKED,
            character=updated,
            attributes=updated.base_stats.as_dict(),
        )
        return updated
