"""
Point ledger - attribute and ability points granted versus spent.

Granted points come from the level curve (plus a tier bonus for
abilities). Spent attribute points are the manual allocations above
the banked base, plus allocations already folded in by banking.
Spent ability points are the sum of learned ability levels.
"""

from __future__ import annotations

import logging
from typing import Optional

from litrpg.components.character import Attribute, AttributeSet, Character
from litrpg.config import ProgressionConfig, resolve_config
from litrpg.progression.curve import cumulative_points, total_xp_for_level

logger = logging.getLogger(__name__)


def spent_attribute_points(attrs: AttributeSet, base: AttributeSet) -> int:
    """Sum of positive differences attrs - base; lowering below base refunds nothing."""
    return sum(max(0, value - base.get(attr)) for attr, value in attrs.items())


def available_attribute_points(character: Character) -> int:
    granted = cumulative_points(character.level).attribute_points
    spent = spent_attribute_points(character.attributes, character.base_stats)
    return max(0, granted - character.banked_attribute_points - spent)


def tier_bonus_ability_points(highest_tier_achieved: int, config: Optional[ProgressionConfig] = None) -> int:
    """Extra ability points for each class tier reached beyond tier 1."""
    return max(0, (highest_tier_achieved - 1) * resolve_config(config).tier_upgrade_ability_bonus)


def spent_ability_points(abilities: dict[str, int]) -> int:
    return sum(abilities.values())


def total_ability_points(character: Character, config: Optional[ProgressionConfig] = None) -> int:
    return (
        cumulative_points(character.level).ability_points
        + tier_bonus_ability_points(character.highest_tier_achieved, config)
    )


def available_ability_points(character: Character, config: Optional[ProgressionConfig] = None) -> int:
    return max(0, total_ability_points(character, config) - spent_ability_points(character.abilities))


class PointLedger:
    """
    Mutating front for a caller-owned character.

    Every operation returns True when applied and False when rejected.
    Rejections are the normal way of saying "not allowed now" (no points
    left, value at its floor); nothing here raises for them.

    Usage:
        ledger = PointLedger(character)
        if ledger.increment_attribute(Attribute.MEM):
            ...
    """

    def __init__(self, character: Character, config: Optional[ProgressionConfig] = None):
        self.character = character
        self.config = resolve_config(config)

    @property
    def available_attribute_points(self) -> int:
        return available_attribute_points(self.character)

    @property
    def available_ability_points(self) -> int:
        return available_ability_points(self.character, self.config)

    def increment_attribute(self, attr: Attribute) -> bool:
        if self.available_attribute_points <= 0:
            logger.debug(f"Rejected +{attr.value}: no attribute points available")
            return False
        current = self.character.attributes.get(attr)
        setattr(self.character.attributes, attr.value, current + 1)
        return True

    def decrement_attribute(self, attr: Attribute) -> bool:
        """Refund one point; banked values are a floor too."""
        current = self.character.attributes.get(attr)
        floor = max(self.config.attribute_floor, self.character.base_stats.get(attr))
        if current <= floor:
            logger.debug(f"Rejected -{attr.value}: already at floor {floor}")
            return False
        setattr(self.character.attributes, attr.value, current - 1)
        return True

    def increment_ability(self, name: str, max_level: Optional[int] = None) -> bool:
        """
        Spend one ability point on name.

        Args:
            name: Ability name
            max_level: Cap from the ability definition, if known
        """
        current = self.character.abilities.get(name, 0)
        if self.available_ability_points <= 0:
            logger.debug(f"Rejected +{name}: no ability points available")
            return False
        if max_level is not None and current >= max_level:
            logger.debug(f"Rejected +{name}: already at max level {max_level}")
            return False
        self.character.abilities = {**self.character.abilities, name: current + 1}
        return True

    def decrement_ability(self, name: str) -> bool:
        """Refund one level; the ability is forgotten when it reaches 0."""
        current = self.character.abilities.get(name, 0)
        if current <= self.config.ability_floor:
            logger.debug(f"Rejected -{name}: not learned")
            return False
        abilities = dict(self.character.abilities)
        if current - 1 <= 0:
            del abilities[name]
        else:
            abilities[name] = current - 1
        self.character.abilities = abilities
        return True

    def install_ability(self, name: str) -> bool:
        """Learn an ability from an ability disk at level 1."""
        if name in self.character.abilities:
            return False
        self.character.abilities = {**self.character.abilities, name: 1}
        self.character.journal.insert(0, f"Installed Ability Disk: {name}")
        return True

    def set_level(self, level: int) -> bool:
        """
        Set the level directly (manual adjustment).

        The level is floored at 1. Raising it also raises xp to the new
        level's requirement; xp itself never goes down.
        """
        level = max(1, level)
        if level == self.character.level:
            return False
        required = total_xp_for_level(level, self.config)
        if level > self.character.level and self.character.xp < required:
            self.character.xp = required
        self.character.level = level
        return True
