"""
Progression curve - XP requirements and per-level rewards.

XP grows exponentially: the step from level L to L+1 costs
round(xp_base * xp_multiplier ** (L - 1)). Rewards are milestone
based, so gains across several levels are the sum of each crossed
level's rewards, never an interpolation between endpoints.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from litrpg.config import MonsterRank, ProgressionConfig, resolve_config
from litrpg.progression.numeric import round_half_up

logger = logging.getLogger(__name__)

ADVANCED_CLASS_SELECTION = "Advanced Class Selection"
PROFESSION_CLASS_SELECTION = "Profession Class Selection"
COMBAT_CLASS_UPGRADE = "Combat Class Upgrade"


@dataclass(frozen=True)
class LevelRewards:
    """What reaching a single level grants."""
    attribute_points: int = 0
    ability_points: int = 0
    unlocks: tuple[str, ...] = ()


@dataclass(frozen=True)
class CumulativePoints:
    """Points granted by every level from 2 up to a level."""
    attribute_points: int = 0
    ability_points: int = 0


@dataclass
class LevelUpResult:
    """Outcome of an XP gain."""
    old_level: int
    new_level: int
    xp: int
    attribute_points: int = 0
    ability_points: int = 0
    unlocks: list[str] = field(default_factory=list)

    @property
    def levels_gained(self) -> int:
        return self.new_level - self.old_level

    @property
    def leveled_up(self) -> bool:
        return self.new_level > self.old_level


@dataclass(frozen=True)
class XpProgress:
    """Where a character sits inside its current level."""
    level_start: int
    next_level: int
    into_level: int
    required: int

    @property
    def percent(self) -> float:
        if self.required <= 0:
            return 100.0
        return min(100.0, max(0.0, self.into_level / self.required * 100))


def xp_for_step(level: int, config: Optional[ProgressionConfig] = None) -> int:
    """XP needed to go from level to level + 1; 0 for level < 1."""
    if level < 1:
        return 0
    config = resolve_config(config)
    return round_half_up(config.xp_base * config.xp_multiplier ** (level - 1))


def total_xp_for_level(target: int, config: Optional[ProgressionConfig] = None) -> int:
    """Cumulative XP required to reach target; 0 for target <= 1."""
    return sum(xp_for_step(level, config) for level in range(1, target))


def level_for_xp(xp: int, config: Optional[ProgressionConfig] = None) -> int:
    """Highest level whose cumulative requirement xp meets."""
    level = 1
    while xp >= total_xp_for_level(level + 1, config):
        level += 1
    return level


def level_rewards(level: int) -> LevelRewards:
    """
    Rewards for reaching level.

    Attribute points: 2 on ordinary levels from 2 to 31, 5 at 10 and 16,
    10 at 32, 4 on every level from 33. Ability points: 1 on every odd
    level above 1, plus 4 at 10, 5 at 16 and 5 at 32.
    """
    if level <= 1:
        return LevelRewards()

    unlocks: tuple[str, ...] = ()
    if level == 10:
        attribute = 5
        unlocks = (ADVANCED_CLASS_SELECTION,)
    elif level == 16:
        attribute = 5
        unlocks = (PROFESSION_CLASS_SELECTION,)
    elif level == 32:
        attribute = 10
        unlocks = (COMBAT_CLASS_UPGRADE,)
    elif level >= 33:
        attribute = 4
    else:
        attribute = 2

    ability = 1 if level % 2 == 1 else 0
    ability += {10: 4, 16: 5, 32: 5}.get(level, 0)

    return LevelRewards(attribute_points=attribute, ability_points=ability, unlocks=unlocks)


def cumulative_points(level: int) -> CumulativePoints:
    """Sum of level_rewards() for levels 2..level."""
    attribute = 0
    ability = 0
    for lvl in range(2, level + 1):
        rewards = level_rewards(lvl)
        attribute += rewards.attribute_points
        ability += rewards.ability_points
    return CumulativePoints(attribute_points=attribute, ability_points=ability)


def xp_progress(level: int, xp: int, config: Optional[ProgressionConfig] = None) -> XpProgress:
    start = total_xp_for_level(level, config)
    end = total_xp_for_level(level + 1, config)
    return XpProgress(
        level_start=start,
        next_level=end,
        into_level=xp - start,
        required=end - start,
    )


def apply_xp_gain(
    level: int,
    xp: int,
    amount: int,
    config: Optional[ProgressionConfig] = None,
) -> LevelUpResult:
    """
    Add XP and advance one level at a time while the next threshold is met.

    Args:
        level: Level before the gain
        xp: Lifetime XP before the gain
        amount: XP gained

    Returns:
        The new level and xp with the rewards of every crossed level

    Raises:
        ValueError: if amount is negative
    """
    if amount < 0:
        raise ValueError(f"XP gain must be non-negative, got {amount}")

    result = LevelUpResult(old_level=level, new_level=level, xp=xp + amount)
    while result.xp >= total_xp_for_level(result.new_level + 1, config):
        result.new_level += 1
        rewards = level_rewards(result.new_level)
        result.attribute_points += rewards.attribute_points
        result.ability_points += rewards.ability_points
        result.unlocks.extend(rewards.unlocks)

    if result.leveled_up:
        logger.debug(
            f"XP {xp} -> {result.xp}: level {level} -> {result.new_level} "
            f"(+{result.attribute_points} attr, +{result.ability_points} abil)"
        )
    return result


def monster_xp(level: int, rank: MonsterRank, config: Optional[ProgressionConfig] = None) -> int:
    """XP for defeating a monster: a rank-scaled share of the previous level step."""
    if level < 2:
        return 0
    config = resolve_config(config)
    return round_half_up(xp_for_step(level - 1, config) * config.monster_rank_multipliers[rank])


def monster_credits(xp: int, config: Optional[ProgressionConfig] = None) -> int:
    return round_half_up(xp * resolve_config(config).credit_multiplier)
