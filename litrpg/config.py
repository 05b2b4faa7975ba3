"""
Progression tuning constants.
"""

from __future__ import annotations

import json
from enum import Enum
from pathlib import Path
from typing import Any, Optional


class MonsterRank(Enum):
    """Monster ranks, scaling the XP a kill is worth."""
    TRASH = "Trash"
    REGULAR = "Regular"
    CHAMPION = "Champion"
    BOSS = "Boss"


DEFAULT_RANK_MULTIPLIERS: dict[MonsterRank, float] = {
    MonsterRank.TRASH: 0.01,
    MonsterRank.REGULAR: 0.03,
    MonsterRank.CHAMPION: 0.08,
    MonsterRank.BOSS: 0.15,
}


class ProgressionConfig:
    """Configuration for the progression engine."""

    def __init__(
        self,
        xp_base: int = 200,
        xp_multiplier: float = 1.15,
        credit_multiplier: float = 2.5,
        mem_cdr_factor: float = 200,
        int_duration_factor: float = 0.005,
        tier_upgrade_ability_bonus: int = 5,
        attribute_floor: int = 3,
        ability_floor: int = 0,
        starting_attribute: int = 3,
        monster_rank_multipliers: Optional[dict[MonsterRank, float]] = None,
    ):
        self.xp_base = xp_base
        self.xp_multiplier = xp_multiplier
        self.credit_multiplier = credit_multiplier
        # MEM value at which cooldown reduction reaches 50%
        self.mem_cdr_factor = mem_cdr_factor
        # Duration extension per INT point
        self.int_duration_factor = int_duration_factor
        self.tier_upgrade_ability_bonus = tier_upgrade_ability_bonus
        self.attribute_floor = attribute_floor
        self.ability_floor = ability_floor
        self.starting_attribute = starting_attribute
        self.monster_rank_multipliers = dict(DEFAULT_RANK_MULTIPLIERS)
        if monster_rank_multipliers:
            self.monster_rank_multipliers.update(monster_rank_multipliers)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ProgressionConfig:
        """
        Build a config from partial overrides.

        Rank multipliers may be keyed by rank value ("Boss") or name ("BOSS").

        Raises:
            ValueError: on unknown keys or ranks
        """
        known = {
            'xp_base', 'xp_multiplier', 'credit_multiplier', 'mem_cdr_factor',
            'int_duration_factor', 'tier_upgrade_ability_bonus', 'attribute_floor',
            'ability_floor', 'starting_attribute', 'monster_rank_multipliers',
        }
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {sorted(unknown)}")

        kwargs = dict(data)
        if 'monster_rank_multipliers' in kwargs:
            kwargs['monster_rank_multipliers'] = {
                _parse_rank(key): float(value)
                for key, value in kwargs['monster_rank_multipliers'].items()
            }
        return cls(**kwargs)

    @classmethod
    def from_file(cls, path: Path | str) -> ProgressionConfig:
        """Load overrides from a JSON file."""
        with open(path, 'r', encoding='utf-8') as f:
            return cls.from_dict(json.load(f))


def _parse_rank(key: str | MonsterRank) -> MonsterRank:
    if isinstance(key, MonsterRank):
        return key
    for rank in MonsterRank:
        if key in (rank.value, rank.name):
            return rank
    raise ValueError(f"Unknown monster rank: {key!r}")


DEFAULT_CONFIG = ProgressionConfig()


def resolve_config(config: Optional[ProgressionConfig]) -> ProgressionConfig:
    return config if config is not None else DEFAULT_CONFIG
