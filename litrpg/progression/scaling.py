"""
Ability tier generation from level-1 values and per-level scaling.

Durations and cooldowns compound: value * (1 + scaling) ** (level - 1).
Energy cost grows linearly: cost + scaling * (level - 1).

Example:
    generate_ability_tiers(TierScalingConfig(
        base_duration="15 sec", duration_scaling=0.3,
        base_cooldown="5 min", cooldown_scaling=-0.1,
        base_energy_cost=50, energy_cost_scaling=5,
        base_effect="Deals fire damage", max_level=3,
    ))
    # level 1: 15 sec, 5 min,         50
    # level 2: 20 sec, 4 min 30 sec,  55
    # level 3: 25 sec, 4 min 3 sec,   60
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from litrpg.catalog.definitions import AbilityTier
from litrpg.progression.duration import scale_duration
from litrpg.progression.numeric import round_half_up


@dataclass(frozen=True)
class TierScalingConfig:
    """
    Authoring input for a multi-level ability.

    A scaling left as None copies the base value unchanged to every level.
    """
    max_level: int
    base_duration: Optional[str] = None
    base_cooldown: Optional[str] = None
    base_energy_cost: Optional[float] = None
    base_effect: str = ""
    duration_scaling: Optional[float] = None
    cooldown_scaling: Optional[float] = None
    energy_cost_scaling: Optional[float] = None


def scale_time(base: Optional[str], scaling: Optional[float], level: int) -> Optional[str]:
    """Compounded time string for level; sentinels and free text pass through."""
    if not base or scaling is None:
        return base
    return scale_duration(base, (1 + scaling) ** (level - 1))


def scale_energy_cost(base: Optional[float], scaling: Optional[float], level: int) -> Optional[float]:
    if base is None or scaling is None:
        return base
    return round_half_up(base + scaling * (level - 1))


def generate_ability_tiers(config: TierScalingConfig) -> list[AbilityTier]:
    """One AbilityTier per level 1..max_level."""
    return [
        AbilityTier(
            level=level,
            duration=scale_time(config.base_duration, config.duration_scaling, level),
            cooldown=scale_time(config.base_cooldown, config.cooldown_scaling, level),
            energy_cost=scale_energy_cost(config.base_energy_cost, config.energy_cost_scaling, level),
            effect_description=config.base_effect,
        )
        for level in range(1, config.max_level + 1)
    ]
