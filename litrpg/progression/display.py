"""
Attribute-driven display scaling.

MEM shortens cooldowns with diminishing returns,
    cdr = MEM / (MEM + mem_cdr_factor),
which is 50% at MEM == mem_cdr_factor and never reaches 100%.
INT lengthens durations linearly, int_duration_factor per point.

Both take effective attributes (base plus accrued bonuses).
"""

from __future__ import annotations

from dataclasses import replace
from typing import Optional

from litrpg.catalog.definitions import AbilityTier
from litrpg.components.character import Attribute, AttributeSet
from litrpg.config import ProgressionConfig, resolve_config
from litrpg.progression.duration import scale_duration


def cooldown_reduction_fraction(mem: int, config: Optional[ProgressionConfig] = None) -> float:
    factor = resolve_config(config).mem_cdr_factor
    if mem <= 0:
        return 0.0
    return mem / (mem + factor)


def duration_extension_fraction(int_: int, config: Optional[ProgressionConfig] = None) -> float:
    return int_ * resolve_config(config).int_duration_factor


def apply_cooldown_reduction(
    base_cooldown: Optional[str],
    mem: int,
    config: Optional[ProgressionConfig] = None,
) -> Optional[str]:
    """Cooldown as displayed for a character with this MEM."""
    return scale_duration(base_cooldown, 1 - cooldown_reduction_fraction(mem, config), precise=True)


def apply_duration_extension(
    base_duration: Optional[str],
    int_: int,
    config: Optional[ProgressionConfig] = None,
) -> Optional[str]:
    """Duration as displayed for a character with this INT."""
    return scale_duration(base_duration, 1 + duration_extension_fraction(int_, config), precise=True)


def scaled_tier(
    tier: AbilityTier,
    effective: AttributeSet,
    config: Optional[ProgressionConfig] = None,
) -> AbilityTier:
    return replace(
        tier,
        cooldown=apply_cooldown_reduction(tier.cooldown, effective.get(Attribute.MEM), config),
        duration=apply_duration_extension(tier.duration, effective.get(Attribute.INT), config),
    )
