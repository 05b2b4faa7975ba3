"""
Progression module - the character progression engine.

Provides:
- Duration codec (time strings <-> seconds)
- XP curve and level rewards
- Point ledger
- Tier unlock state machine
- Historical bonus accumulator and banking
- Ability tier generation and attribute-driven display scaling
- Ability retention and evolution
"""

from litrpg.progression.duration import (
    format_duration,
    is_sentinel,
    is_time_scalable,
    parse_duration,
    scale_duration,
    try_parse_duration,
)
from litrpg.progression.curve import (
    CumulativePoints,
    LevelRewards,
    LevelUpResult,
    XpProgress,
    apply_xp_gain,
    cumulative_points,
    level_for_xp,
    level_rewards,
    monster_credits,
    monster_xp,
    total_xp_for_level,
    xp_for_step,
    xp_progress,
)
from litrpg.progression.ledger import (
    PointLedger,
    available_ability_points,
    available_attribute_points,
    spent_ability_points,
    spent_attribute_points,
    tier_bonus_ability_points,
)
from litrpg.progression.tiers import (
    TierUnlockState,
    UnlockStatus,
    evaluate_tier_unlock,
    select_candidate,
    switch_entity,
)
from litrpg.progression.bonuses import (
    accrued_bonus,
    bank_bonuses,
    effective_attribute,
    effective_attributes,
    total_bonuses,
    track_bonuses,
)
from litrpg.progression.scaling import TierScalingConfig, generate_ability_tiers
from litrpg.progression.display import (
    apply_cooldown_reduction,
    apply_duration_extension,
    cooldown_reduction_fraction,
    duration_extension_fraction,
    scaled_tier,
)
from litrpg.progression.abilities import (
    combat_abilities,
    evolve_ability,
    professional_abilities,
    unlearned_abilities,
)

__all__ = [
    # Duration
    "format_duration",
    "is_sentinel",
    "is_time_scalable",
    "parse_duration",
    "scale_duration",
    "try_parse_duration",
    # Curve
    "CumulativePoints",
    "LevelRewards",
    "LevelUpResult",
    "XpProgress",
    "apply_xp_gain",
    "cumulative_points",
    "level_for_xp",
    "level_rewards",
    "monster_credits",
    "monster_xp",
    "total_xp_for_level",
    "xp_for_step",
    "xp_progress",
    # Ledger
    "PointLedger",
    "available_ability_points",
    "available_attribute_points",
    "spent_ability_points",
    "spent_attribute_points",
    "tier_bonus_ability_points",
    # Tiers
    "TierUnlockState",
    "UnlockStatus",
    "evaluate_tier_unlock",
    "select_candidate",
    "switch_entity",
    # Bonuses
    "accrued_bonus",
    "bank_bonuses",
    "effective_attribute",
    "effective_attributes",
    "total_bonuses",
    "track_bonuses",
    # Scaling
    "TierScalingConfig",
    "generate_ability_tiers",
    "apply_cooldown_reduction",
    "apply_duration_extension",
    "cooldown_reduction_fraction",
    "duration_extension_fraction",
    "scaled_tier",
    # Abilities
    "combat_abilities",
    "evolve_ability",
    "professional_abilities",
    "unlearned_abilities",
]
