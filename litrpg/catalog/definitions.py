"""
Reference definitions - classes, professions, abilities.

These come from the external catalog and are read-only to the engine.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from litrpg.components.character import StatBonuses

MAX_TIER = 6


def parse_tier(value: int | str) -> int:
    """
    Tier number from either 3 or "tier-3".

    Raises:
        ValueError: if the value carries no tier number in 1..MAX_TIER
    """
    if isinstance(value, int):
        tier = value
    else:
        text = str(value).strip().lower()
        if text.startswith("tier-"):
            text = text[len("tier-"):]
        try:
            tier = int(text)
        except ValueError:
            raise ValueError(f"Invalid tier: {value!r}") from None

    if not 1 <= tier <= MAX_TIER:
        raise ValueError(f"Tier {tier} outside 1..{MAX_TIER}")
    return tier


def tier_name(tier: int) -> str:
    """Display name for a tier number."""
    return f"Tier {tier}"


@dataclass(frozen=True)
class ProgressionDefinition:
    """A class or profession a character can hold."""
    id: int
    name: str
    tier: int = 1
    unlock_level: int = 1
    prerequisite_id: Optional[int] = None
    stat_bonuses: StatBonuses = field(default_factory=StatBonuses)
    ability_ids: frozenset[int] = frozenset()
    slug: str = ""
    description: str = ""

    @classmethod
    def from_record(cls, data: dict[str, Any]) -> ProgressionDefinition:
        """
        Parse a catalog record.

        Accepts both the class shape (prerequisite_class_id) and the
        profession shape (prerequisite_profession_id).
        """
        prerequisite = data.get('prerequisite_id')
        if prerequisite is None:
            prerequisite = data.get('prerequisite_class_id', data.get('prerequisite_profession_id'))

        return cls(
            id=data['id'],
            name=data['name'],
            tier=parse_tier(data.get('tier', 1)),
            unlock_level=data.get('unlock_level', 1),
            prerequisite_id=prerequisite,
            stat_bonuses=StatBonuses.from_partial(data.get('stat_bonuses')),
            ability_ids=frozenset(data.get('ability_ids', [])),
            slug=data.get('slug', ''),
            description=data.get('description', ''),
        )


@dataclass(frozen=True)
class AbilityTier:
    """Stats of an ability at one level."""
    level: int
    duration: Optional[str] = None
    cooldown: Optional[str] = None
    energy_cost: Optional[float] = None
    effect_description: str = ""


@dataclass(frozen=True)
class AbilityDefinition:
    """An ability with its per-level tiers."""
    id: int
    name: str
    max_level: int = 1
    evolution_id: Optional[int] = None
    tiers: tuple[AbilityTier, ...] = ()
    description: str = ""

    def tier_for(self, level: int) -> Optional[AbilityTier]:
        """Tier row for a learned level, None if the level has no row."""
        for tier in self.tiers:
            if tier.level == level:
                return tier
        return None

    @classmethod
    def from_record(cls, data: dict[str, Any]) -> AbilityDefinition:
        tiers = tuple(
            AbilityTier(
                level=tier.get('level', tier.get('tier_level', index + 1)),
                duration=tier.get('duration'),
                cooldown=tier.get('cooldown'),
                energy_cost=tier.get('energy_cost'),
                effect_description=tier.get('effect_description', ''),
            )
            for index, tier in enumerate(data.get('tiers', []))
        )
        return cls(
            id=data['id'],
            name=data['name'],
            max_level=data.get('max_level', 1),
            evolution_id=data.get('evolution_id', data.get('evolution_ability_id')),
            tiers=tuple(sorted(tiers, key=lambda t: t.level)),
            description=data.get('description', ''),
        )
