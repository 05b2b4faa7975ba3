"""
Character components - attributes, stat bonuses, progression history.
"""

from __future__ import annotations

from enum import Enum, auto
from typing import Iterator, Mapping, Optional

from pydantic import Field, field_validator, model_validator

from litcore.core.component import Component, register_component


class Attribute(Enum):
    """The six fixed character attributes."""
    STR = "STR"
    PER = "PER"
    DEX = "DEX"
    MEM = "MEM"
    INT = "INT"
    CHA = "CHA"

    @classmethod
    def parse(cls, key: str | Attribute) -> Attribute:
        if isinstance(key, Attribute):
            return key
        try:
            return cls(key.upper())
        except ValueError:
            raise ValueError(f"Unknown attribute: {key!r}") from None


class Track(Enum):
    """Independent progression tracks a character advances along."""
    CLASS = auto()
    PROFESSION = auto()


@register_component
class AttributeSet(Component):
    """
    One value per attribute.

    A character carries two of these: the editable `attributes` and the
    banked `base_stats`. Effective values add class/profession bonuses
    on top of `attributes`.
    """
    STR: int = Field(default=3, ge=1)
    PER: int = Field(default=3, ge=1)
    DEX: int = Field(default=3, ge=1)
    MEM: int = Field(default=3, ge=1)
    INT: int = Field(default=3, ge=1)
    CHA: int = Field(default=3, ge=1)

    @classmethod
    def uniform(cls, value: int) -> AttributeSet:
        return cls(**{attr.value: value for attr in Attribute})

    def get(self, attr: Attribute) -> int:
        return getattr(self, attr.value)

    def items(self) -> Iterator[tuple[Attribute, int]]:
        for attr in Attribute:
            yield attr, self.get(attr)

    def as_dict(self) -> dict[str, int]:
        return {attr.value: value for attr, value in self.items()}


@register_component
class StatBonuses(Component):
    """
    Signed per-attribute amounts, zero where unspecified.

    Used both for a definition's bonus-per-level-held table and for
    accrued bonus totals. Build partial tables with from_partial().
    """
    STR: int = 0
    PER: int = 0
    DEX: int = 0
    MEM: int = 0
    INT: int = 0
    CHA: int = 0

    @classmethod
    def from_partial(cls, values: Optional[Mapping[str | Attribute, int]] = None) -> StatBonuses:
        """
        Build from a partial mapping such as {"PER": 1}.

        Raises:
            ValueError: if a key is not an attribute
        """
        if not values:
            return cls()
        return cls(**{Attribute.parse(key).value: int(v) for key, v in values.items()})

    def get(self, attr: Attribute) -> int:
        return getattr(self, attr.value)

    def items(self) -> Iterator[tuple[Attribute, int]]:
        for attr in Attribute:
            yield attr, self.get(attr)

    def scaled(self, factor: int) -> StatBonuses:
        """Every amount multiplied by factor."""
        return StatBonuses(**{attr.value: value * factor for attr, value in self.items()})

    def __add__(self, other: StatBonuses) -> StatBonuses:
        return StatBonuses(**{attr.value: value + other.get(attr) for attr, value in self.items()})

    @property
    def is_zero(self) -> bool:
        return all(value == 0 for _, value in self.items())

    def nonzero(self) -> dict[str, int]:
        return {attr.value: value for attr, value in self.items() if value}


@register_component
class ProgressionInterval(Component):
    """
    A span of levels during which a class or profession was held.

    Attributes:
        entity_name: Name of the class/profession
        activated_at_level: Level at which it was selected
        deactivated_at_level: Level at which it was replaced, None while held
    """
    entity_name: str
    activated_at_level: int = Field(ge=1)
    deactivated_at_level: Optional[int] = None

    @model_validator(mode='after')
    def _check_order(self) -> ProgressionInterval:
        if self.deactivated_at_level is not None and self.deactivated_at_level < self.activated_at_level:
            raise ValueError(
                f"Interval for {self.entity_name} closes at {self.deactivated_at_level} "
                f"before opening at {self.activated_at_level}"
            )
        return self

    @property
    def is_open(self) -> bool:
        return self.deactivated_at_level is None


@register_component
class Character(Component):
    """
    Character progression record.

    Attributes:
        id: Persistence key, None until first saved
        name: Display name
        level: Current level
        xp: Lifetime XP, never decreases
        attributes: Editable attributes, banked values plus pending allocations
        base_stats: Banked attributes
        abilities: Ability name -> learned level
        class_history: Class intervals in selection order
        profession_history: Profession intervals in selection order
        current_class_id: Catalog id of the active class
        class_activated_at_level: Class bonus watermark
        current_profession_name: Active profession, None if none chosen
        profession_activated_at_level: Profession bonus watermark
        highest_tier_achieved: Highest class tier ever activated
        highest_profession_tier: Highest profession tier ever activated
        bonuses_banked_at_level: Level of the last banking, None if never
        banked_attribute_points: Manual allocations already folded into base
        journal: Progression log, newest first
    """
    id: Optional[int] = None
    name: str = ""
    level: int = Field(default=1, ge=1)
    xp: int = Field(default=0, ge=0)
    credits: int = 0
    attributes: AttributeSet = Field(default_factory=AttributeSet)
    base_stats: AttributeSet = Field(default_factory=AttributeSet)
    abilities: dict[str, int] = Field(default_factory=dict)
    class_history: list[ProgressionInterval] = Field(default_factory=list)
    profession_history: list[ProgressionInterval] = Field(default_factory=list)
    current_class_id: Optional[int] = None
    class_activated_at_level: int = Field(default=1, ge=1)
    current_profession_name: Optional[str] = None
    profession_activated_at_level: Optional[int] = None
    highest_tier_achieved: int = Field(default=1, ge=1)
    highest_profession_tier: int = Field(default=0, ge=0)
    bonuses_banked_at_level: Optional[int] = None
    banked_attribute_points: int = Field(default=0, ge=0)
    journal: list[str] = Field(default_factory=list)

    @field_validator('abilities')
    @classmethod
    def _check_ability_levels(cls, value: dict[str, int]) -> dict[str, int]:
        for name, level in value.items():
            if level < 1:
                raise ValueError(f"Ability {name} has level {level}, expected >= 1")
        return value

    @model_validator(mode='after')
    def _check_single_open_interval(self) -> Character:
        for track in Track:
            open_count = sum(1 for entry in self.history_for(track) if entry.is_open)
            if open_count > 1:
                raise ValueError(f"{track.name} history has {open_count} open intervals")
        return self

    def history_for(self, track: Track) -> list[ProgressionInterval]:
        if track is Track.CLASS:
            return self.class_history
        return self.profession_history

    def watermark_for(self, track: Track) -> Optional[int]:
        """Level from which the active entity's bonus accrues."""
        if track is Track.CLASS:
            return self.class_activated_at_level
        return self.profession_activated_at_level

    def open_interval(self, track: Track) -> Optional[ProgressionInterval]:
        for entry in self.history_for(track):
            if entry.is_open:
                return entry
        return None

    @property
    def has_profession(self) -> bool:
        return bool(self.current_profession_name)
