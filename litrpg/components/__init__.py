"""
Progression components - data-only records.

All components are Pydantic models holding state only.
Rules live in litrpg.progression.
"""

from litrpg.components.character import (
    Attribute,
    AttributeSet,
    StatBonuses,
    Track,
    ProgressionInterval,
    Character,
)

__all__ = [
    "Attribute",
    "AttributeSet",
    "StatBonuses",
    "Track",
    "ProgressionInterval",
    "Character",
]
