"""
Systems module - logic that drives characters through progression.
"""

from litrpg.systems.progression import (
    CharacterSummary,
    ProgressionEvent,
    ProgressionSystem,
)

__all__ = [
    "CharacterSummary",
    "ProgressionEvent",
    "ProgressionSystem",
]
