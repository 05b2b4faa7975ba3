"""
Save module - character persistence contract.
"""

from litrpg.save.repository import CharacterRepository, InMemoryCharacterRepository

__all__ = ["CharacterRepository", "InMemoryCharacterRepository"]
