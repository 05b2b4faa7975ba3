"""
Character persistence contract.

The progression system never loads or stores characters itself.
Callers hand it a character and persist what comes back through a
CharacterRepository.
"""

from __future__ import annotations

import itertools
import logging
from abc import ABC, abstractmethod
from typing import Optional

from litrpg.components.character import Character

logger = logging.getLogger(__name__)


class CharacterRepository(ABC):
    """Where characters live between calls."""

    @abstractmethod
    def load(self, character_id: int) -> Optional[Character]:
        """The stored character, None if there is none with that id."""

    @abstractmethod
    def save(self, character: Character) -> Character:
        """
        Store a character.

        Returns:
            The stored record; a character without id is assigned one
        """


class InMemoryCharacterRepository(CharacterRepository):
    """
    Repository held in a dict, for tools and tests.

    Stored records are copies, so later changes to the caller's
    character do not leak into the store.

    Usage:
        repo = InMemoryCharacterRepository()
        saved = repo.save(Character(name="Kira"))
        repo.load(saved.id)
    """

    def __init__(self):
        self._characters: dict[int, Character] = {}
        self._ids = itertools.count(1)

    def load(self, character_id: int) -> Optional[Character]:
        stored = self._characters.get(character_id)
        return stored.clone() if stored is not None else None

    def save(self, character: Character) -> Character:
        stored = character.clone()
        if stored.id is None:
            stored.id = next(self._ids)
            while stored.id in self._characters:
                stored.id = next(self._ids)
        self._characters[stored.id] = stored
        logger.debug(f"Saved character {stored.id} ({stored.name or 'unnamed'}) at level {stored.level}")
        return stored.clone()

    def delete(self, character_id: int) -> bool:
        return self._characters.pop(character_id, None) is not None

    def __len__(self) -> int:
        return len(self._characters)

    def __contains__(self, character_id: int) -> bool:
        return character_id in self._characters
