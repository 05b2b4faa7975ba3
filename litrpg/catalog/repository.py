"""
Reference catalog access.

Providers fetch class, profession and ability definitions from
wherever they live. CatalogRepository wraps a provider with an
explicit cache (TTL and invalidate()) and hands out immutable
snapshots for the engine to compute against.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Iterable, Optional

from litcore.resources.database import Database
from litrpg.catalog.definitions import AbilityDefinition, ProgressionDefinition
from litrpg.components.character import Character, Track

logger = logging.getLogger(__name__)

SCHEMA_DIR = Path(__file__).parent / "schemas"


class CatalogProvider(ABC):
    """Source of reference definitions."""

    @abstractmethod
    def get_classes(self) -> list[ProgressionDefinition]:
        ...

    @abstractmethod
    def get_professions(self) -> list[ProgressionDefinition]:
        ...

    @abstractmethod
    def get_abilities(self) -> list[AbilityDefinition]:
        ...


class StaticCatalogProvider(CatalogProvider):
    """Provider over definitions held in memory (fixtures, constants)."""

    def __init__(
        self,
        classes: Iterable[ProgressionDefinition] = (),
        professions: Iterable[ProgressionDefinition] = (),
        abilities: Iterable[AbilityDefinition] = (),
    ):
        self._classes = list(classes)
        self._professions = list(professions)
        self._abilities = list(abilities)

    def get_classes(self) -> list[ProgressionDefinition]:
        return list(self._classes)

    def get_professions(self) -> list[ProgressionDefinition]:
        return list(self._professions)

    def get_abilities(self) -> list[AbilityDefinition]:
        return list(self._abilities)


class JsonCatalogProvider(CatalogProvider):
    """
    Provider reading schema-validated JSON records.

    Layout:
        <data_path>/database/classes/*.json
        <data_path>/database/professions/*.json
        <data_path>/database/abilities/*.json

    Every get_* call re-reads its category from disk; wrap the provider
    in a CatalogRepository to cache.
    """

    def __init__(self, data_path: Path | str, schema_path: Path | str | None = None):
        self._db = Database(
            data_path,
            categories={
                "classes": "class.schema.json",
                "professions": "class.schema.json",
                "abilities": "ability.schema.json",
            },
            schema_path=schema_path or SCHEMA_DIR,
        )

    def get_classes(self) -> list[ProgressionDefinition]:
        return self._parse("classes", ProgressionDefinition.from_record)

    def get_professions(self) -> list[ProgressionDefinition]:
        return self._parse("professions", ProgressionDefinition.from_record)

    def get_abilities(self) -> list[AbilityDefinition]:
        return self._parse("abilities", AbilityDefinition.from_record)

    def _parse(self, category: str, parse: Callable[[dict[str, Any]], Any]) -> list[Any]:
        parsed = []
        for record_id, record in self._db.load(category).items():
            try:
                parsed.append(parse(record))
            except (KeyError, ValueError) as e:
                logger.error(f"Skipping {category} record {record_id}: {e}")
        return parsed


@dataclass(frozen=True)
class CatalogSnapshot:
    """Immutable view of the catalog for the duration of a computation."""
    classes: tuple[ProgressionDefinition, ...] = ()
    professions: tuple[ProgressionDefinition, ...] = ()
    abilities: tuple[AbilityDefinition, ...] = ()

    def entries(self, track: Track) -> tuple[ProgressionDefinition, ...]:
        return self.classes if track is Track.CLASS else self.professions

    def find_by_id(self, track: Track, entity_id: Optional[int]) -> Optional[ProgressionDefinition]:
        if entity_id is None:
            return None
        for entry in self.entries(track):
            if entry.id == entity_id:
                return entry
        return None

    def find_by_name(self, track: Track, name: Optional[str]) -> Optional[ProgressionDefinition]:
        if not name:
            return None
        for entry in self.entries(track):
            if entry.name == name:
                return entry
        return None

    def current_entity(self, character: Character, track: Track) -> Optional[ProgressionDefinition]:
        """The class (by id) or profession (by name) the character holds."""
        if track is Track.CLASS:
            return self.find_by_id(track, character.current_class_id)
        return self.find_by_name(track, character.current_profession_name)

    def ability_by_id(self, ability_id: Optional[int]) -> Optional[AbilityDefinition]:
        if ability_id is None:
            return None
        for ability in self.abilities:
            if ability.id == ability_id:
                return ability
        return None

    def ability_by_name(self, name: str) -> Optional[AbilityDefinition]:
        for ability in self.abilities:
            if ability.name == name:
                return ability
        return None


class CatalogRepository:
    """
    Caching front for a CatalogProvider.

    Usage:
        repo = CatalogRepository(JsonCatalogProvider("data"), ttl=300)
        catalog = repo.snapshot()
        ...
        repo.invalidate()  # after the admin side edits reference data
    """

    def __init__(
        self,
        provider: CatalogProvider,
        ttl: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Args:
            provider: Where definitions come from
            ttl: Seconds a snapshot stays valid; None keeps it until invalidate()
            clock: Monotonic time source, injectable for tests
        """
        self._provider = provider
        self._ttl = ttl
        self._clock = clock
        self._snapshot: Optional[CatalogSnapshot] = None
        self._fetched_at = 0.0

    @property
    def is_cached(self) -> bool:
        return self._snapshot is not None and not self._expired()

    def snapshot(self) -> CatalogSnapshot:
        """Current snapshot, fetching from the provider when stale."""
        if self._snapshot is None or self._expired():
            self._snapshot = CatalogSnapshot(
                classes=tuple(self._provider.get_classes()),
                professions=tuple(self._provider.get_professions()),
                abilities=tuple(self._provider.get_abilities()),
            )
            self._fetched_at = self._clock()
            logger.info(
                f"Catalog fetched: {len(self._snapshot.classes)} classes, "
                f"{len(self._snapshot.professions)} professions, "
                f"{len(self._snapshot.abilities)} abilities"
            )
        return self._snapshot

    def invalidate(self) -> None:
        """Drop the cached snapshot; the next snapshot() refetches."""
        self._snapshot = None

    def _expired(self) -> bool:
        if self._ttl is None:
            return False
        return self._clock() - self._fetched_at >= self._ttl
