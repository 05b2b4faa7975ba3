"""
Reference data database.

Loads static JSON records (one folder per category) and validates
each record against a JSON schema before accepting it.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import jsonschema

logger = logging.getLogger(__name__)


class Database:
    """
    Schema-validated reader of JSON records keyed by id.

    Layout on disk:
        <data_path>/database/<category>/*.json   records (object or list)
        <schema_path>/<name>.schema.json         schemas

    Records without a schema are not loaded.

    Usage:
        db = Database("data", categories={"classes": "class.schema.json"})
        classes = db.load("classes")
        classes[9]
    """

    def __init__(
        self,
        data_path: Path | str,
        categories: dict[str, str],
        schema_path: Path | str | None = None,
    ):
        self._data_path = Path(data_path)
        self._schema_path = Path(schema_path) if schema_path else self._data_path / "schemas"
        self._categories = dict(categories)
        self._schemas: dict[str, Any] = {}

    def load(self, category: str) -> dict[Any, dict[str, Any]]:
        """
        Read a single category from disk.

        Schemas are read on first use.

        Raises:
            KeyError: if the category was not configured
        """
        schema_name = self._categories[category]
        if not self._schemas:
            self._load_schemas()
        records = self._load_category(category, schema_name)
        logger.info(f"Loaded {len(records)} {category}.")
        return records

    def _load_schemas(self) -> None:
        self._schemas.clear()
        if not self._schema_path.exists():
            logger.warning(f"Schema directory not found: {self._schema_path}")
            return

        for schema_file in self._schema_path.glob("*.schema.json"):
            try:
                with open(schema_file, 'r', encoding='utf-8') as f:
                    self._schemas[schema_file.name] = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                logger.error(f"Failed to load schema {schema_file}: {e}")

    def _load_category(self, category: str, schema_name: str) -> dict[Any, dict[str, Any]]:
        category_dir = self._data_path / "database" / category
        store: dict[Any, dict[str, Any]] = {}

        if not category_dir.exists():
            logger.warning(f"Data directory not found: {category_dir}")
            return store

        schema = self._schemas.get(schema_name)
        if schema is None:
            logger.warning(f"No schema found for {category} ({schema_name})")
            return store

        for file_path in sorted(category_dir.glob("*.json")):
            try:
                with open(file_path, 'r', encoding='utf-8') as f:
                    data = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                logger.error(f"Failed to load {file_path}: {e}")
                continue

            entries = data if isinstance(data, list) else [data]
            for entry in entries:
                try:
                    jsonschema.validate(instance=entry, schema=schema)
                except jsonschema.ValidationError as e:
                    logger.error(f"Validation error in {file_path}: {e.message}")
                    continue
                if 'id' in entry:
                    store[entry['id']] = entry

        return store
