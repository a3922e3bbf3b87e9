"""Data access for the recipe catalogue stored as JSON."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable, List, Mapping, Protocol, Sequence

from .config import CatalogConfig
from .models import Recipe

logger = logging.getLogger(__name__)


class CatalogError(ValueError):
    """Raised when the recipe catalogue cannot be turned into recipes."""


class RecipeRepository(Protocol):
    """Protocol describing catalogue sources."""

    def load(self) -> Sequence[Recipe]:
        ...


def _coerce_records(payload: object) -> List[Mapping[str, object]]:
    if isinstance(payload, Mapping):
        payload = payload.get("recipes")
    if not isinstance(payload, list):
        raise CatalogError("Recipe catalogue must be a list or an object with a 'recipes' list")
    records: List[Mapping[str, object]] = []
    for position, record in enumerate(payload):
        if not isinstance(record, Mapping):
            raise CatalogError(f"Catalogue entry {position} is not an object")
        records.append(record)
    return records


def parse_recipes(records: Iterable[Mapping[str, object]]) -> List[Recipe]:
    """Convert raw recipe records into :class:`Recipe` objects."""

    recipes: List[Recipe] = []
    seen_ids = set()
    for position, record in enumerate(records):
        if record.get("id") is None or not record.get("name"):
            raise CatalogError(f"Catalogue entry {position} needs an 'id' and a 'name'")
        try:
            recipe = Recipe.from_record(record)
        except (TypeError, ValueError) as exc:
            raise CatalogError(f"Catalogue entry {position} is invalid: {exc}") from exc
        if recipe.id in seen_ids:
            raise CatalogError(f"Duplicate recipe id {recipe.id}")
        seen_ids.add(recipe.id)
        recipes.append(recipe)
    return recipes


class JsonRecipeRepository(RecipeRepository):
    """Loads the read-only recipe catalogue from a JSON file."""

    def __init__(self, path: Path, encoding: str = "utf-8") -> None:
        self._path = Path(path)
        self._encoding = encoding

    @classmethod
    def from_config(cls, config: CatalogConfig) -> "JsonRecipeRepository":
        return cls(config.path, encoding=config.encoding)

    @property
    def path(self) -> Path:
        return self._path

    def load_records(self) -> List[Mapping[str, object]]:
        with self._path.open("r", encoding=self._encoding) as handle:
            try:
                payload = json.load(handle)
            except json.JSONDecodeError as exc:
                raise CatalogError(f"{self._path} is not valid JSON: {exc}") from exc
        return _coerce_records(payload)

    def load(self) -> Sequence[Recipe]:
        recipes = parse_recipes(self.load_records())
        logger.info("Loaded %d recipes from %s", len(recipes), self._path)
        return recipes


class InMemoryRecipeRepository(RecipeRepository):
    """Repository over records already held in memory."""

    def __init__(self, records: Iterable[Mapping[str, object]]) -> None:
        self._records = list(records)

    def load(self) -> Sequence[Recipe]:
        return parse_recipes(self._records)
