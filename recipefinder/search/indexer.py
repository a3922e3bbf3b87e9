"""Utilities for indexing recipes for full-text search."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Sequence

from recipefinder.models import Recipe
from recipefinder.text import normalize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchIndexEntry:
    """A recipe paired with its normalized full-text blob."""

    recipe: Recipe
    normalized_text: str

    @classmethod
    def from_recipe(cls, recipe: Recipe) -> "SearchIndexEntry":
        return cls(recipe=recipe, normalized_text=normalize(recipe.full_text))


def build_index(recipes: Iterable[Recipe]) -> List[SearchIndexEntry]:
    """Return one index entry per recipe, preserving catalogue order."""

    return [SearchIndexEntry.from_recipe(recipe) for recipe in recipes]


class RecipeSearchIndex:
    """Holds the catalogue and its search entries.

    The index is rebuilt wholesale whenever the catalogue changes; matchers
    only ever read from it.
    """

    def __init__(self, recipes: Iterable[Recipe] = ()) -> None:
        self._recipes: List[Recipe] = []
        self._entries: List[SearchIndexEntry] = []
        self.rebuild(recipes)

    def rebuild(self, recipes: Iterable[Recipe]) -> None:
        self._recipes = list(recipes)
        self._entries = build_index(self._recipes)
        logger.debug("Indexed %d recipes", len(self._entries))

    @property
    def recipes(self) -> Sequence[Recipe]:
        return tuple(self._recipes)

    @property
    def entries(self) -> Sequence[SearchIndexEntry]:
        return tuple(self._entries)

    def get(self, recipe_id: int) -> Optional[Recipe]:
        for recipe in self._recipes:
            if recipe.id == recipe_id:
                return recipe
        return None

    def __iter__(self) -> Iterator[SearchIndexEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
