"""Boolean matchers over the recipe index and recipe facets.

Matching is plain substring containment on normalized text: no ranking,
no tokenisation and no fuzziness. Every matcher preserves input order.
"""
from __future__ import annotations

from typing import Callable, Iterable, List, Sequence

from recipefinder.models import FacetValue, Recipe
from recipefinder.text import normalize

from .indexer import SearchIndexEntry

MIN_QUERY_LENGTH = 3

FacetExtractor = Callable[[Recipe], Iterable[FacetValue]]


def ingredients_of(recipe: Recipe) -> Iterable[FacetValue]:
    return recipe.unique_ingredients


def ustensils_of(recipe: Recipe) -> Iterable[FacetValue]:
    return recipe.unique_ustensils


def search_by_query(
    index: Iterable[SearchIndexEntry],
    query: str | None,
    min_length: int = MIN_QUERY_LENGTH,
) -> List[Recipe]:
    """Return the recipes whose normalized text contains *query*.

    A query shorter than ``min_length`` once normalized means "no filter":
    every indexed recipe is returned.
    """

    needle = normalize(query)
    if len(needle) < min_length:
        return [entry.recipe for entry in index]
    return [entry.recipe for entry in index if needle in entry.normalized_text]


def _normalized_tags(tags: Iterable[str]) -> List[str]:
    return [normalize(tag) for tag in tags]


def filter_by_tags(
    recipes: Sequence[Recipe],
    tags: Iterable[str],
    facet_extractor: FacetExtractor,
) -> List[Recipe]:
    """Keep recipes having, for every tag, a facet value containing it."""

    normalized_tags = _normalized_tags(tags)
    if not normalized_tags:
        return list(recipes)

    matches: List[Recipe] = []
    for recipe in recipes:
        values = [normalize(entry.value) for entry in facet_extractor(recipe)]
        if all(any(tag in value for value in values) for tag in normalized_tags):
            matches.append(recipe)
    return matches


def filter_by_appliance(recipes: Sequence[Recipe], tags: Iterable[str]) -> List[Recipe]:
    """Single-valued variant of :func:`filter_by_tags` for the appliance."""

    normalized_tags = _normalized_tags(tags)
    if not normalized_tags:
        return list(recipes)
    return [
        recipe
        for recipe in recipes
        if all(tag in normalize(recipe.appliance) for tag in normalized_tags)
    ]
