"""Facet option derivation for the ingredient, appliance and utensil lists."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, List, Mapping, MutableMapping, Sequence, Union

from .filter_state import FACETS, Facet
from .models import Recipe
from .text import normalize


@dataclass(frozen=True)
class FacetOptions:
    """Selectable values for each facet, already excluding active tags."""

    ingredients: FrozenSet[str] = frozenset()
    appliances: FrozenSet[str] = frozenset()
    ustensils: FrozenSet[str] = frozenset()

    def for_facet(self, facet: Union[Facet, str]) -> FrozenSet[str]:
        resolved = Facet.parse(facet)
        if resolved is Facet.INGREDIENT:
            return self.ingredients
        if resolved is Facet.APPLIANCE:
            return self.appliances
        return self.ustensils

    def sorted(self, facet: Union[Facet, str]) -> List[str]:
        return sort_options(self.for_facet(facet))

    def as_dict(self) -> Dict[str, List[str]]:
        return {facet.value: self.sorted(facet) for facet in FACETS}


def _collect(values: Iterable[str], into: MutableMapping[str, str]) -> None:
    for value in values:
        if not value:
            continue
        into.setdefault(normalize(value), value)


def _without_active(
    values: MutableMapping[str, str], active_keys: Iterable[str]
) -> FrozenSet[str]:
    excluded = set(active_keys)
    return frozenset(value for key, value in values.items() if key not in excluded)


def derive_available_options(
    recipes: Sequence[Recipe],
    active_tag_keys: Mapping[Facet, Iterable[str]] | None = None,
) -> FacetOptions:
    """Collect the distinct facet values present among *recipes*.

    ``active_tag_keys`` holds the normalized active tags per facet; matching
    values are left out so an active tag cannot be selected twice.
    """

    active = active_tag_keys or {}
    ingredients: Dict[str, str] = {}
    appliances: Dict[str, str] = {}
    ustensils: Dict[str, str] = {}
    for recipe in recipes:
        _collect(recipe.ingredient_names(), ingredients)
        if recipe.appliance:
            _collect([recipe.appliance], appliances)
        _collect(recipe.ustensil_names(), ustensils)

    return FacetOptions(
        ingredients=_without_active(ingredients, active.get(Facet.INGREDIENT, ())),
        appliances=_without_active(appliances, active.get(Facet.APPLIANCE, ())),
        ustensils=_without_active(ustensils, active.get(Facet.UTENSIL, ())),
    )


def sort_options(values: Iterable[str]) -> List[str]:
    """Sort values alphabetically the way a French reader expects.

    Accents and case are folded for the primary ordering so ``"Épinards"``
    sorts next to ``"epices"`` rather than after ``"z"``.
    """

    return sorted(values, key=lambda value: (normalize(value), value))


def narrow_options(values: Iterable[str], text: str | None) -> List[str]:
    """Return the sorted *values* whose normalized form contains *text*."""

    needle = normalize(text)
    return [value for value in sort_options(values) if needle in normalize(value)]


__all__ = [
    "FacetOptions",
    "derive_available_options",
    "narrow_options",
    "sort_options",
]
