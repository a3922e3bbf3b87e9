"""Facet definitions and the mutable filter state of one search session."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, Mapping, Union

from .text import normalize


class UnknownFacetError(ValueError):
    """Raised when a facet key outside ingredient/appliance/utensil is used."""

    def __init__(self, facet: object) -> None:
        super().__init__(f"Unknown facet: {facet!r}")
        self.facet = facet


class Facet(str, Enum):
    INGREDIENT = "ingredient"
    APPLIANCE = "appliance"
    UTENSIL = "utensil"

    @classmethod
    def parse(cls, value: Union["Facet", str]) -> "Facet":
        """Resolve a facet key, accepting the French aliases used by the UI."""

        if isinstance(value, Facet):
            return value
        if not isinstance(value, str):
            raise UnknownFacetError(value)
        key = value.strip().lower()
        try:
            return _FACET_ALIASES[key]
        except KeyError:
            raise UnknownFacetError(value) from None


_FACET_ALIASES: Mapping[str, Facet] = {
    "ingredient": Facet.INGREDIENT,
    "ingredients": Facet.INGREDIENT,
    "appliance": Facet.APPLIANCE,
    "appareil": Facet.APPLIANCE,
    "utensil": Facet.UTENSIL,
    "ustensil": Facet.UTENSIL,
    "ustensile": Facet.UTENSIL,
}

FACETS = (Facet.INGREDIENT, Facet.APPLIANCE, Facet.UTENSIL)


def _empty_tags() -> Dict[Facet, Dict[str, str]]:
    return {facet: {} for facet in FACETS}


@dataclass
class FilterState:
    """Current query and active tags.

    Tags are keyed by their normalized form so that ``"Pâtes"`` and
    ``"pates"`` count as the same selection; the value keeps the casing it
    was first selected with for display.
    """

    query: str = ""
    _tags: Dict[Facet, Dict[str, str]] = field(default_factory=_empty_tags, init=False, repr=False)

    def set_query(self, text: str | None) -> None:
        raw = text or ""
        self.query = raw if raw.strip() else ""

    def has_tag(self, facet: Union[Facet, str], value: str) -> bool:
        return normalize(value) in self._tags[Facet.parse(facet)]

    def add_tag(self, facet: Union[Facet, str], value: str) -> bool:
        """Insert *value*; return ``False`` when it was already active."""

        resolved = Facet.parse(facet)
        key = normalize(value)
        if not key or key in self._tags[resolved]:
            return False
        self._tags[resolved][key] = value.strip()
        return True

    def remove_tag(self, facet: Union[Facet, str], value: str) -> bool:
        resolved = Facet.parse(facet)
        return self._tags[resolved].pop(normalize(value), None) is not None

    def clear_tags(self) -> None:
        for tags in self._tags.values():
            tags.clear()

    def tags(self, facet: Union[Facet, str]) -> FrozenSet[str]:
        return frozenset(self._tags[Facet.parse(facet)].values())

    def tag_keys(self, facet: Union[Facet, str]) -> FrozenSet[str]:
        return frozenset(self._tags[Facet.parse(facet)])

    @property
    def active_tags(self) -> Dict[Facet, FrozenSet[str]]:
        return {facet: self.tags(facet) for facet in FACETS}

    def has_active_tags(self) -> bool:
        return any(self._tags[facet] for facet in FACETS)

