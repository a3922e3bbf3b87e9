"""Domain models for the recipe catalogue."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Mapping, Optional, Tuple, Union

Quantity = Union[int, float, str]

IMAGE_BASE_PATH = "assets/recipes"


@dataclass(frozen=True)
class IngredientLine:
    """One ingredient entry of a recipe, as listed on the card."""

    ingredient: str
    quantity: Optional[Quantity] = None
    unit: Optional[str] = None

    @classmethod
    def from_raw(cls, raw: Mapping[str, object]) -> "IngredientLine":
        quantity = raw.get("quantity")
        unit = raw.get("unit")
        return cls(
            ingredient=str(raw.get("ingredient") or ""),
            quantity=quantity if isinstance(quantity, (int, float, str)) else None,
            unit=str(unit) if unit is not None else None,
        )

    @property
    def formatted_quantity(self) -> str:
        """Quantity immediately followed by its unit, e.g. ``400ml``."""

        quantity = "" if self.quantity is None else str(self.quantity)
        unit = self.unit or ""
        if not self.quantity and not unit:
            return ""
        return f"{quantity}{unit}"


@dataclass(frozen=True)
class FacetValue:
    """A facet value paired with the recipe that owns it."""

    recipe_id: int
    value: str


def unique_facet_values(recipe_id: int, values: Iterable[object]) -> Tuple[FacetValue, ...]:
    """Trim *values* and drop case-insensitive duplicates, keeping first casing."""

    seen = set()
    unique: List[FacetValue] = []
    for raw_value in values:
        if not raw_value:
            continue
        cleaned = str(raw_value).strip()
        key = cleaned.lower()
        if not cleaned or key in seen:
            continue
        seen.add(key)
        unique.append(FacetValue(recipe_id=recipe_id, value=cleaned))
    return tuple(unique)


@dataclass(frozen=True)
class Recipe:
    """Read-only view over one raw recipe record.

    Derived collections are computed once at construction and never change.
    """

    id: int
    name: str
    servings: Optional[int] = None
    time: Optional[int] = None
    description: str = ""
    appliance: Optional[str] = None
    image: Optional[str] = None
    ingredients: Tuple[IngredientLine, ...] = ()
    ustensils: Tuple[str, ...] = ()
    formatted_ingredients: Tuple[str, ...] = field(init=False, repr=False, compare=False)
    unique_ingredients: Tuple[FacetValue, ...] = field(init=False, repr=False, compare=False)
    unique_ustensils: Tuple[FacetValue, ...] = field(init=False, repr=False, compare=False)
    full_text: str = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "formatted_ingredients",
            tuple(line.formatted_quantity for line in self.ingredients),
        )
        object.__setattr__(
            self,
            "unique_ingredients",
            unique_facet_values(self.id, (line.ingredient for line in self.ingredients)),
        )
        object.__setattr__(
            self, "unique_ustensils", unique_facet_values(self.id, self.ustensils)
        )
        ingredients_text = " ".join(line.ingredient or "" for line in self.ingredients)
        object.__setattr__(
            self,
            "full_text",
            " ".join([self.name or "", self.description or "", ingredients_text]),
        )

    @classmethod
    def from_record(cls, record: Mapping[str, object]) -> "Recipe":
        """Build a recipe from a raw catalogue record."""

        raw_ingredients = record.get("ingredients")
        raw_ustensils = record.get("ustensils")
        ingredients = tuple(
            IngredientLine.from_raw(item)
            for item in (raw_ingredients if isinstance(raw_ingredients, list) else [])
            if isinstance(item, Mapping)
        )
        ustensils = tuple(
            str(item)
            for item in (raw_ustensils if isinstance(raw_ustensils, list) else [])
            if item is not None
        )
        return cls(
            id=int(record["id"]),  # type: ignore[arg-type]
            name=str(record.get("name") or ""),
            servings=_optional_int(record.get("servings")),
            time=_optional_int(record.get("time")),
            description=str(record.get("description") or ""),
            appliance=_optional_str(record.get("appliance")),
            image=_optional_str(record.get("image")),
            ingredients=ingredients,
            ustensils=ustensils,
        )

    @property
    def image_url(self) -> str:
        if not self.image:
            return ""
        return f"{IMAGE_BASE_PATH}/{self.image}"

    def ingredient_names(self) -> List[str]:
        return [entry.value for entry in self.unique_ingredients]

    def ustensil_names(self) -> List[str]:
        return [entry.value for entry in self.unique_ustensils]


def _optional_int(value: object) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None


def _optional_str(value: object) -> Optional[str]:
    if not value:
        return None
    return str(value)
