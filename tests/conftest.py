from __future__ import annotations

from typing import List

import pytest

from recipefinder.models import Recipe
from recipefinder.search import RecipeSearchIndex
from recipefinder.service import RecipeFilterController


TARTE = {
    "id": 1,
    "name": "Tarte aux pommes",
    "servings": 6,
    "time": 50,
    "description": "Disposer les pommes sur la pâte et enfourner.",
    "appliance": "Four",
    "image": "tarte.jpg",
    "ingredients": [
        {"ingredient": "Pâte brisée", "quantity": 1},
        {"ingredient": "pomme", "quantity": 3},
        {"ingredient": "Sucre", "quantity": 100, "unit": "grammes"},
    ],
    "ustensils": ["moule à tarte", "Économe"],
}

POISSON = {
    "id": 2,
    "name": "Poisson vapeur",
    "servings": 2,
    "time": 20,
    "description": "Cuire les filets à la vapeur avec du citron.",
    "appliance": "Cuiseur",
    "image": "poisson.jpg",
    "ingredients": [
        {"ingredient": "poisson", "quantity": 2, "unit": "filets"},
        {"ingredient": "Citron", "quantity": 1},
        {"ingredient": "Aneth"},
    ],
    "ustensils": ["couteau", "presse citron"],
}

CARBONARA = {
    "id": 3,
    "name": "Pâtes carbonara",
    "servings": 4,
    "time": 25,
    "description": "Lier les pâtes avec les oeufs hors du feu.",
    "appliance": "Casserole",
    "ingredients": [
        {"ingredient": "Pâtes", "quantity": 400, "unit": "grammes"},
        {"ingredient": "Oeuf", "quantity": 3},
        {"ingredient": "Citron"},
    ],
    "ustensils": ["Couteau", "râpe à fromage"],
}


@pytest.fixture
def records() -> List[dict]:
    return [dict(TARTE), dict(POISSON), dict(CARBONARA)]


@pytest.fixture
def recipes(records: List[dict]) -> List[Recipe]:
    return [Recipe.from_record(record) for record in records]


@pytest.fixture
def index(recipes: List[Recipe]) -> RecipeSearchIndex:
    return RecipeSearchIndex(recipes)


@pytest.fixture
def controller(index: RecipeSearchIndex) -> RecipeFilterController:
    return RecipeFilterController(index)


@pytest.fixture
def records_without_oven() -> List[dict]:
    return [dict(POISSON), dict(CARBONARA)]
