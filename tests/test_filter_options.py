from recipefinder.filter_options import (
    FacetOptions,
    derive_available_options,
    narrow_options,
    sort_options,
)
from recipefinder.filter_state import Facet
from recipefinder.models import Recipe


def test_collects_distinct_values_of_every_facet(recipes) -> None:
    options = derive_available_options(recipes)

    assert options.ingredients == {
        "Pâte brisée",
        "pomme",
        "Sucre",
        "poisson",
        "Citron",
        "Aneth",
        "Pâtes",
        "Oeuf",
    }
    assert options.appliances == {"Four", "Cuiseur", "Casserole"}
    assert options.ustensils == {
        "moule à tarte",
        "Économe",
        "couteau",
        "presse citron",
        "râpe à fromage",
    }


def test_excludes_active_tags_per_facet(recipes) -> None:
    options = derive_available_options(
        recipes,
        {Facet.INGREDIENT: {"citron"}, Facet.UTENSIL: {"couteau"}},
    )

    assert "Citron" not in options.ingredients
    assert "couteau" not in options.ustensils
    assert "Cuiseur" in options.appliances


def test_accent_variants_across_recipes_are_offered_once() -> None:
    recipes = [
        Recipe.from_record({"id": 1, "name": "Carbonara", "ingredients": [{"ingredient": "Pâtes"}]}),
        Recipe.from_record({"id": 2, "name": "Gratin", "ingredients": [{"ingredient": "pates"}]}),
    ]

    assert derive_available_options(recipes).ingredients == {"Pâtes"}
    assert derive_available_options(recipes, {Facet.INGREDIENT: {"pates"}}).ingredients == set()


def test_recipe_without_appliance_adds_no_option() -> None:
    recipe = Recipe.from_record({"id": 1, "name": "Eau"})

    assert derive_available_options([recipe]) == FacetOptions()


def test_sort_options_folds_accents_and_case() -> None:
    assert sort_options(["moule à tarte", "Économe", "couteau", "Zeste", "abricot"]) == [
        "abricot",
        "couteau",
        "Économe",
        "moule à tarte",
        "Zeste",
    ]


def test_narrow_options_filters_by_normalized_text() -> None:
    values = {"Crème fraîche", "Crème de coco", "Sucre", "Lait de coco"}

    assert narrow_options(values, "CREME") == ["Crème de coco", "Crème fraîche"]
    assert narrow_options(values, "") == [
        "Crème de coco",
        "Crème fraîche",
        "Lait de coco",
        "Sucre",
    ]
    assert narrow_options(values, "chocolat") == []


def test_for_facet_and_as_dict() -> None:
    options = FacetOptions(
        ingredients=frozenset({"Sucre", "Ail"}),
        appliances=frozenset({"Four"}),
        ustensils=frozenset(),
    )

    assert options.for_facet("appareil") == {"Four"}
    assert options.as_dict() == {
        "ingredient": ["Ail", "Sucre"],
        "appliance": ["Four"],
        "utensil": [],
    }
