import io
import json

import pytest

from recipefinder import cli
from recipefinder.filter_state import Facet


@pytest.fixture
def catalog(tmp_path, records):
    path = tmp_path / "recipes.json"
    path.write_text(json.dumps(records, ensure_ascii=False), encoding="utf-8")
    return path


def _run(argv):
    out = io.StringIO()
    code = cli.main(argv, out=out)
    return code, out.getvalue()


def test_search_prints_matches_and_options(catalog) -> None:
    code, output = _run(["--catalog", str(catalog), "search", "--query", "citron"])

    assert code == 0
    assert "2 recettes" in output
    assert "#2 Poisson vapeur [Cuiseur]" in output
    assert "appliance: Casserole, Cuiseur" in output


def test_search_applies_tags_as_json(catalog) -> None:
    code, output = _run(
        [
            "--catalog",
            str(catalog),
            "search",
            "--ingredient",
            "citron",
            "--utensil",
            "râpe",
            "--json",
        ]
    )

    payload = json.loads(output)
    assert code == 0
    assert [recipe["id"] for recipe in payload["recipes"]] == [3]
    assert payload["error"] is None


def test_search_without_match_exits_non_zero(catalog) -> None:
    code, output = _run(["--catalog", str(catalog), "search", "-q", "chocolat"])

    assert code == 1
    assert "Aucune recette ne contient 'chocolat'" in output
    assert "0 recette" in output


def test_no_command_lists_catalogue(catalog) -> None:
    code, output = _run(["--catalog", str(catalog)])

    assert code == 0
    assert "3 recettes" in output


def test_run_search_applies_query_then_tags(controller) -> None:
    result = cli.run_search(controller, "pâtes", [(Facet.APPLIANCE, "casserole")])

    assert [recipe.id for recipe in result.matches] == [3]


def test_run_search_combines_every_tag_before_filtering(controller) -> None:
    result = cli.run_search(
        controller,
        "",
        [
            (Facet.INGREDIENT, "citron"),
            (Facet.APPLIANCE, "Four"),
            (Facet.UTENSIL, "couteau"),
        ],
    )

    assert result.matches == ()
    assert result.error is not None
    assert not controller.state.has_active_tags()


def test_search_with_conflicting_tags_exits_non_zero(catalog) -> None:
    code, output = _run(
        [
            "--catalog",
            str(catalog),
            "search",
            "--ingredient",
            "citron",
            "--appliance",
            "Four",
            "--utensil",
            "couteau",
        ]
    )

    assert code == 1
    assert "Aucune recette" in output
    assert "0 recette" in output
