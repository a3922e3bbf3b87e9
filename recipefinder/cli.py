"""Command line interface for the recipe finder."""
from __future__ import annotations

import argparse
from dataclasses import replace
import json
import logging
import os
import sys
from pathlib import Path
from typing import Iterable, List, Optional, TextIO

from . import build_controller, create_app
from .config import AppConfig, load_env_file
from .filter_state import FACETS, Facet
from .service import RecipeFilterController, RecomputeResult

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[Iterable[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Filter the recipe catalogue")
    parser.add_argument(
        "--catalog",
        type=Path,
        default=None,
        help="Path to the recipes JSON file (defaults to CATALOG_PATH or data/recipes.json).",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (DEBUG, INFO, WARNING, ERROR).",
    )
    subparsers = parser.add_subparsers(dest="command")

    search = subparsers.add_parser("search", help="Run one query against the catalogue.")
    search.add_argument("--query", "-q", default="", help="Free-text query.")
    search.add_argument(
        "--ingredient",
        action="append",
        default=[],
        help="Ingredient tag; may be repeated.",
    )
    search.add_argument(
        "--appliance",
        action="append",
        default=[],
        help="Appliance tag; may be repeated.",
    )
    search.add_argument(
        "--utensil",
        action="append",
        default=[],
        help="Utensil tag; may be repeated.",
    )
    search.add_argument(
        "--json",
        action="store_true",
        help="Print the result as JSON instead of text.",
    )

    serve = subparsers.add_parser("serve", help="Run the JSON API.")
    serve.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve.add_argument(
        "--port",
        type=int,
        default=int(os.getenv("PORT", "8000")),
        help="Port to listen on.",
    )
    return parser.parse_args(argv)


def configure_logging(level: str) -> None:
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
    )


def _resolve_config(catalog: Optional[Path]) -> AppConfig:
    config = AppConfig.from_env()
    if catalog is None:
        return config
    return replace(config, catalog=replace(config.catalog, path=catalog))


def run_search(
    controller: RecipeFilterController,
    query: str,
    tags: Iterable[tuple[Facet, str]],
) -> RecomputeResult:
    """Set the query and every tag first, then recompute once.

    All tags are combined, so a combination nothing matches reports
    :class:`NoMatches` instead of dropping the tags applied so far.
    """

    state = controller.state
    state.set_query(query)
    for facet, value in tags:
        logger.debug("Applying %s tag %r", facet.value, value)
        state.add_tag(facet, value)
    return controller.recompute()


def format_result(result: RecomputeResult) -> str:
    lines: List[str] = []
    if result.query_hint:
        lines.append(result.query_hint)
    if result.error:
        lines.append(result.error.message)
    lines.append(result.count_label)
    for recipe in result.matches:
        appliance = f" [{recipe.appliance}]" if recipe.appliance else ""
        lines.append(f"  #{recipe.id} {recipe.name}{appliance}")
    for facet in FACETS:
        options = result.sorted_options(facet)
        lines.append(f"{facet.value}: {', '.join(options) if options else '-'}")
    return "\n".join(lines)


def _result_payload(result: RecomputeResult) -> dict:
    return {
        "query": result.query,
        "count": result.count,
        "recipes": [{"id": recipe.id, "name": recipe.name} for recipe in result.matches],
        "options": result.options.as_dict(),
        "error": result.error.message if result.error else None,
    }


def main(argv: Optional[Iterable[str]] = None, out: Optional[TextIO] = None) -> int:
    out = out or sys.stdout
    load_env_file()
    args = parse_args(argv)
    configure_logging(args.log_level)
    config = _resolve_config(args.catalog)

    if args.command == "serve":
        app = create_app(config)
        app.run(host=args.host, port=args.port)
        return 0

    controller = build_controller(config)
    if args.command != "search":
        result = controller.last_result or controller.recompute()
        print(format_result(result), file=out)
        return 0

    tags = (
        [(Facet.INGREDIENT, value) for value in args.ingredient]
        + [(Facet.APPLIANCE, value) for value in args.appliance]
        + [(Facet.UTENSIL, value) for value in args.utensil]
    )
    result = run_search(controller, args.query, tags)
    if args.json:
        print(json.dumps(_result_payload(result), ensure_ascii=False, indent=2), file=out)
    else:
        print(format_result(result), file=out)
    return 0 if result.error is None else 1


if __name__ == "__main__":
    sys.exit(main())
