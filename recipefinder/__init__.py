"""Flask application factory for filtering the recipe catalogue."""
from __future__ import annotations

import logging

from flask import Flask

from .config import AppConfig
from .repository import JsonRecipeRepository, RecipeRepository
from .search import RecipeSearchIndex
from .service import RecipeFilterController, SessionRegistry
from .views import register_routes

logger = logging.getLogger(__name__)


def build_controller(
    config: AppConfig, repository: RecipeRepository | None = None
) -> RecipeFilterController:
    """Load the catalogue, index it and return a fresh controller."""

    source = repository or JsonRecipeRepository.from_config(config.catalog)
    index = RecipeSearchIndex(source.load())
    controller = RecipeFilterController(
        index, min_query_length=config.search.min_query_length
    )
    controller.recompute()
    return controller


def create_app(
    config: AppConfig | None = None, repository: RecipeRepository | None = None
) -> Flask:
    """Create and configure the Flask application."""

    resolved_config = config or AppConfig.from_env()
    app = Flask(__name__)
    app.secret_key = resolved_config.secret_key
    app.config["SECRET_KEY"] = resolved_config.secret_key
    source = repository or JsonRecipeRepository.from_config(resolved_config.catalog)
    registry = SessionRegistry(
        RecipeSearchIndex(source.load()),
        min_query_length=resolved_config.search.min_query_length,
    )
    register_routes(app, registry)
    app.config["DEBUG"] = resolved_config.debug
    app.config["APP_CONFIG"] = resolved_config
    app.config["RECIPE_SESSIONS"] = registry
    logger.info("Serving %d recipes", len(registry.index))
    return app
