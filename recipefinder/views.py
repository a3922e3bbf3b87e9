"""Flask JSON views exposing the filter commands to the browser."""
from __future__ import annotations

import secrets
from typing import Any, Dict, Mapping, Optional

from flask import Blueprint, jsonify, request, session

from .filter_options import narrow_options
from .filter_state import FACETS, Facet, UnknownFacetError
from .models import Recipe
from .service import RecipeFilterController, RecomputeResult, SessionRegistry

SESSION_ID_KEY = "recipe_session_id"


def _session_id() -> str:
    session_id = session.get(SESSION_ID_KEY)
    if not session_id:
        session_id = secrets.token_hex(16)
        session[SESSION_ID_KEY] = session_id
    return session_id


def register_routes(app: Any, registry: SessionRegistry) -> None:
    """Register the HTTP routes on *app*; each browser session gets its own filters."""

    api_blueprint = Blueprint("recipes_api", __name__, url_prefix="/api")
    lock = registry.lock

    def current_controller() -> RecipeFilterController:
        return registry.controller_for(_session_id())

    def current_result() -> RecomputeResult:
        controller = current_controller()
        return controller.last_result or controller.recompute()

    @api_blueprint.route("/state")
    def state() -> Any:
        with lock:
            return jsonify(_serialize_result(current_result()))

    @api_blueprint.route("/query", methods=["POST"])
    def set_query() -> Any:
        payload = _json_body()
        with lock:
            result = current_controller().set_query(str(payload.get("q") or ""))
            return jsonify(_serialize_result(result))

    @api_blueprint.route("/tags", methods=["POST"])
    def add_tag() -> Any:
        payload = _json_body()
        facet = Facet.parse(payload.get("facet", ""))
        value = str(payload.get("value") or "")
        with lock:
            result = current_controller().add_tag(facet, value) or current_result()
            return jsonify(_serialize_result(result))

    @api_blueprint.route("/tags", methods=["DELETE"])
    def remove_tag() -> Any:
        payload = _json_body()
        facet = Facet.parse(payload.get("facet", ""))
        value = str(payload.get("value") or "")
        with lock:
            result = current_controller().remove_tag(facet, value)
            return jsonify(_serialize_result(result))

    @api_blueprint.route("/tags/clear", methods=["POST"])
    def clear_tags() -> Any:
        with lock:
            return jsonify(_serialize_result(current_controller().clear_tags()))

    @api_blueprint.route("/options/<facet>")
    def facet_options(facet: str) -> Any:
        resolved = Facet.parse(facet)
        with lock:
            values = current_result().options.for_facet(resolved)
        return jsonify(
            {"facet": resolved.value, "options": narrow_options(values, request.args.get("q", ""))}
        )

    @api_blueprint.route("/recipes/<int:recipe_id>")
    def recipe_detail(recipe_id: int) -> Any:
        recipe = registry.index.get(recipe_id)
        if recipe is None:
            return jsonify({"error": "Recipe not found"}), 404
        return jsonify(_serialize_recipe(recipe))

    @api_blueprint.errorhandler(UnknownFacetError)
    def unknown_facet(error: UnknownFacetError) -> Any:
        return jsonify({"error": str(error)}), 400

    app.register_blueprint(api_blueprint)


def _json_body() -> Mapping[str, Any]:
    payload: Optional[Any] = request.get_json(silent=True)
    if isinstance(payload, Mapping):
        return payload
    return request.form


def _serialize_recipe(recipe: Recipe) -> Dict[str, Any]:
    return {
        "id": recipe.id,
        "name": recipe.name,
        "servings": recipe.servings,
        "time": recipe.time,
        "description": recipe.description,
        "appliance": recipe.appliance,
        "image": recipe.image,
        "imageUrl": recipe.image_url,
        "ingredients": [
            {"ingredient": line.ingredient, "quantity": formatted}
            for line, formatted in zip(recipe.ingredients, recipe.formatted_ingredients)
        ],
        "ustensils": list(recipe.ustensils),
    }


def _serialize_result(result: RecomputeResult) -> Dict[str, Any]:
    return {
        "query": result.query,
        "count": result.count,
        "countLabel": result.count_label,
        "recipes": [_serialize_recipe(recipe) for recipe in result.matches],
        "options": result.options.as_dict(),
        "activeTags": {
            facet.value: sorted(result.active_tags.get(facet, ())) for facet in FACETS
        },
        "error": result.error.message if result.error else None,
        "hint": result.query_hint,
    }
