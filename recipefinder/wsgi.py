"""WSGI entrypoint for running the recipe finder in production."""
from __future__ import annotations

from . import create_app
from .config import AppConfig, load_env_file

load_env_file()
app = create_app(AppConfig.from_env())


def get_app():
    """Return the configured Flask application."""

    return app
