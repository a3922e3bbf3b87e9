"""Configuration objects for the recipe finder."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .search.matching import MIN_QUERY_LENGTH

PROJECT_ROOT = Path(__file__).resolve().parents[1]


def _strtobool(value: str) -> bool:
    """Return ``True`` when *value* represents a truthy string."""

    return value.lower() in {"1", "true", "t", "yes", "y", "on"}


def load_env_file(path: str | Path | None = None, *, override: bool = False) -> bool:
    """Load variables from a ``.env`` file, defaulting to the project root."""

    dotenv_path = Path(path) if path is not None else PROJECT_ROOT / ".env"
    return load_dotenv(dotenv_path=dotenv_path, override=override)


@dataclass(frozen=True)
class CatalogConfig:
    """Location of the recipe catalogue."""

    path: Path = PROJECT_ROOT / "data" / "recipes.json"
    encoding: str = "utf-8"

    @classmethod
    def from_env(cls, prefix: str = "CATALOG_") -> "CatalogConfig":
        """Create a configuration from environment variables."""

        raw_path = os.getenv(f"{prefix}PATH")
        return cls(
            path=Path(raw_path) if raw_path else cls.path,
            encoding=os.getenv(f"{prefix}ENCODING", cls.encoding),
        )


@dataclass(frozen=True)
class SearchConfig:
    """Tuning for the query matcher."""

    min_query_length: int = MIN_QUERY_LENGTH

    @classmethod
    def from_env(cls, prefix: str = "SEARCH_") -> "SearchConfig":
        return cls(
            min_query_length=int(
                os.getenv(f"{prefix}MIN_QUERY_LENGTH", cls.min_query_length)
            ),
        )


@dataclass(frozen=True)
class AppConfig:
    """Top level application configuration."""

    catalog: CatalogConfig = CatalogConfig()
    search: SearchConfig = SearchConfig()
    debug: bool = False
    secret_key: str = "dev-secret-key"

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Create the configuration from environment variables."""

        return cls(
            catalog=CatalogConfig.from_env(),
            search=SearchConfig.from_env(),
            debug=_strtobool(os.getenv("DEBUG", "false")),
            secret_key=os.getenv("SECRET_KEY", cls.secret_key),
        )
