"""In-memory full-text index and facet matchers for recipes."""

from .indexer import RecipeSearchIndex, SearchIndexEntry, build_index
from .matching import filter_by_appliance, filter_by_tags, search_by_query

__all__ = [
    "RecipeSearchIndex",
    "SearchIndexEntry",
    "build_index",
    "filter_by_appliance",
    "filter_by_tags",
    "search_by_query",
]
