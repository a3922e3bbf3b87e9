"""Application service driving the recipe filter pipeline."""
from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass, field
import logging
import threading
from typing import Callable, Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple, Union

from .filter_options import FacetOptions, derive_available_options
from .filter_state import FACETS, Facet, FilterState
from .models import Recipe
from .search import RecipeSearchIndex, filter_by_appliance, filter_by_tags, search_by_query
from .search.matching import MIN_QUERY_LENGTH, ingredients_of, ustensils_of
from .text import normalize


logger = logging.getLogger(__name__)

NO_MATCH_TEMPLATE = (
    "Aucune recette ne contient '{query}' vous pouvez chercher "
    "«tarte aux pommes», «poisson», etc."
)
QUERY_TOO_SHORT_TEMPLATE = "Veuillez entrer au minimum {minimum} caractères pour la recherche"


@dataclass(frozen=True)
class NoMatches:
    """The pipeline returned nothing; active tags have been reset."""

    query: str

    @property
    def message(self) -> str:
        return NO_MATCH_TEMPLATE.format(query=self.query)


@dataclass(frozen=True)
class RecomputeResult:
    """Everything the presentation layer needs after a state change."""

    matches: Tuple[Recipe, ...]
    options: FacetOptions
    query: str = ""
    active_tags: Mapping[Facet, FrozenSet[str]] = field(default_factory=dict)
    error: Optional[NoMatches] = None
    query_hint: Optional[str] = None

    @property
    def count(self) -> int:
        return len(self.matches)

    @property
    def count_label(self) -> str:
        label = "recettes" if self.count > 1 else "recette"
        return f"{self.count} {label}"

    @property
    def has_matches(self) -> bool:
        return self.error is None

    def sorted_options(self, facet: Union[Facet, str]) -> List[str]:
        return self.options.sorted(facet)


Listener = Callable[[RecomputeResult], None]


class RecipeFilterController:
    """Owns the filter state of one session and recomputes on every change.

    Commands run synchronously to completion; each one that changes the
    state recomputes the matches and notifies the subscribed listeners.
    """

    def __init__(
        self,
        index: RecipeSearchIndex,
        state: Optional[FilterState] = None,
        min_query_length: int = MIN_QUERY_LENGTH,
    ) -> None:
        self._index = index
        self._state = state or FilterState()
        self._min_query_length = min_query_length
        self._listeners: List[Listener] = []
        self.last_result: Optional[RecomputeResult] = None

    @classmethod
    def from_records(
        cls, records: Iterable[Mapping[str, object]], **kwargs: object
    ) -> "RecipeFilterController":
        index = RecipeSearchIndex(Recipe.from_record(record) for record in records)
        return cls(index, **kwargs)  # type: ignore[arg-type]

    @property
    def index(self) -> RecipeSearchIndex:
        return self._index

    @property
    def state(self) -> FilterState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register *listener*; the returned callable unsubscribes it."""

        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set_query(self, text: Optional[str]) -> RecomputeResult:
        self._state.set_query(text)
        return self.recompute()

    def add_tag(self, facet: Union[Facet, str], value: str) -> Optional[RecomputeResult]:
        """Activate a tag; return ``None`` without recomputing if already active."""

        if not self._state.add_tag(facet, value):
            logger.debug("Tag %r already active on %s; ignoring", value, facet)
            return None
        return self.recompute()

    def remove_tag(self, facet: Union[Facet, str], value: str) -> RecomputeResult:
        self._state.remove_tag(facet, value)
        return self.recompute()

    def clear_tags(self) -> RecomputeResult:
        self._state.clear_tags()
        return self.recompute()

    def reset(self) -> RecomputeResult:
        self._state.set_query("")
        self._state.clear_tags()
        return self.recompute()

    def recompute(self) -> RecomputeResult:
        state = self._state
        result: List[Recipe] = list(self._index.recipes)

        if state.query:
            result = search_by_query(self._index, state.query, self._min_query_length)

        ingredient_tags = state.tags(Facet.INGREDIENT)
        if ingredient_tags:
            result = filter_by_tags(result, ingredient_tags, ingredients_of)

        appliance_tags = state.tags(Facet.APPLIANCE)
        if appliance_tags:
            result = filter_by_appliance(result, appliance_tags)

        ustensil_tags = state.tags(Facet.UTENSIL)
        if ustensil_tags:
            result = filter_by_tags(result, ustensil_tags, ustensils_of)

        error: Optional[NoMatches] = None
        if not result:
            if state.has_active_tags():
                logger.info("No recipe matches query %r with active tags; clearing tags", state.query)
            state.clear_tags()
            error = NoMatches(query=state.query)
            options = derive_available_options(self._index.recipes)
        else:
            options = derive_available_options(result, self._active_tag_keys())

        outcome = RecomputeResult(
            matches=tuple(result),
            options=options,
            query=state.query,
            active_tags=state.active_tags,
            error=error,
            query_hint=self._query_hint(state.query),
        )
        self.last_result = outcome
        self._notify(outcome)
        return outcome

    def _active_tag_keys(self) -> Dict[Facet, FrozenSet[str]]:
        return {facet: self._state.tag_keys(facet) for facet in FACETS}

    def _query_hint(self, query: str) -> Optional[str]:
        length = len(normalize(query))
        if 0 < length < self._min_query_length:
            return QUERY_TOO_SHORT_TEMPLATE.format(minimum=self._min_query_length)
        return None

    def _notify(self, outcome: RecomputeResult) -> None:
        for listener in list(self._listeners):
            try:
                listener(outcome)
            except Exception:  # noqa: BLE001
                logger.exception("Recompute listener %r failed", listener)


class SessionRegistry:
    """One controller per browser session over a shared, read-only index.

    The least recently used session is dropped once ``max_sessions`` is
    exceeded. ``lock`` serialises commands coming from a threaded server.
    """

    def __init__(
        self,
        index: RecipeSearchIndex,
        min_query_length: int = MIN_QUERY_LENGTH,
        max_sessions: int = 1000,
    ) -> None:
        self._index = index
        self._min_query_length = min_query_length
        self._max_sessions = max_sessions
        self._controllers: "OrderedDict[str, RecipeFilterController]" = OrderedDict()
        self.lock = threading.RLock()

    @property
    def index(self) -> RecipeSearchIndex:
        return self._index

    def controller_for(self, session_id: str) -> RecipeFilterController:
        with self.lock:
            controller = self._controllers.get(session_id)
            if controller is not None:
                self._controllers.move_to_end(session_id)
                return controller

            controller = RecipeFilterController(
                self._index, min_query_length=self._min_query_length
            )
            controller.recompute()
            self._controllers[session_id] = controller
            if len(self._controllers) > self._max_sessions:
                evicted, _ = self._controllers.popitem(last=False)
                logger.debug("Dropped filter state of session %s", evicted)
            return controller

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._controllers

    def __len__(self) -> int:
        return len(self._controllers)
