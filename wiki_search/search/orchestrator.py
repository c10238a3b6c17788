"""
Search Orchestrator for Wiki Search

This module ties the search core together. The orchestrator receives query changes on
its input port, debounces them, runs a cache-aware fetch raced against a hard timeout,
ranks the results, picks suggestions, and reports exactly one result view per completed
search cycle on its output port.

State machine:
    IDLE -> PENDING -> {SUCCEEDED, TIMED_OUT, FAILED} -> IDLE

Every call to ``on_query_changed`` or ``search`` takes a new request id. A cycle whose
id is no longer the latest is superseded: its response is dropped without touching the
cache or the display, and nothing is reported. Superseded fetches are not aborted;
they finish in the background and their results are ignored.

Example Usage:
    async with SearchOrchestrator(on_result=render) as orchestrator:
        orchestrator.on_query_changed("Albert Einst")
        orchestrator.on_query_changed("Albert Einstein")
        await orchestrator.wait_idle()  # render() was called once
"""

import asyncio
import logging
import time
from typing import Any, Callable, List, Optional, Tuple

from ..config import LANGUAGE_PATTERN, config as config_instance
from ..integrations.wikipedia_client import WikipediaClient
from ..monitoring.metrics import MetricsManager
from ..services.base import SearchSuperseded, SearchTimeout, ServiceException
from ..utils.preferences import LanguagePreference
from .cache import ResultCache
from .debounce import Debouncer
from .ranking import Ranker
from .search_models import (
    ClearedView,
    EmptyView,
    FailedView,
    Query,
    ResultView,
    ResultsView,
    SearchPayload,
    SearchState,
    SuggestionsView,
    TimedOutView,
    normalize_query,
)
from .suggestions import SuggestionEngine

logger = logging.getLogger(__name__)

ResultCallback = Callable[[ResultView], None]

OUTCOME_LABELS = {
    ResultsView: "results",
    SuggestionsView: "suggestions",
    EmptyView: "empty",
    TimedOutView: "timed_out",
    FailedView: "failed",
}


class SearchOrchestrator:
    """Debounced, cancellable, timeout-bounded search pipeline."""

    def __init__(
        self,
        client: Optional[WikipediaClient] = None,
        on_result: Optional[ResultCallback] = None,
        cache: Optional[ResultCache] = None,
        ranker: Optional[Ranker] = None,
        suggestion_engine: Optional[SuggestionEngine] = None,
        preferences: Optional[LanguagePreference] = None,
        language: Optional[str] = None,
        timeout: Optional[float] = None,
        debounce_delay: Optional[float] = None,
        config: Optional[Any] = None,
        metrics_manager: Optional[MetricsManager] = None,
    ) -> None:
        """Initialize orchestrator.

        Args:
            client: API client, also used as the suggestion source by default
            on_result: Output port receiving one view per completed cycle
            cache: Result cache
            ranker: Result ranker
            suggestion_engine: Suggestion engine
            preferences: Persisted language preference
            language: Initial language (defaults to the stored preference)
            timeout: Search cycle deadline in seconds
            debounce_delay: Quiet window in seconds
            config: Configuration instance
            metrics_manager: Metrics manager
        """
        self.config = config or config_instance
        self.timeout = self.config.search_timeout if timeout is None else timeout
        self.client = client or WikipediaClient(
            self.config, timeout=max(self.timeout, self.config.http_timeout)
        )
        self.on_result = on_result
        self.cache = cache or ResultCache(
            max_entries=self.config.cache_max_entries, ttl=self.config.cache_ttl
        )
        self.ranker = ranker or Ranker(max_results=self.config.result_limit)
        self.suggestion_engine = suggestion_engine or SuggestionEngine(
            self.client, tolerance=self.config.typo_tolerance
        )
        self.preferences = preferences
        self.metrics = metrics_manager or MetricsManager()

        if language is None:
            language = (
                preferences.load() if preferences is not None else self.config.default_language
            )
        self.language = language

        self._debouncer = Debouncer(
            self._run_cycle,
            wait=self.config.debounce_delay if debounce_delay is None else debounce_delay,
        )
        self._request_id = 0
        self.state = SearchState.IDLE
        self.last_outcome: Optional[SearchState] = None
        self.last_query: str = ""
        self.last_view: Optional[ResultView] = None
        self.suggestions: Tuple[str, ...] = ()
        self.selected_index = -1

    async def __aenter__(self) -> "SearchOrchestrator":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    @property
    def request_id(self) -> int:
        """Id of the latest request."""
        return self._request_id

    # Input port

    def on_query_changed(self, query: str, language: Optional[str] = None) -> None:
        """Handle a change of the query text.

        Blank queries reset the display immediately. Other queries are
        debounced; only the last one in the quiet window runs.

        Args:
            query: Raw query text
            language: Language code (defaults to the current language)
        """
        language = self._resolve_language(language)
        text = normalize_query(query)
        self._request_id += 1
        self.last_query = text

        if not text:
            self._debouncer.cancel()
            self._reset()
            return

        self._debouncer(self._request_id, text, language)

    async def search(
        self, query: str, language: Optional[str] = None
    ) -> Optional[ResultView]:
        """Run one search cycle right away, without debouncing.

        Args:
            query: Raw query text
            language: Language code (defaults to the current language)

        Returns:
            The reported view, or None if a newer request superseded this one
        """
        language = self._resolve_language(language)
        text = normalize_query(query)
        self._request_id += 1
        self.last_query = text

        if not text:
            self._debouncer.cancel()
            return self._reset()

        return await self._run_cycle(self._request_id, text, language)

    def select_suggestion(self, suggestion: str) -> None:
        """Search for a suggestion picked by the user."""
        self.on_query_changed(suggestion)

    def retry(self) -> None:
        """Run the last query again."""
        if self.last_query:
            self.on_query_changed(self.last_query)

    def clear(self) -> None:
        """Clear the query and the display."""
        self.on_query_changed("")

    def set_language(self, language: str) -> None:
        """Switch language, persist it, and re-run the current query.

        Args:
            language: Two-letter language code

        Raises:
            ValueError: If the language code is invalid
        """
        language = language.strip().lower()
        if not LANGUAGE_PATTERN.match(language):
            raise ValueError(f"Invalid language code: {language!r}")

        self.language = language
        if self.preferences is not None:
            self.preferences.save(language)
        logger.info(f"Language set to {language}")

        if self.last_query:
            self.on_query_changed(self.last_query)

    def move_selection(self, step: int) -> int:
        """Move the highlighted suggestion.

        Args:
            step: +1 for down, -1 for up

        Returns:
            New index, -1 meaning nothing is highlighted
        """
        if not self.suggestions:
            return self.selected_index
        self.selected_index = max(-1, min(self.selected_index + step, len(self.suggestions) - 1))
        return self.selected_index

    def accept_selection(self) -> Optional[str]:
        """Search for the highlighted suggestion.

        Returns:
            The selected suggestion, or None when nothing is highlighted
        """
        if not 0 <= self.selected_index < len(self.suggestions):
            return None
        suggestion = self.suggestions[self.selected_index]
        self.select_suggestion(suggestion)
        return suggestion

    async def wait_idle(self) -> None:
        """Wait until no debounced search is scheduled or running."""
        await self._debouncer.wait_idle()

    async def aclose(self) -> None:
        """Drop scheduled searches and release the API client."""
        self._debouncer.cancel()
        await self.client.cleanup()

    # Search cycle

    async def _run_cycle(
        self, request_id: int, text: str, language: str
    ) -> Optional[ResultView]:
        try:
            view = await self._execute(request_id, Query(text, language))
        except SearchSuperseded as e:
            logger.debug(str(e))
            return None
        except Exception:
            if request_id == self._request_id:
                self._emit(self._finish(SearchState.FAILED, FailedView(text, language)))
            raise

        self._emit(view)
        return view

    async def _execute(self, request_id: int, query: Query) -> ResultView:
        self._set_state(SearchState.PENDING)
        start_time = time.perf_counter()

        fetch = asyncio.ensure_future(self._fetch(query))
        fetch.add_done_callback(_discard_abandoned)

        try:
            done, _ = await asyncio.wait({fetch}, timeout=self.timeout)
            self._ensure_current(request_id)
            if fetch not in done:
                raise SearchTimeout(self.timeout)
            payload, suggestions, from_cache = fetch.result()

        except SearchSuperseded:
            raise
        except SearchTimeout as e:
            logger.warning(f"{e} for {query.text!r}")
            return self._finish(SearchState.TIMED_OUT, TimedOutView(query.text, query.language))
        except ServiceException as e:
            logger.warning(f"Search for {query.text!r} failed: {e}")
            return self._finish(SearchState.FAILED, FailedView(query.text, query.language))

        timing = round(time.perf_counter() - start_time, 3)
        if not from_cache:
            self.cache.put(query.key, payload)
        self.metrics.observe_value("search_latency", timing)

        return self._finish(
            SearchState.SUCCEEDED,
            self._build_view(query, payload, suggestions, timing),
        )

    async def _fetch(self, query: Query) -> Tuple[SearchPayload, List[str], bool]:
        cached = self.cache.get(query.key)
        if cached is not None:
            self.metrics.increment_counter("cache_hits")
            suggestions = await self.suggestion_engine.suggest(query.text, query.language)
            return cached, suggestions, True

        self.metrics.increment_counter("cache_misses")
        payload, suggestions = await asyncio.gather(
            self.client.fetch_payload(query.text, query.language),
            self.suggestion_engine.suggest(query.text, query.language),
        )
        return payload, suggestions, False

    def _build_view(
        self,
        query: Query,
        payload: SearchPayload,
        suggestions: List[str],
        timing: float,
    ) -> ResultView:
        ranked = []
        if not payload.is_empty:
            ranked = self.ranker.rank(
                payload.search_items, payload.pages, payload.titles, query.text
            )

        if not ranked:
            if suggestions:
                return SuggestionsView(query.text, query.language, tuple(suggestions))
            return EmptyView(query.text, query.language)

        exact_match = _is_exact_match(payload, query.text)
        recommendation = None
        if not exact_match:
            recommendation = self.suggestion_engine.recommend(suggestions, query.text)

        return ResultsView(
            query=query.text,
            language=query.language,
            ranked_results=tuple(ranked),
            timing=timing,
            exact_match=exact_match,
            recommendation=recommendation,
        )

    def _finish(self, outcome: SearchState, view: ResultView) -> ResultView:
        self._set_state(outcome)
        self.last_outcome = outcome
        self.metrics.increment_counter(
            "searches_performed", labels={"outcome": OUTCOME_LABELS[type(view)]}
        )
        self._set_state(SearchState.IDLE)
        return view

    def _ensure_current(self, request_id: int) -> None:
        if request_id != self._request_id:
            raise SearchSuperseded(request_id, self._request_id)

    def _reset(self) -> ClearedView:
        self._set_state(SearchState.IDLE)
        view = ClearedView()
        self._emit(view)
        return view

    def _emit(self, view: ResultView) -> None:
        self.last_view = view
        self.suggestions = view.suggestions if isinstance(view, SuggestionsView) else ()
        self.selected_index = -1
        if self.on_result is not None:
            self.on_result(view)

    def _set_state(self, state: SearchState) -> None:
        if state != self.state:
            logger.debug(f"Search state {self.state.value} -> {state.value}")
            self.state = state

    def _resolve_language(self, language: Optional[str]) -> str:
        language = (language or self.language).lower()
        if not LANGUAGE_PATTERN.match(language):
            raise ValueError(f"Invalid language code: {language!r}")
        return language


def _is_exact_match(payload: SearchPayload, query: str) -> bool:
    lower_query = query.lower()
    return any(title.lower() == lower_query for title in payload.titles) or any(
        item.title.lower() == lower_query for item in payload.search_items
    )


def _discard_abandoned(task: asyncio.Future) -> None:
    if not task.cancelled() and task.exception() is not None:
        logger.debug(f"Abandoned search fetch failed: {task.exception()}")


__all__ = ["SearchOrchestrator", "ResultCallback"]
