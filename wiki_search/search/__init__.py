"""
Search Package for Wiki Search

Ranking and suggestion core:

- distance: Levenshtein edit distance
- cache: time- and size-bounded result cache
- scoring: rule-based relevance scores
- ranking: merge, deduplicate and rank API results
- suggestions: typo-tolerant title suggestions
- debounce: asyncio debouncing
- orchestrator: the debounced, timeout-bounded search pipeline
  (import from ``wiki_search.search.orchestrator``)
"""

from .cache import ResultCache
from .debounce import Debouncer
from .distance import edit_distance
from .ranking import Ranker
from .scoring import Scorer
from .search_models import (
    CacheKey,
    CandidateResult,
    ClearedView,
    EmptyView,
    FailedView,
    PageData,
    Query,
    Recommendation,
    ResultsView,
    ResultView,
    SearchItem,
    SearchPayload,
    SearchState,
    SuggestionsView,
    TimedOutView,
)
from .suggestions import SuggestionEngine

__all__ = [
    "CacheKey",
    "CandidateResult",
    "ClearedView",
    "Debouncer",
    "EmptyView",
    "FailedView",
    "PageData",
    "Query",
    "Ranker",
    "Recommendation",
    "ResultCache",
    "ResultView",
    "ResultsView",
    "Scorer",
    "SearchItem",
    "SearchPayload",
    "SearchState",
    "SuggestionEngine",
    "SuggestionsView",
    "TimedOutView",
    "edit_distance",
]
