"""Search data structures shared by the ranking core and the presentation layer."""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, NamedTuple, Optional, Tuple, Union

from ..config import LANGUAGE_PATTERN
from ..constants import DEFAULT_LANGUAGE


def normalize_query(text: str) -> str:
    """Normalize raw query text for searching and cache identity."""
    return text.strip()


class CacheKey(NamedTuple):
    """Composite cache key."""

    language: str
    query: str


@dataclass(frozen=True)
class Query:
    """A trimmed, non-empty query in a given language."""

    text: str
    language: str = DEFAULT_LANGUAGE

    def __post_init__(self) -> None:
        text = normalize_query(self.text)
        if not text:
            raise ValueError("Query text must not be blank")
        language = self.language.lower()
        if not LANGUAGE_PATTERN.match(language):
            raise ValueError(f"Invalid language code: {self.language!r}")
        object.__setattr__(self, "text", text)
        object.__setattr__(self, "language", language)

    @property
    def key(self) -> CacheKey:
        return CacheKey(self.language, self.text)


@dataclass(frozen=True)
class SearchItem:
    """A full-text search hit."""

    title: str
    snippet: Optional[str] = None


@dataclass(frozen=True)
class PageData:
    """Lead extract of an article page."""

    title: str
    extract: Optional[str] = None
    missing: bool = False


@dataclass(frozen=True)
class SearchPayload:
    """Raw API data of one search, shared read-only within a search cycle."""

    search_items: Tuple[SearchItem, ...] = ()
    pages: Mapping[int, PageData] = field(default_factory=dict)
    titles: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "search_items", tuple(self.search_items))
        object.__setattr__(self, "titles", tuple(self.titles))
        object.__setattr__(self, "pages", MappingProxyType(dict(self.pages)))

    @property
    def is_empty(self) -> bool:
        """Whether neither the prefix nor the full-text search returned anything."""
        return not self.titles and not self.search_items

    def all_titles(self) -> List[str]:
        """Union of prefix and full-text titles, in discovery order."""
        seen = set()
        titles = []
        for title in list(self.titles) + [item.title for item in self.search_items]:
            if title not in seen:
                seen.add(title)
                titles.append(title)
        return titles


@dataclass(frozen=True)
class CandidateResult:
    """A scored search result."""

    title: str
    extract: Optional[str]
    score: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format for serialization."""
        return {"title": self.title, "extract": self.extract, "score": self.score}


@dataclass(frozen=True)
class Recommendation:
    """Closest suggestion to a query."""

    term: str
    distance: int


class SearchState(str, Enum):
    """Orchestrator states."""

    IDLE = "idle"
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    TIMED_OUT = "timed_out"
    FAILED = "failed"


@dataclass(frozen=True)
class ResultsView:
    """Ranked results of a successful search."""

    query: str
    language: str
    ranked_results: Tuple[CandidateResult, ...]
    timing: float
    exact_match: bool
    recommendation: Optional[str] = None

    @property
    def message_key(self) -> str:
        return "search_results_for" if self.exact_match else "search_results_similar"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": "results",
            "query": self.query,
            "language": self.language,
            "ranked_results": [r.to_dict() for r in self.ranked_results],
            "timing": self.timing,
            "exact_match": self.exact_match,
            "recommendation": self.recommendation,
        }


@dataclass(frozen=True)
class SuggestionsView:
    """No results, but close titles exist."""

    query: str
    language: str
    suggestions: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": "suggestions",
            "query": self.query,
            "language": self.language,
            "suggestions": list(self.suggestions),
        }


@dataclass(frozen=True)
class EmptyView:
    """No results and no suggestions."""

    query: str
    language: str

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": "empty", "query": self.query, "language": self.language}


@dataclass(frozen=True)
class TimedOutView:
    """The search did not complete in time."""

    query: str
    language: str

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": "timed_out", "query": self.query, "language": self.language}


@dataclass(frozen=True)
class FailedView:
    """The search failed; no error detail is exposed."""

    query: str
    language: str

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": "failed", "query": self.query, "language": self.language}


@dataclass(frozen=True)
class ClearedView:
    """Display reset after blank input."""

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": "cleared"}


ResultView = Union[
    ResultsView, SuggestionsView, EmptyView, TimedOutView, FailedView, ClearedView
]

__all__ = [
    "CacheKey",
    "CandidateResult",
    "ClearedView",
    "EmptyView",
    "FailedView",
    "PageData",
    "Query",
    "Recommendation",
    "ResultView",
    "ResultsView",
    "SearchItem",
    "SearchPayload",
    "SearchState",
    "SuggestionsView",
    "TimedOutView",
    "normalize_query",
]
