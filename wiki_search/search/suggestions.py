"""Typo-tolerant title suggestions."""

import logging
from typing import Iterable, List, Optional, Protocol

from ..constants import TYPO_TOLERANCE
from .distance import edit_distance
from .search_models import Recommendation

logger = logging.getLogger(__name__)


class TitleSource(Protocol):
    """Anything providing a title-prefix search."""

    async def opensearch(
        self, query: str, language: str, limit: Optional[int] = None
    ) -> List[str]:
        ...


class SuggestionEngine:
    """Suggests existing titles close to a (possibly misspelled) query."""

    def __init__(self, source: TitleSource, tolerance: int = TYPO_TOLERANCE) -> None:
        """Initialize suggestion engine.

        Args:
            source: Title-prefix search used for candidates
            tolerance: Maximum edit distance of a suggestion
        """
        self.source = source
        self.tolerance = tolerance

    async def suggest(self, query: str, language: str) -> List[str]:
        """Fetch candidate titles and keep the ones within tolerance.

        Args:
            query: Search query
            language: Wikipedia language code

        Returns:
            Suggestions in API order, possibly empty
        """
        candidates = await self.source.opensearch(query, language)
        suggestions = self.filter_candidates(candidates, query)
        logger.debug(
            f"{len(suggestions)} of {len(candidates)} candidates within "
            f"distance {self.tolerance} of {query!r}"
        )
        return suggestions

    def filter_candidates(self, titles: Iterable[str], query: str) -> List[str]:
        lower_query = query.lower()
        return [
            title
            for title in titles
            if edit_distance(title.lower(), lower_query) <= self.tolerance
        ]

    @staticmethod
    def closest_match(
        suggestions: Iterable[str], query: str
    ) -> Optional[Recommendation]:
        """Find the suggestion with the smallest edit distance.

        Ties go to the earliest suggestion.

        Args:
            suggestions: Candidate titles
            query: Search query

        Returns:
            Closest suggestion, or None when there are none
        """
        lower_query = query.lower()
        closest: Optional[Recommendation] = None
        for term in suggestions:
            distance = edit_distance(term.lower(), lower_query)
            if closest is None or distance < closest.distance:
                closest = Recommendation(term=term, distance=distance)
        return closest

    def recommend(self, suggestions: Iterable[str], query: str) -> Optional[str]:
        """Closest suggestion worth proposing as "did you mean".

        Args:
            suggestions: Candidate titles
            query: Search query

        Returns:
            Suggested term, or None when nothing is within tolerance
        """
        closest = self.closest_match(suggestions, query)
        if closest is None or closest.distance > self.tolerance:
            return None
        return closest.term


__all__ = ["SuggestionEngine", "TitleSource"]
