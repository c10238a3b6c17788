"""Merging, deduplication and ranking of API search results."""

import logging
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from ..constants import DEFAULT_RESULT_LIMIT
from .scoring import Scorer, scorer as default_scorer
from .search_models import CandidateResult, PageData, SearchItem

logger = logging.getLogger(__name__)


class Ranker:
    """Ranks the union of prefix-search titles and full-text search hits.

    Prefix titles are processed first, so on equal scores they keep their
    place ahead of full-text hits (the sort is stable).
    """

    def __init__(
        self,
        scorer: Optional[Scorer] = None,
        max_results: int = DEFAULT_RESULT_LIMIT,
    ) -> None:
        """Initialize ranker.

        Args:
            scorer: Scorer used for every candidate
            max_results: Maximum number of results returned
        """
        self.scorer = scorer or default_scorer
        self.max_results = max_results

    def rank(
        self,
        search_items: Iterable[SearchItem],
        pages: Mapping[int, PageData],
        titles: Sequence[str],
        query: str,
    ) -> List[CandidateResult]:
        """Merge, deduplicate, score and sort results.

        Args:
            search_items: Full-text search hits
            pages: Page data keyed by page id
            titles: Prefix-search titles, in API order
            query: Search query

        Returns:
            At most ``max_results`` candidates, best first
        """
        pages_by_title = self._index_pages(pages)
        results: List[CandidateResult] = []
        seen = set()

        for title in titles:
            if title.lower() in seen:
                continue
            candidate = self._candidate(title, pages_by_title, query)
            if candidate is not None:
                results.append(candidate)
                seen.add(title.lower())

        for item in search_items:
            if item.title.lower() in seen:
                continue
            candidate = self._candidate(item.title, pages_by_title, query)
            if candidate is not None:
                results.append(candidate)
                seen.add(item.title.lower())

        results.sort(key=lambda r: r.score, reverse=True)
        logger.debug(f"Ranked {len(results)} candidates for {query!r}")
        return results[: self.max_results]

    def _candidate(
        self, title: str, pages_by_title: Dict[str, PageData], query: str
    ) -> Optional[CandidateResult]:
        page = pages_by_title.get(title)
        if page is None or page.missing:
            return None
        extract = page.extract or None
        return CandidateResult(
            title=title,
            extract=extract,
            score=self.scorer.score(title, extract, query),
        )

    @staticmethod
    def _index_pages(pages: Mapping[int, PageData]) -> Dict[str, PageData]:
        # First page wins when two ids carry the same title
        index: Dict[str, PageData] = {}
        for page in pages.values():
            index.setdefault(page.title, page)
        return index


# Default instance
ranker = Ranker()

__all__ = ["Ranker", "ranker"]
