"""Relevance scoring of article titles against a query."""

import logging
from typing import Dict, Optional

from ..constants import SCORE_ADJUSTMENTS, TYPO_TOLERANCE
from .distance import edit_distance

logger = logging.getLogger(__name__)


class Scorer:
    """Additive, rule-based relevance scorer.

    An exact (case-insensitive) title match short-circuits to the top score.
    Otherwise these contributions add up:

    - title within ``typo_tolerance`` edits of the query: ``typo_base`` minus
      ``typo_penalty`` per edit
    - title starts with the query: ``prefix_match``
    - title contains the query: ``title_contains``
    - description contains the query: ``description_contains``
    - ``word_match`` for every query word found inside some title word; each
      query word counts once however many title words contain it
    """

    def __init__(
        self,
        adjustments: Optional[Dict[str, int]] = None,
        typo_tolerance: int = TYPO_TOLERANCE,
    ) -> None:
        """Initialize scorer.

        Args:
            adjustments: Overrides for the score adjustments
            typo_tolerance: Maximum edit distance still rewarded as a typo
        """
        self.adjustments = {**SCORE_ADJUSTMENTS, **(adjustments or {})}
        self.typo_tolerance = typo_tolerance

    def score(self, title: str, description: Optional[str], query: str) -> int:
        """Score a title/description pair against a query.

        Args:
            title: Article title
            description: Article extract, may be None
            query: Search query

        Returns:
            Relevance score, higher is better
        """
        lower_title = title.lower()
        lower_desc = (description or "").lower()
        lower_query = query.lower()
        adj = self.adjustments

        if lower_title == lower_query:
            return adj["exact_match"]

        score = 0

        distance = edit_distance(lower_title, lower_query)
        if distance <= self.typo_tolerance:
            score += adj["typo_base"] - distance * adj["typo_penalty"]
        if lower_title.startswith(lower_query):
            score += adj["prefix_match"]
        if lower_query in lower_title:
            score += adj["title_contains"]
        if lower_query in lower_desc:
            score += adj["description_contains"]

        title_words = lower_title.split()
        matched_words = sum(
            1
            for query_word in lower_query.split()
            if any(query_word in title_word for title_word in title_words)
        )
        score += matched_words * adj["word_match"]

        return score


# Default instance
scorer = Scorer()

__all__ = ["Scorer", "scorer"]
