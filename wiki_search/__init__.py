"""
Wiki Search - Typo-Tolerant Search Client for Wikipedia

This package provides an interactive search client for the Wikipedia (MediaWiki) API.
It does not index anything itself: retrieval is delegated to the remote API, and the
package merges, scores, ranks and caches what comes back, offering "did you mean"
suggestions when no exact match exists.

Key Features:
- Client-side ranking of prefix and full-text search results
- Levenshtein-based typo tolerance and closest-match recommendations
- Time- and size-bounded result caching keyed by (language, query)
- Debounced, cancellable search cycles with a hard timeout
- Localized terminal UI with a persisted language preference

Version: 1.0.0
License: MIT
"""

import logging
from importlib.metadata import version

__version__ = version("wiki-search")

logger = logging.getLogger(__name__)

__all__ = ["__version__"]
