"""Constants module for search ranking and API access."""

DEFAULT_LANGUAGE = "en"

# API endpoints
API_URL_TEMPLATE = "https://{language}.wikipedia.org/w/api.php"
ARTICLE_URL_TEMPLATE = "https://{language}.wikipedia.org/wiki/{title}"
USER_AGENT = "wiki-search/1.0 (https://github.com/wiki-search/wiki-search)"

# Default values
DEFAULT_RESULT_LIMIT = 15
DEFAULT_SEARCH_TIMEOUT = 30.0  # seconds
DEFAULT_HTTP_TIMEOUT = 30.0  # seconds, per request; never below the search timeout
DEFAULT_DEBOUNCE_DELAY = 0.3  # seconds
DEFAULT_CACHE_MAX_ENTRIES = 100
DEFAULT_CACHE_TTL = 24 * 60 * 60  # seconds
TYPO_TOLERANCE = 2

# Score adjustments for ranking
SCORE_ADJUSTMENTS = {
    "exact_match": 2000,
    "typo_base": 1500,
    "typo_penalty": 200,
    "prefix_match": 1000,
    "title_contains": 500,
    "description_contains": 200,
    "word_match": 100,
}
