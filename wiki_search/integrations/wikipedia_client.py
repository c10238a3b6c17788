"""
Wikipedia API Client

Async client for the three MediaWiki Action API calls a search cycle needs:

1. ``action=opensearch``: fast title-prefix search (titles only)
2. ``action=query&list=search``: full-text search (titles with snippets)
3. ``action=query&prop=extracts``: lead extracts for a batch of titles

Transport errors and non-success statuses raise ``NetworkFailure``; bodies that
are not JSON or do not have the expected shape raise ``MalformedResponse``.

Example Usage:
    async with WikipediaClient() as client:
        payload = await client.fetch_payload("Albert Einstein", "en")
"""

import logging
from typing import Any, Dict, List, Optional, Sequence
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from ..config import config as config_instance
from ..monitoring.metrics import MetricsManager
from ..search.search_models import PageData, SearchItem, SearchPayload
from ..services.base import BaseService, MalformedResponse, NetworkFailure
from .schemas import ExtractResponseModel, SearchResponseModel, parse_opensearch

logger = logging.getLogger(__name__)


def article_url(title: str, language: str) -> str:
    """Build the article URL for a title.

    Args:
        title: Article title
        language: Wikipedia language code

    Returns:
        Article URL
    """
    return config_instance.article_url_template.format(
        language=language, title=quote(title, safe="")
    )


class WikipediaClient(BaseService[Dict[str, Any]]):
    """Async MediaWiki API client."""

    def __init__(
        self,
        config: Optional[Any] = None,
        metrics_manager: Optional[MetricsManager] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initialize client.

        Args:
            config: Configuration instance
            metrics_manager: Metrics manager
            http_client: Optional preconfigured httpx client (not closed by cleanup)
            timeout: Per-request timeout in seconds (defaults to config)
            transport: Optional httpx transport for the owned client
        """
        super().__init__(config, metrics_manager)
        self._http = http_client
        self._owns_http = http_client is None
        self.timeout = max(
            self.config.http_timeout if timeout is None else timeout,
            self.config.search_timeout,
        )
        self._transport = transport

    async def initialize(self) -> None:
        """Create the HTTP client."""
        if self._http is not None:
            return
        self._http = httpx.AsyncClient(
            timeout=self.timeout,
            transport=self._transport,
            headers={"User-Agent": self.config.user_agent},
            follow_redirects=True,
        )
        self._owns_http = True
        logger.debug("Wikipedia client initialized")

    async def cleanup(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._http is not None and self._owns_http:
            await self._http.aclose()
            self._http = None
            logger.debug("Wikipedia client closed")

    async def health_check(self) -> Dict[str, Any]:
        """Check client health.

        Returns:
            Health check results
        """
        return {
            "service": "WikipediaClient",
            "initialized": self._http is not None,
            "api_url_template": self.config.api_url_template,
        }

    async def __aenter__(self) -> "WikipediaClient":
        await self.initialize()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.cleanup()

    def api_url(self, language: str) -> str:
        return self.config.api_url_template.format(language=language)

    async def _get(self, language: str, endpoint: str, params: Dict[str, Any]) -> Any:
        """Send a GET request and decode the JSON body.

        Args:
            language: Wikipedia language code
            endpoint: Logical endpoint name, used for metrics and errors
            params: Query parameters

        Returns:
            Decoded JSON

        Raises:
            NetworkFailure: On transport errors and non-success statuses
            MalformedResponse: If the body is not JSON or is an API error
        """
        if self._http is None:
            await self.initialize()

        url = self.api_url(language)
        self.metrics.increment_counter("api_requests", labels={"endpoint": endpoint})
        try:
            response = await self._http.get(url, params={**params, "format": "json"})
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            self.metrics.increment_counter("api_errors", labels={"kind": "status"})
            raise NetworkFailure(
                f"{endpoint} request returned HTTP {e.response.status_code}",
                details={"endpoint": endpoint, "status": e.response.status_code},
            ) from e
        except httpx.HTTPError as e:
            self.metrics.increment_counter("api_errors", labels={"kind": "transport"})
            raise NetworkFailure(
                f"{endpoint} request failed: {e}", details={"endpoint": endpoint}
            ) from e

        try:
            data = response.json()
        except ValueError as e:
            self.metrics.increment_counter("api_errors", labels={"kind": "malformed"})
            raise MalformedResponse(
                f"{endpoint} response is not JSON", details={"endpoint": endpoint}
            ) from e

        if isinstance(data, dict) and "error" in data:
            self.metrics.increment_counter("api_errors", labels={"kind": "api"})
            error = data["error"] if isinstance(data["error"], dict) else {}
            raise MalformedResponse(
                f"{endpoint} returned API error: {error.get('info', data['error'])}",
                details={"endpoint": endpoint, "code": error.get("code")},
            )

        return data

    async def opensearch(
        self, query: str, language: str, limit: Optional[int] = None
    ) -> List[str]:
        """Title-prefix search.

        Args:
            query: Search query
            language: Wikipedia language code
            limit: Maximum number of titles

        Returns:
            Matching titles in API order
        """
        data = await self._get(
            language,
            "opensearch",
            {
                "action": "opensearch",
                "search": query,
                "limit": limit or self.config.result_limit,
                "namespace": 0,
            },
        )
        try:
            return parse_opensearch(data)
        except ValueError as e:
            raise MalformedResponse(str(e), details={"endpoint": "opensearch"}) from e

    async def full_text_search(
        self, query: str, language: str, limit: Optional[int] = None
    ) -> List[SearchItem]:
        """Full-text search ranked by the API.

        Args:
            query: Search query
            language: Wikipedia language code
            limit: Maximum number of hits

        Returns:
            Search hits in API order
        """
        data = await self._get(
            language,
            "search",
            {
                "action": "query",
                "list": "search",
                "srsearch": query,
                "srlimit": limit or self.config.result_limit,
            },
        )
        try:
            response = SearchResponseModel.model_validate(data)
        except ValidationError as e:
            raise MalformedResponse(
                f"unexpected search response: {e}", details={"endpoint": "search"}
            ) from e
        return [hit.to_item() for hit in response.query.search]

    async def fetch_extracts(
        self, titles: Sequence[str], language: str
    ) -> Dict[int, PageData]:
        """Fetch lead extracts for a batch of titles.

        Args:
            titles: Article titles
            language: Wikipedia language code

        Returns:
            Page data keyed by page id (negative ids for missing pages)
        """
        if not titles:
            return {}

        data = await self._get(
            language,
            "extracts",
            {
                "action": "query",
                "prop": "extracts",
                "exintro": 1,
                "explaintext": 1,
                "exlimit": "max",
                "titles": "|".join(titles),
            },
        )
        try:
            response = ExtractResponseModel.model_validate(data)
        except ValidationError as e:
            raise MalformedResponse(
                f"unexpected extracts response: {e}", details={"endpoint": "extracts"}
            ) from e
        return {page_id: page.to_page() for page_id, page in response.query.pages.items()}

    async def fetch_payload(self, query: str, language: str) -> SearchPayload:
        """Run the dependent prefix, full-text and extract calls for a query.

        Args:
            query: Search query
            language: Wikipedia language code

        Returns:
            Combined search payload
        """
        titles = await self.opensearch(query, language)
        search_items = await self.full_text_search(query, language)
        payload = SearchPayload(search_items=search_items, titles=titles)

        pages = await self.fetch_extracts(payload.all_titles(), language)
        logger.debug(
            f"Fetched {len(titles)} titles, {len(search_items)} hits and "
            f"{len(pages)} pages for {query!r} ({language})"
        )
        return SearchPayload(search_items=search_items, pages=pages, titles=titles)


__all__ = ["WikipediaClient", "article_url"]
