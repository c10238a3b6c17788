"""Test doubles and payload builders."""

import asyncio
from typing import Dict, Iterable, List, Optional

from wiki_search.search.search_models import PageData, SearchItem, SearchPayload

EINSTEIN_EXTRACT = (
    "Albert Einstein was a German-born theoretical physicist who is best known "
    "for developing the theory of relativity."
)


def make_payload(
    titles: Iterable[str] = (),
    search_titles: Iterable[str] = (),
    extracts: Optional[Dict[str, Optional[str]]] = None,
    missing: Iterable[str] = (),
) -> SearchPayload:
    """Build a payload whose pages cover every title unless listed as missing."""
    titles = list(titles)
    search_titles = list(search_titles)
    extracts = extracts or {}
    missing = set(missing)
    pages = {}
    for page_id, title in enumerate(dict.fromkeys(titles + search_titles), start=1):
        if title in missing:
            pages[-page_id] = PageData(title=title, missing=True)
        else:
            pages[page_id] = PageData(title=title, extract=extracts.get(title, f"About {title}."))
    return SearchPayload(
        search_items=[SearchItem(title=t) for t in search_titles],
        pages=pages,
        titles=titles,
    )


class FakeClient:
    """In-memory stand-in for WikipediaClient."""

    def __init__(
        self,
        payloads: Optional[Dict[str, SearchPayload]] = None,
        candidates: Optional[Dict[str, List[str]]] = None,
        delays: Optional[Dict[str, float]] = None,
        error: Optional[Exception] = None,
    ):
        self.payloads = payloads or {}
        self.candidates = candidates or {}
        self.delays = delays or {}
        self.error = error
        self.payload_calls: List[tuple] = []
        self.opensearch_calls: List[tuple] = []
        self.closed = False

    async def opensearch(self, query: str, language: str, limit: Optional[int] = None) -> List[str]:
        self.opensearch_calls.append((query, language))
        return list(self.candidates.get(query, []))

    async def fetch_payload(self, query: str, language: str) -> SearchPayload:
        self.payload_calls.append((query, language))
        delay = self.delays.get(query, 0.0)
        if delay:
            await asyncio.sleep(delay)
        if self.error is not None:
            raise self.error
        return self.payloads.get(query, SearchPayload())

    async def cleanup(self) -> None:
        self.closed = True


