"""Response shapes of the MediaWiki Action API."""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError

from ..search.search_models import PageData, SearchItem


class ApiModel(BaseModel):
    """Base model ignoring fields the client does not use."""

    model_config = ConfigDict(extra="ignore")


class SearchHitModel(ApiModel):
    """Entry of ``list=search``."""

    title: str
    snippet: Optional[str] = None

    def to_item(self) -> SearchItem:
        return SearchItem(title=self.title, snippet=self.snippet)


class SearchQueryModel(ApiModel):
    search: List[SearchHitModel]


class SearchResponseModel(ApiModel):
    """Response of ``action=query&list=search``."""

    query: SearchQueryModel


class PageModel(ApiModel):
    """Entry of ``prop=extracts``.

    ``missing`` and ``invalid`` are empty strings in format version 1 and
    booleans in version 2; their presence is what matters.
    """

    title: str
    extract: Optional[str] = None
    missing: Optional[Union[bool, str]] = None
    invalid: Optional[Union[bool, str]] = None

    @property
    def is_missing(self) -> bool:
        return any(flag is not None and flag is not False for flag in (self.missing, self.invalid))

    def to_page(self) -> PageData:
        return PageData(title=self.title, extract=self.extract, missing=self.is_missing)


class ExtractQueryModel(ApiModel):
    pages: Dict[int, PageModel] = {}


class ExtractResponseModel(ApiModel):
    """Response of ``action=query&prop=extracts``."""

    query: ExtractQueryModel = ExtractQueryModel()


OpenSearchResponse = TypeAdapter(List[Union[str, List[str]]])


def parse_opensearch(data: Any) -> List[str]:
    """Extract the title list of an ``action=opensearch`` response.

    Args:
        data: Decoded JSON, ``[query, [titles], [descriptions], [urls]]``

    Returns:
        Titles in API order

    Raises:
        ValueError: If the response does not have the expected shape
    """
    try:
        parsed = OpenSearchResponse.validate_python(data)
    except ValidationError as e:
        raise ValueError(f"unexpected opensearch response: {e}") from e
    if len(parsed) < 2 or not isinstance(parsed[1], list):
        raise ValueError("opensearch response has no title list")
    return list(parsed[1])


__all__ = [
    "ExtractResponseModel",
    "PageModel",
    "SearchHitModel",
    "SearchResponseModel",
    "parse_opensearch",
]
