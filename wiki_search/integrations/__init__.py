"""External API integrations."""

from .wikipedia_client import WikipediaClient, article_url

__all__ = ["WikipediaClient", "article_url"]
