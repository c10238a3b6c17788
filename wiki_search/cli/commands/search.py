"""
Search Command for Wiki Search CLI

Runs a single search cycle and prints the ranked results, the suggestions, or the
"no results"/failure message, in the preferred language.

Example Usage:
    $ wiki-search search "Albert Einstein"
    $ wiki-search search --language id "Borobudur"
    $ wiki-search search --json "Albrt Einsten"
"""

import asyncio
import json
import logging
import sys
from typing import Optional

import click
from rich.console import Console

from ...search.orchestrator import SearchOrchestrator
from ...search.search_models import FailedView, ResultView, TimedOutView
from ...utils.preferences import LanguagePreference
from ..ui.render import render_view

logger = logging.getLogger(__name__)
console = Console()


async def run_search(
    query: str, language: str, timeout: Optional[float] = None
) -> Optional[ResultView]:
    """Run one search with a fresh orchestrator.

    Args:
        query: Search query
        language: Language code
        timeout: Optional search deadline in seconds

    Returns:
        Result view
    """
    async with SearchOrchestrator(language=language, timeout=timeout) as orchestrator:
        return await orchestrator.search(query)


@click.command()
@click.argument("query")
@click.option("--language", "-l", default=None, help="Wikipedia language code (e.g. en, id)")
@click.option("--timeout", type=float, default=None, help="Search deadline in seconds")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
def search(query: str, language: Optional[str], timeout: Optional[float], as_json: bool) -> None:
    """Search Wikipedia articles.

    Args:
        query: Search query
        language: Wikipedia language code
        timeout: Search deadline in seconds
        as_json: Print JSON instead of a table
    """
    language = (language or LanguagePreference().load()).lower()

    try:
        view = asyncio.run(run_search(query, language, timeout))
    except ValueError as e:
        raise click.BadParameter(str(e)) from e

    if view is None:
        sys.exit(0)

    if as_json:
        click.echo(json.dumps(view.to_dict(), indent=2, ensure_ascii=False))
    else:
        render_view(view, console)

    if isinstance(view, (FailedView, TimedOutView)):
        sys.exit(1)
