"""Rendering of search result views in the terminal."""

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ...integrations.wikipedia_client import article_url
from ...search.search_models import (
    ClearedView,
    EmptyView,
    FailedView,
    ResultsView,
    ResultView,
    SuggestionsView,
    TimedOutView,
)
from .messages import translate

EXTRACT_PREVIEW_CHARS = 240


def render_view(view: ResultView, console: Console) -> None:
    """Print a result view.

    Args:
        view: View reported by the orchestrator
        console: Rich console
    """
    if isinstance(view, ResultsView):
        _render_results(view, console)
    elif isinstance(view, SuggestionsView):
        _render_suggestions(view, console)
    elif isinstance(view, EmptyView):
        console.print(translate("no_results", view.language), style="dim")
    elif isinstance(view, TimedOutView):
        console.print(
            Panel(translate("timeout_warning", view.language), style="yellow", expand=False)
        )
        console.print(translate("failed_search", view.language), style="dim")
    elif isinstance(view, FailedView):
        console.print(translate("failed_search", view.language), style="red")
    elif isinstance(view, ClearedView):
        console.print()


def _render_results(view: ResultsView, console: Console) -> None:
    if view.recommendation:
        console.print(
            translate("recommend_search", view.language, term=escape(view.recommendation)),
            style="bold yellow",
        )

    console.print(
        translate(
            view.message_key, view.language, query=escape(view.query), time=f"{view.timing:.3f}"
        ),
        style="italic",
    )

    table = Table(show_header=True, header_style="bold magenta", show_lines=True)
    table.add_column("Score", justify="right", style="cyan")
    table.add_column("Title", justify="left", style="bold blue")
    table.add_column("Extract", justify="left")

    for result in view.ranked_results:
        extract = result.extract or translate("no_results", view.language)
        if len(extract) > EXTRACT_PREVIEW_CHARS:
            extract = extract[:EXTRACT_PREVIEW_CHARS].rstrip() + "..."
        link = article_url(result.title, view.language)
        table.add_row(
            str(result.score), f"[link={link}]{escape(result.title)}[/link]", escape(extract)
        )

    console.print(table)


def _render_suggestions(view: SuggestionsView, console: Console) -> None:
    console.print(translate("suggestions_title", view.language), style="bold")
    for index, suggestion in enumerate(view.suggestions, start=1):
        console.print(f"  [cyan]{index}[/cyan]. {escape(suggestion)}")


__all__ = ["render_view"]
