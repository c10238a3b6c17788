"""
Interactive Command for Wiki Search CLI

A small read-eval loop around the search orchestrator. Every line typed is fed to the
orchestrator's input port exactly like a keystroke burst would be: it goes through the
debounce window, and results are printed from the orchestrator's output port.

Commands:
    <text>        search for <text>
    <number>      search for the numbered suggestion
    :accept       search for the "did you mean" recommendation
    :lang CODE    switch (and remember) the search language
    :retry        run the last search again
    :clear        clear the query
    :quit         leave
"""

import asyncio
import logging
from typing import Optional

import click
from rich.console import Console
from rich.prompt import Prompt

from ...search.orchestrator import SearchOrchestrator
from ...search.search_models import ResultsView, ResultView
from ...utils.preferences import LanguagePreference
from ..ui.messages import translate
from ..ui.render import render_view

logger = logging.getLogger(__name__)
console = Console()

QUIT_COMMANDS = (":quit", ":q", ":exit")


class InteractiveSession:
    """Maps prompt input onto orchestrator operations."""

    def __init__(self, orchestrator: SearchOrchestrator, console: Console):
        self.orchestrator = orchestrator
        self.console = console
        orchestrator.on_result = self.show

    def show(self, view: ResultView) -> None:
        render_view(view, self.console)

    def handle(self, line: str) -> bool:
        """Handle one line of input.

        Args:
            line: Raw input line

        Returns:
            False when the session should end
        """
        text = line.strip()
        orchestrator = self.orchestrator

        if text in QUIT_COMMANDS:
            return False

        if text.startswith(":lang"):
            code = text[len(":lang"):].strip()
            try:
                orchestrator.set_language(code)
            except ValueError as e:
                self.console.print(f"[red]{e}[/red]")
            else:
                self.console.print(translate("language_set", code.lower(), code=code.lower()))
        elif text == ":retry":
            orchestrator.retry()
        elif text == ":clear":
            orchestrator.clear()
        elif text == ":accept":
            view = orchestrator.last_view
            if isinstance(view, ResultsView) and view.recommendation:
                orchestrator.select_suggestion(view.recommendation)
        elif text.isdigit() and orchestrator.suggestions:
            index = int(text) - 1
            if 0 <= index < len(orchestrator.suggestions):
                orchestrator.move_selection(index - orchestrator.selected_index)
                orchestrator.accept_selection()
        else:
            orchestrator.on_query_changed(text)
        return True

    async def run(self) -> None:
        loop = asyncio.get_running_loop()
        while True:
            prompt = translate("search_placeholder", self.orchestrator.language)
            try:
                line = await loop.run_in_executor(None, Prompt.ask, prompt)
            except (EOFError, KeyboardInterrupt):
                break
            if not self.handle(line):
                break
            await self.orchestrator.wait_idle()


async def run_interactive(language: Optional[str] = None) -> None:
    preferences = LanguagePreference()
    async with SearchOrchestrator(preferences=preferences, language=language) as orchestrator:
        console.rule(translate("search_title", orchestrator.language))
        await InteractiveSession(orchestrator, console).run()


@click.command()
@click.option("--language", "-l", default=None, help="Wikipedia language code (e.g. en, id)")
def interactive(language: Optional[str]) -> None:
    """Search interactively, with suggestions and retries."""
    asyncio.run(run_interactive(language.lower() if language else None))
