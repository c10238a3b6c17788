"""CLI commands package."""

import click

from ..ui.logging import setup_logging
from .interactive import interactive
from .language import language
from .search import search


@click.group()
@click.option("-v", "--verbose", count=True, help="Increase log verbosity (-v, -vv, -vvv)")
def cli(verbose: int) -> None:
    """Wiki Search CLI."""
    setup_logging(verbose)


cli.add_command(search)
cli.add_command(interactive)
cli.add_command(language)
