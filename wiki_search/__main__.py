"""
Main Entry Point for Wiki Search

This module serves as the main entry point for the Wiki Search package when run as a
command-line application. It initializes the package and hands control to the CLI.

Example Usage:
    $ python -m wiki_search search "Albert Einstein"
    $ python -m wiki_search search --language id "Borobudur"
    $ python -m wiki_search interactive
    $ python -m wiki_search language id
"""

import sys
from typing import Optional, Sequence

import click

from .cli import cli
from .initialize import initialize


def main(args: Optional[Sequence[str]] = None) -> int:
    """Main entry point.

    Args:
        args: Command line arguments.
            Defaults to sys.argv[1:].

    Returns:
        Exit code.
    """
    try:
        # Initialize package
        initialize()

        # Run CLI
        cli(args=args, standalone_mode=False)
        return 0

    except click.exceptions.Exit as e:
        return e.exit_code

    except click.ClickException as e:
        e.show()
        return e.exit_code

    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
