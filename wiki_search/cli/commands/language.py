"""Language preference command."""

from typing import Optional

import click
from rich.console import Console

from ...utils.preferences import LanguagePreference
from ..ui.messages import translate

console = Console()


@click.command()
@click.argument("code", required=False)
def language(code: Optional[str]) -> None:
    """Show or set the preferred search language."""
    preference = LanguagePreference()

    if code is None:
        current = preference.load()
        console.print(translate("language_current", current, code=current))
        return

    try:
        preference.save(code)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="CODE") from e

    code = code.strip().lower()
    console.print(translate("language_set", code, code=code))
