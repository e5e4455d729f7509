"""Command: evaluate a CSS selector against an HTML file."""

from __future__ import annotations

from typing import TYPE_CHECKING, TextIO

import click

from htmlbind.commands._base import HtmlBindCommand
from htmlbind.domain.errors import ParseError
from htmlbind.infrastructure.document import parse_markup, query
from htmlbind.serializers.result import BindingResult

if TYPE_CHECKING:
    from htmlbind.commands._context import AppContext

_SELECT_EXAMPLES = """\
  htmlbind select page.html "#firstName"
  htmlbind --json select page.html "#children li" --all"""


@click.command(cls=HtmlBindCommand, examples=_SELECT_EXAMPLES)
@click.argument("source", type=click.File("r", encoding="utf-8"))
@click.argument("selector")
@click.option("--all", "select_all", is_flag=True, help="Print every match, not just the first.")
@click.pass_obj
def select(app: AppContext, source: TextIO, selector: str, select_all: bool) -> None:
    """Print the text of elements in SOURCE matching SELECTOR."""
    try:
        document = parse_markup(source.read(), parser=app.settings.parser.backend)
    except ParseError as exc:
        app.emit(BindingResult.failure(exc))
        return
    try:
        matches = query(document.root, selector, multiple=select_all)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="SELECTOR") from exc
    app.emit(BindingResult.success([match.text() for match in matches]))
