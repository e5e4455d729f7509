"""Command: bind an HTML file to a Python type and print the result."""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING, Any, TextIO

import click

from htmlbind.commands._base import HtmlBindCommand

if TYPE_CHECKING:
    from htmlbind.commands._context import AppContext

_BIND_EXAMPLES = """\
  htmlbind bind page.html --type myapp.models:Person
  curl -s https://example.com | htmlbind --json bind - --type myapp.models:Listing"""


def import_target(spec: str) -> Any:
    """Import ``module:QualName`` and return the named object."""
    module_name, sep, qualname = spec.partition(":")
    if not sep or not module_name or not qualname:
        raise click.BadParameter("expected 'module:Class'", param_hint="--type")
    try:
        target: Any = importlib.import_module(module_name)
    except ImportError as exc:
        raise click.BadParameter(
            f"cannot import {module_name!r}: {exc}", param_hint="--type"
        ) from exc
    for part in qualname.split("."):
        try:
            target = getattr(target, part)
        except AttributeError:
            raise click.BadParameter(
                f"{module_name!r} has no attribute {qualname!r}", param_hint="--type"
            ) from None
    return target


@click.command(cls=HtmlBindCommand, examples=_BIND_EXAMPLES)
@click.argument("source", type=click.File("r", encoding="utf-8"))
@click.option("--type", "type_spec", required=True, help="Target type as module:Class.")
@click.pass_obj
def bind(app: AppContext, source: TextIO, type_spec: str) -> None:
    """Bind the HTML in SOURCE (or - for stdin) to a Python type."""
    target = import_target(type_spec)
    app.emit(app.serializer.try_deserialize(target, source.read()))
