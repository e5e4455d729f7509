"""Subcommand modules for htmlbind.

Provides register_commands() which uses deferred imports to keep
``htmlbind --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from htmlbind.commands.bind import bind
    from htmlbind.commands.select import select

    cli.add_command(bind)
    cli.add_command(select)
