"""AppContext: shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Provides lazy serializer construction and centralized
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from htmlbind.output.formatters import format_failure, format_value

if TYPE_CHECKING:
    from htmlbind.config.settings import HtmlBindSettings
    from htmlbind.serializers.html import HtmlSerializer
    from htmlbind.serializers.result import BindingResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The serializer (and with it plugin discovery) is created on first
    use so ``--help`` and ``--version`` stay cheap.
    """

    def __init__(self, settings: HtmlBindSettings) -> None:
        self.settings = settings
        self._serializer: HtmlSerializer | None = None

        from htmlbind.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def serializer(self) -> HtmlSerializer:
        """The serializer instance (created lazily on first access)."""
        if self._serializer is None:
            from htmlbind.serializers.html import HtmlSerializer

            self._serializer = HtmlSerializer.from_settings(self.settings)
        return self._serializer

    def emit(self, result: BindingResult) -> None:
        """Format and output a BindingResult with correct exit semantics.

        * Success (``result.ok``): writes the value to stdout.
        * Failure: writes the error to stderr, exits with code 1.
        """
        json_output = self.settings.json_output
        if result.ok:
            click.echo(format_value(result.value, json_output=json_output))
            return
        assert result.error is not None
        click.echo(format_failure(result.error, json_output=json_output), err=True)
        raise SystemExit(1)
