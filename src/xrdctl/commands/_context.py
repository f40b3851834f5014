"""AppContext: shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Configures logging and centralizes result
emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from xrdctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from xrdctl.config.settings import XrdSettings
    from xrdctl.services.documents import DocumentService
    from xrdctl.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: XrdSettings) -> None:
        self.settings = settings
        self._documents: DocumentService | None = None

        from xrdctl.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from xrdctl.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def documents(self) -> DocumentService:
        """The document service (created lazily on first access)."""
        if self._documents is None:
            from xrdctl.services.documents import DocumentService

            self._documents = DocumentService(self.settings)
        return self._documents

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
