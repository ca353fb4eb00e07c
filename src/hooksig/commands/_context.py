"""AppContext — shared Click context for all commands.

Created once by the root CLI group and handed to subcommands via
``@click.pass_obj``. Builds the analysis session lazily and centralizes
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from hooksig.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from hooksig.config.settings import HooksigSettings
    from hooksig.services.result import ServiceResult
    from hooksig.services.session import AnalysisSession


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The session is created on first use so ``--help`` and ``--version``
    never read the corpus.
    """

    def __init__(self, settings: HooksigSettings) -> None:
        self.settings = settings
        self._session: AnalysisSession | None = None

        from hooksig.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def session(self) -> AnalysisSession:
        """The analysis session (created lazily on first access)."""
        if self._session is None:
            from hooksig.services.session import AnalysisSession

            self._session = AnalysisSession(self.settings)
        return self._session

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: writes to stdout. Warnings go to stderr so they don't
          pollute piped output.
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
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
