"""Built-in plugin that type-checks hook callbacks.

Feeds the session registry from doc blocks (per file) and from observed
hook invocations (per call), and answers parameter synthesis for
``add_action``/``add_filter``.

Every hook implementation catches its own failures: a problem in hook
resolution must never stop the host's analysis.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import pluggy

from hooksig.config.logging import configure_logging
from hooksig.config.settings import HooksigSettings
from hooksig.domain.diagnostics import DiagnosticSink
from hooksig.domain.nodes import Node, SourceFile, SourceLocation, TypeOracle
from hooksig.services.resolver import ParameterContract
from hooksig.services.session import AnalysisSession

hookimpl = pluggy.HookimplMarker("hooksig")

logger = logging.getLogger(__name__)


class HookTypesPlugin:
    """Hook signature plugin bound to one :class:`AnalysisSession`.

    Entry-point loading instantiates the class without arguments; the
    session is then built from discovered settings on first use.
    """

    def __init__(self, session: AnalysisSession | None = None) -> None:
        self._session = session

    @property
    def session(self) -> AnalysisSession:
        if self._session is None:
            settings = HooksigSettings.from_cli()
            configure_logging(verbose=settings.verbose, log_json=settings.log_json, embedded=True)
            self._session = AnalysisSession(settings)
        self._session.ensure_corpus()
        return self._session

    # ------------------------------------------------------------------
    # Analyzer hooks
    # ------------------------------------------------------------------

    @hookimpl
    def before_analyze_file(self, source_file: SourceFile, oracle: TypeOracle) -> None:
        """Register hooks documented in *source_file*."""
        self.session.extractor.extract(source_file)

    @hookimpl
    def after_function_call_analysis(
        self,
        call: Node,
        function_id: str,
        oracle: TypeOracle,
    ) -> None:
        """Infer a signature for an undocumented hook invocation."""
        try:
            self.session.inferencer.observe(call, function_id, oracle)
        except Exception:
            logger.warning("Hook inference failed for %s", function_id, exc_info=True)

    @hookimpl
    def function_ids(self) -> list[str]:
        return list(self.session.resolver.function_ids)

    @hookimpl
    def function_params(
        self,
        function_id: str,
        call_args: Sequence[Node],
        location: SourceLocation | None,
        sink: DiagnosticSink | None,
    ) -> list[ParameterContract] | None:
        """Synthesize the registration contract for ``add_action``/``add_filter``."""
        resolver = self.session.resolver
        if function_id.lower() not in resolver.function_ids:
            return None
        try:
            return resolver.resolve(function_id, call_args, location=location, sink=sink)
        except Exception:
            logger.warning("Hook resolution failed for %s", function_id, exc_info=True)
            return None
