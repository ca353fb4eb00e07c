"""Pluggy hook specifications for the host analyzer plugin surface.

A host analyzer drives these hooks while it analyzes a codebase:

1. ``before_analyze_file`` once per file, before the file is analyzed.
2. ``after_function_call_analysis`` for every analyzed function call.
3. ``function_params`` for calls to the names returned by ``function_ids``.

Diagnostics go to the ``sink`` the host passes in.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from collections.abc import Sequence

    from hooksig.domain.diagnostics import DiagnosticSink
    from hooksig.domain.nodes import Node, SourceFile, SourceLocation, TypeOracle
    from hooksig.services.resolver import ParameterContract

hookspec = pluggy.HookspecMarker("hooksig")


class AnalyzerHookSpec:
    """Hook specifications for analyzer plugins."""

    @hookspec
    def before_analyze_file(self, source_file: SourceFile, oracle: TypeOracle) -> None:
        """Called with a file's syntax tree before the file is analyzed."""

    @hookspec
    def after_function_call_analysis(
        self,
        call: Node,
        function_id: str,
        oracle: TypeOracle,
    ) -> None:
        """Called after a function call and its arguments have been typed."""

    @hookspec
    def function_ids(self) -> list[str]:
        """Return the function names this plugin synthesizes parameters for."""

    @hookspec(firstresult=True)
    def function_params(
        self,
        function_id: str,
        call_args: Sequence[Node],
        location: SourceLocation | None,
        sink: DiagnosticSink | None,
    ) -> list[ParameterContract] | None:
        """Return the parameter contract for a call, or None for no opinion."""
