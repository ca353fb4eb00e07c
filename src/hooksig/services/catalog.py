"""CatalogService — read-only queries over the hook registry for the CLI.

Loads the corpus on first use. Each operation returns a ServiceResult so
the command layer only formats and emits.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from hooksig.domain.diagnostics import CollectingSink
from hooksig.domain.hooks import ADD_ACTION, ADD_FILTER, HookSignature
from hooksig.domain.nodes import SourceLocation, integer, string, variable
from hooksig.domain.type_parser import parse, render
from hooksig.domain.types import MIXED
from hooksig.services.result import (
    CORPUS_UNAVAILABLE,
    HOOK_NOT_FOUND,
    ServiceResult,
    failure,
    success,
)

if TYPE_CHECKING:
    from hooksig.services.session import AnalysisSession

DEFAULT_PRIORITY = 10


def signature_payload(signature: HookSignature) -> dict[str, Any]:
    return {
        "name": signature.name,
        "kind": str(signature.kind),
        "parameters": [render(t) for t in signature.parameter_types],
        "returns": render(signature.return_type),
    }


class CatalogService:
    """Inspect hook signatures known to an :class:`AnalysisSession`."""

    def __init__(self, session: AnalysisSession) -> None:
        self._session = session

    def _ensure_loaded(self, op: str) -> ServiceResult | None:
        """Load the corpus; return a failure result if no hooks are known."""
        self._session.ensure_corpus()
        if len(self._session.registry):
            return None
        settings = self._session.settings
        return failure(
            op,
            CORPUS_UNAVAILABLE,
            f"No hooks loaded from {settings.corpus_dir}",
            actions=str(settings.actions_path),
            filters=str(settings.filters_path),
        )

    def show(self, name: str) -> ServiceResult:
        op = "show_hook"
        error = self._ensure_loaded(op)
        if error is not None:
            return error
        signature = self._session.registry.lookup(name)
        if signature is None:
            return failure(op, HOOK_NOT_FOUND, f"Hook {name} not found", name=name)
        return success(op, signature_payload(signature))

    def list_hooks(self, *, kind: str | None = None, prefix: str | None = None) -> ServiceResult:
        op = "list_hooks"
        error = self._ensure_loaded(op)
        if error is not None:
            return error
        hooks: list[dict[str, Any]] = []
        for signature in sorted(self._session.registry, key=lambda s: s.name):
            if kind == "action" and not signature.kind.is_action:
                continue
            if kind == "filter" and not signature.kind.is_filter:
                continue
            if prefix and not signature.name.startswith(prefix):
                continue
            hooks.append(
                {
                    "name": signature.name,
                    "kind": str(signature.kind),
                    "arity": len(signature.parameter_types),
                }
            )
        return success(op, {"count": len(hooks), "hooks": hooks})

    def resolve(
        self,
        name: str,
        *,
        action: bool = False,
        accepted_args: int | None = None,
    ) -> ServiceResult:
        """Resolve the contract an ``add_action``/``add_filter`` call would get."""
        op = "resolve_hook"
        self._session.ensure_corpus()
        function_id = ADD_ACTION if action else ADD_FILTER
        args = [string(name), variable("callback"), integer(DEFAULT_PRIORITY)]
        if accepted_args is not None:
            args.append(integer(accepted_args))

        sink = CollectingSink()
        contract = self._session.resolver.resolve(
            function_id,
            args,
            location=SourceLocation("<cli>", 1),
            sink=sink,
        )
        if sink.diagnostics:
            first = sink.diagnostics[0]
            return failure(op, HOOK_NOT_FOUND, first.message, name=name, function=function_id)

        parameters = [
            {"name": p.name, "type": render(p.type), "optional": p.optional}
            for p in contract or []
        ]
        return success(op, {"hook": name, "function": function_id, "parameters": parameters})

    def parse_type(self, expression: str) -> ServiceResult:
        descriptor = parse(expression)
        warnings: list[str] = []
        if descriptor == MIXED and expression.strip().lower() != "mixed":
            warnings.append(f"Could not parse {expression!r}; using mixed")
        return success(
            "parse_type",
            {"input": expression, "type": render(descriptor)},
            warnings=warnings,
        )
