"""Diagnostics reported to the host analyzer.

The only user-visible failure is ``HookNotFound``. The host owns rendering
and suppression; :class:`CollectingSink` is the in-process sink used by the
CLI and by hosts that batch diagnostics.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol, runtime_checkable

from hooksig.domain.nodes import SourceLocation


class IssueKind(StrEnum):
    HOOK_NOT_FOUND = "HookNotFound"


@dataclass(frozen=True)
class Diagnostic:
    kind: IssueKind
    message: str
    location: SourceLocation

    def __str__(self) -> str:
        return f"{self.location}: {self.kind}: {self.message}"


def hook_not_found(hook_name: str, location: SourceLocation) -> Diagnostic:
    return Diagnostic(IssueKind.HOOK_NOT_FOUND, f"Hook {hook_name} not found", location)


def hook_is_filter(hook_name: str, location: SourceLocation) -> Diagnostic:
    return Diagnostic(
        IssueKind.HOOK_NOT_FOUND, f"Hook {hook_name} is a filter not an action", location
    )


def hook_is_action(hook_name: str, location: SourceLocation) -> Diagnostic:
    return Diagnostic(
        IssueKind.HOOK_NOT_FOUND, f"Hook {hook_name} is an action not a filter", location
    )


@runtime_checkable
class DiagnosticSink(Protocol):
    """Where diagnostics go. Implemented by the host analyzer."""

    def report(self, diagnostic: Diagnostic) -> None: ...


class CollectingSink:
    """Keeps reported diagnostics in memory, dropping suppressed kinds."""

    def __init__(self, suppressed: Iterable[str] = ()) -> None:
        self.suppressed = frozenset(suppressed)
        self.diagnostics: list[Diagnostic] = []

    def report(self, diagnostic: Diagnostic) -> None:
        if str(diagnostic.kind) in self.suppressed:
            return
        self.diagnostics.append(diagnostic)
