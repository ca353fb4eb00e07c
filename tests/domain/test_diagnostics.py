"""Tests for diagnostics and the collecting sink."""

from __future__ import annotations

from hooksig.domain.diagnostics import (
    CollectingSink,
    DiagnosticSink,
    IssueKind,
    hook_is_action,
    hook_is_filter,
    hook_not_found,
)
from hooksig.domain.nodes import SourceLocation

LOCATION = SourceLocation("plugin.php", 7, 3)


class TestMessages:
    def test_not_found(self) -> None:
        diagnostic = hook_not_found("missing_hook", LOCATION)
        assert diagnostic.kind is IssueKind.HOOK_NOT_FOUND
        assert diagnostic.message == "Hook missing_hook not found"
        assert diagnostic.location == LOCATION

    def test_kind_mismatch(self) -> None:
        assert hook_is_filter("the_title", LOCATION).message == (
            "Hook the_title is a filter not an action"
        )
        assert hook_is_action("init", LOCATION).message == "Hook init is an action not a filter"
        assert hook_is_action("init", LOCATION).kind is IssueKind.HOOK_NOT_FOUND

    def test_str_includes_location(self) -> None:
        text = str(hook_not_found("x", LOCATION))
        assert text == "plugin.php:7:3: HookNotFound: Hook x not found"


class TestCollectingSink:
    def test_collects(self) -> None:
        sink = CollectingSink()
        sink.report(hook_not_found("a", LOCATION))
        sink.report(hook_is_filter("b", LOCATION))
        assert [d.message for d in sink.diagnostics] == [
            "Hook a not found",
            "Hook b is a filter not an action",
        ]

    def test_suppressed_kind_dropped(self) -> None:
        sink = CollectingSink(suppressed=["HookNotFound"])
        sink.report(hook_not_found("a", LOCATION))
        assert sink.diagnostics == []

    def test_satisfies_protocol(self) -> None:
        assert isinstance(CollectingSink(), DiagnosticSink)
