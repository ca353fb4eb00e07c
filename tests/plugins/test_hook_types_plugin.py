"""Tests for HookTypesPlugin — the built-in plugin driven by a host analyzer."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from hooksig.domain.diagnostics import CollectingSink
from hooksig.domain.hooks import HookKind
from hooksig.domain.nodes import (
    MappingOracle,
    NodeKind,
    SourceFile,
    SourceLocation,
    call,
    integer,
    statement,
    string,
    variable,
)
from hooksig.domain.types import (
    BOOL,
    INT,
    STRING,
    CallableType,
    Literal,
    TypeKind,
)
from hooksig.plugins.builtins.hook_types import HookTypesPlugin
from hooksig.plugins.manager import PluginManager
from hooksig.services.session import AnalysisSession

LOCATION = SourceLocation("plugin.php", 20, 5)

DOC = """/**
 * Filters the value.
 *
 * @param int    $a First.
 * @param string $b Second.
 */"""


@pytest.fixture
def host(session: AnalysisSession) -> PluginManager:
    """Plugin manager with the built-in plugin bound to the sample session."""
    pm = PluginManager()
    pm.register_plugin(HookTypesPlugin(session), name="hook_types")
    return pm


class TestHookImplementations:
    def test_function_ids(self, session: AnalysisSession) -> None:
        assert HookTypesPlugin(session).function_ids() == ["add_action", "add_filter"]

    def test_corpus_contract(self, session: AnalysisSession) -> None:
        plugin = HookTypesPlugin(session)
        sink = CollectingSink()
        contract = plugin.function_params(
            "add_filter",
            [string("my_filter"), variable("cb"), integer(10), integer(1)],
            LOCATION,
            sink,
        )
        assert contract is not None
        assert contract[1].type == CallableType((INT,), INT)
        assert sink.diagnostics == []

    def test_other_functions_have_no_opinion(self, session: AnalysisSession) -> None:
        plugin = HookTypesPlugin(session)
        assert plugin.function_params("register_post_type", [string("x")], LOCATION, None) is None

    def test_before_analyze_file_registers_docs(self, session: AnalysisSession) -> None:
        source = SourceFile(
            Path("plugin.php"),
            (
                statement(
                    NodeKind.RETURN,
                    call("apply_filters", string("the_title"), variable("a"), variable("b")),
                    doc=DOC,
                ),
            ),
        )
        HookTypesPlugin(session).before_analyze_file(source, MappingOracle())
        signature = session.registry.lookup("the_title")
        assert signature is not None
        assert signature.parameter_types == (INT, STRING)

    def test_after_call_analysis_infers(self, session: AnalysisSession) -> None:
        x = variable("x")
        invocation = call("apply_filters", string("undocumented_hook"), x)
        oracle = MappingOracle({x: Literal(TypeKind.BOOL, True)})
        HookTypesPlugin(session).after_function_call_analysis(invocation, "apply_filters", oracle)
        signature = session.registry.lookup("undocumented_hook")
        assert signature is not None
        assert signature.kind is HookKind.FILTER
        assert signature.parameter_types == (BOOL,)

    def test_inference_failure_is_logged(
        self, session: AnalysisSession, caplog: pytest.LogCaptureFixture
    ) -> None:
        class _BrokenOracle:
            def type_of(self, node: object) -> None:
                raise RuntimeError("oracle down")

        invocation = call("apply_filters", string("new_hook"), variable("x"))
        with caplog.at_level(logging.WARNING, logger="hooksig"):
            HookTypesPlugin(session).after_function_call_analysis(
                invocation, "apply_filters", _BrokenOracle()
            )
        assert "Hook inference failed for apply_filters" in caplog.text
        assert "new_hook" not in session.registry


@pytest.mark.usefixtures("_isolated_project")
class TestLazySession:
    def test_session_built_from_discovered_settings(self) -> None:
        plugin = HookTypesPlugin()
        assert plugin.session.registry.is_seeded
        assert "my_filter" in plugin.session.registry

    def test_session_reused(self) -> None:
        plugin = HookTypesPlugin()
        assert plugin.session is plugin.session

    def test_logging_left_to_host(self) -> None:
        root_handlers = list(logging.getLogger().handlers)
        assert HookTypesPlugin().session.registry.is_seeded
        assert logging.getLogger().handlers == root_handlers
        assert logging.getLogger("hooksig").propagate is False


class TestHostFlow:
    def test_documented_hook_then_registration(self, host: PluginManager) -> None:
        source = SourceFile(
            Path("plugin.php"),
            (
                statement(
                    NodeKind.RETURN,
                    call("apply_filters", string("x"), variable("a"), variable("b")),
                    doc=DOC,
                ),
            ),
        )
        oracle = MappingOracle()
        host.analyze_file(source, oracle)

        sink = CollectingSink()
        contract = host.function_params(
            "add_filter",
            [string("x"), variable("cb"), integer(10), integer(2)],
            location=LOCATION,
            sink=sink,
        )
        assert contract is not None
        assert contract[1].type == CallableType((INT, STRING), INT)
        assert sink.diagnostics == []

    def test_missing_hook_reports_once(self, host: PluginManager) -> None:
        sink = CollectingSink()
        contract = host.function_params(
            "add_filter",
            [string("missing_hook"), variable("cb")],
            location=LOCATION,
            sink=sink,
        )
        assert contract == []
        assert [d.message for d in sink.diagnostics] == ["Hook missing_hook not found"]

    def test_inferred_hook_resolves(self, host: PluginManager) -> None:
        x = variable("x")
        oracle = MappingOracle({x: Literal(TypeKind.STRING, "hello")})
        host.call_analyzed(call("do_action", string("greeted"), x), "do_action", oracle)

        contract = host.function_params("add_action", [string("greeted"), variable("cb")])
        assert contract is not None
        callback = contract[1].type
        assert isinstance(callback, CallableType)
        assert callback.params == (STRING,)
