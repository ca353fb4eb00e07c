"""Plugin discovery, loading, and dispatch for host analyzers.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints
in the ``hooksig.plugins`` group. Hosts call the dispatch helpers instead
of the raw hook relay so plugin failures stay contained.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

import pluggy

from hooksig.plugins.hookspecs import AnalyzerHookSpec

if TYPE_CHECKING:
    from hooksig.domain.diagnostics import DiagnosticSink
    from hooksig.domain.nodes import Node, SourceFile, SourceLocation, TypeOracle
    from hooksig.services.resolver import ParameterContract

PROJECT_NAME = "hooksig"
ENTRY_POINT_GROUP = "hooksig.plugins"

logger = logging.getLogger(__name__)


class PluginManager:
    """Manages plugin discovery, loading, and hook dispatch."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(AnalyzerHookSpec)
        self._loaded: bool = False

    def discover_and_load(self) -> list[str]:
        """Discover plugins from entry points. Returns loaded plugin names."""
        self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        self._normalize_plugin_instances()
        self._loaded = True
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance directly (e.g. one bound to a session)."""
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        logger.debug("Registered plugin: %s", resolved_name)

    def unregister(self, plugin: object) -> None:
        """Unregister a plugin instance."""
        self._pm.unregister(plugin)

    @property
    def is_loaded(self) -> bool:
        """Whether discover_and_load() has been called."""
        return self._loaded

    @property
    def hook(self) -> pluggy.HookRelay:
        """Access the raw hook relay."""
        return self._pm.hook

    def get_plugins(self) -> list[object]:
        """Return all registered plugins."""
        return list(self._pm.get_plugins())

    def list_plugin_names(self) -> list[str]:
        """Return names of all registered plugins."""
        return [self._pm.get_name(p) or p.__class__.__name__ for p in self._pm.get_plugins()]

    # ------------------------------------------------------------------
    # Host dispatch
    # ------------------------------------------------------------------

    def analyze_file(self, source_file: SourceFile, oracle: TypeOracle) -> None:
        """Run ``before_analyze_file`` on every plugin."""
        try:
            self._pm.hook.before_analyze_file(source_file=source_file, oracle=oracle)
        except Exception:
            logger.warning("before_analyze_file failed for %s", source_file.path, exc_info=True)

    def call_analyzed(self, call: Node, function_id: str, oracle: TypeOracle) -> None:
        """Run ``after_function_call_analysis`` on every plugin."""
        try:
            self._pm.hook.after_function_call_analysis(
                call=call, function_id=function_id, oracle=oracle
            )
        except Exception:
            logger.warning("after_function_call_analysis failed for %s", function_id, exc_info=True)

    def function_ids(self) -> list[str]:
        """All function names some plugin synthesizes parameters for."""
        try:
            results = self._pm.hook.function_ids()
        except Exception:
            logger.warning("function_ids failed", exc_info=True)
            return []
        names: list[str] = []
        for result in results:
            for name in result or []:
                if name not in names:
                    names.append(name)
        return names

    def function_params(
        self,
        function_id: str,
        call_args: Sequence[Node],
        *,
        location: SourceLocation | None = None,
        sink: DiagnosticSink | None = None,
    ) -> list[ParameterContract] | None:
        """The first plugin-provided parameter contract for a call, if any."""
        try:
            return self._pm.hook.function_params(
                function_id=function_id,
                call_args=call_args,
                location=location,
                sink=sink,
            )
        except Exception:
            logger.warning("function_params failed for %s", function_id, exc_info=True)
            return None

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _normalize_plugin_instances(self) -> None:
        """Replace registered plugin classes with instantiated objects.

        Entry-point loading may register a plugin class directly. Hook dispatch
        against class objects leaves ``self`` unbound and fails at runtime.
        """
        for plugin in list(self._pm.get_plugins()):
            if not inspect.isclass(plugin):
                continue
            if not self._has_hook_impls(plugin):
                continue

            plugin_name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)

            try:
                instance = plugin()
            except Exception:
                logger.warning(
                    "Failed to instantiate entry-point plugin %s",
                    plugin_name,
                    exc_info=True,
                )
                continue

            self._pm.register(instance, name=plugin_name)
            logger.debug("Instantiated entry-point plugin: %s", plugin_name)

    @staticmethod
    def _has_hook_impls(cls: type) -> bool:
        """Check whether *cls* has any methods decorated with ``@hookimpl``.

        Pluggy's ``HookimplMarker("hooksig")`` sets a ``hooksig_impl``
        attribute on decorated methods.
        """
        for name in dir(cls):
            if name.startswith("_"):
                continue
            method = getattr(cls, name, None)
            if callable(method) and getattr(method, "hooksig_impl", None):
                return True
        return False
