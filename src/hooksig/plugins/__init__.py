"""Extension layer — the host analyzer plugin surface via pluggy.

Discovery: entry_points (pip-installed) in the ``hooksig.plugins`` group.
INVARIANT: Plugin failures are warnings, never errors.
"""

from hooksig.plugins.manager import PluginManager

__all__ = ["PluginManager"]
