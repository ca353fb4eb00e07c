"""Built-in plugins shipped with hooksig."""

from hooksig.plugins.builtins.hook_types import HookTypesPlugin

__all__ = ["HookTypesPlugin"]
