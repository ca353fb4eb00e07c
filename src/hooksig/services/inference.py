"""CallSiteInferencer — signatures for undocumented hooks from their arguments.

Runs after the host has typed a hook invocation. Literal argument types
are widened (``true`` → ``bool``, ``'x'`` → ``string``) since a callback
must accept any value of the general type.

Never overwrites: a hook already known from the corpus or documentation
is left untouched.
"""

from __future__ import annotations

import logging

from hooksig.domain.hooks import invocation_kind
from hooksig.domain.nodes import Node, TypeOracle, first_string_arg
from hooksig.domain.types import MIXED, TypeDescriptor, widen_branches
from hooksig.services.registry import HookRegistry

logger = logging.getLogger(__name__)


class CallSiteInferencer:
    """Fills registry gaps from observed hook invocations."""

    def __init__(self, registry: HookRegistry) -> None:
        self._registry = registry

    def observe(self, call: Node, function_id: str, oracle: TypeOracle) -> list[TypeDescriptor] | None:
        """Infer and register a signature for the hook *call* invokes.

        Returns the registered types, or None when the call was skipped.
        """
        kind = invocation_kind(function_id)
        if kind is None:
            return None
        hook_name = first_string_arg(call.args)
        if hook_name is None or hook_name in self._registry:
            return None

        types: list[TypeDescriptor] = []
        for arg in call.args[1:]:
            inferred = oracle.type_of(arg)
            types.append(MIXED if inferred is None else widen_branches(inferred))

        self._registry.register(hook_name, types, kind)
        logger.debug("Inferred %d parameter types for hook %s", len(types), hook_name)
        return types
