"""SignatureResolver — parameter contracts for ``add_action``/``add_filter`` calls.

Given a registration call, looks the hook up and synthesizes the four
parameters the host should check the call against::

    add_filter( string $hook, callable(T0, ..., Tk-1): T0 $callback,
                int|null $priority = 10, int|null $accepted_args = 1 )

Return values:
    ``None``: no opinion (the hook name is not a literal string).
    ``[]``: permissive contract, any callback accepted. Used for unknown
    hooks and kind mismatches so one bad lookup does not cascade.
    A list of four :class:`ParameterContract`: the synthesized contract.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from hooksig.domain.diagnostics import (
    Diagnostic,
    DiagnosticSink,
    hook_is_action,
    hook_is_filter,
    hook_not_found,
)
from hooksig.domain.hooks import ADD_ACTION, REGISTRATION_FUNCTIONS, HookSignature
from hooksig.domain.nodes import Node, SourceLocation, first_string_arg
from hooksig.domain.types import INT, NULL, STRING, CallableType, TypeDescriptor, union
from hooksig.services.registry import HookRegistry

logger = logging.getLogger(__name__)

ACCEPTED_ARGS_POSITION = 3

DiagnosticFactory = Callable[[str, SourceLocation], Diagnostic]


@dataclass(frozen=True)
class ParameterContract:
    """One expected parameter of the registration call."""

    name: str
    type: TypeDescriptor
    optional: bool = False


def accepted_args(call_args: Sequence[Node], default: int = 1) -> int:
    """The declared callback argument count: the 4th argument if it is an int literal.

    A negative count is returned as is; :func:`callback_type` then drops that
    many trailing parameters, like PHP's ``array_slice``.
    """
    if len(call_args) <= ACCEPTED_ARGS_POSITION:
        return default
    value = call_args[ACCEPTED_ARGS_POSITION].int_value()
    if value is None:
        return default
    return value


def callback_type(signature: HookSignature, arg_count: int) -> CallableType:
    """The callable a registered callback must satisfy.

    Parameters are truncated to *arg_count* (a negative count drops that many
    from the end); the return type always comes from the full signature.
    """
    return CallableType(
        params=signature.parameter_types[:arg_count],
        returns=signature.return_type,
    )


def registration_contract(signature: HookSignature, arg_count: int) -> list[ParameterContract]:
    optional_int = union([INT, NULL])
    return [
        ParameterContract("hook", STRING),
        ParameterContract("callback", callback_type(signature, arg_count)),
        ParameterContract("priority", optional_int, optional=True),
        ParameterContract("accepted_args", optional_int, optional=True),
    ]


class SignatureResolver:
    """Answers parameter-synthesis requests from the registry."""

    function_ids: tuple[str, ...] = REGISTRATION_FUNCTIONS

    def __init__(
        self,
        registry: HookRegistry,
        *,
        default_accepted_args: int = 1,
        report_missing: bool = True,
    ) -> None:
        self._registry = registry
        self._default_accepted_args = default_accepted_args
        self._report_missing = report_missing

    def resolve(
        self,
        function_id: str,
        call_args: Sequence[Node],
        *,
        location: SourceLocation | None = None,
        sink: DiagnosticSink | None = None,
    ) -> list[ParameterContract] | None:
        """Synthesize the contract for one ``add_action``/``add_filter`` call."""
        hook_name = first_string_arg(call_args)
        if hook_name is None:
            return None

        signature = self._registry.lookup(hook_name)
        is_action = function_id.lower() == ADD_ACTION

        if signature is None:
            if self._report_missing:
                self._report(sink, location, hook_name, hook_not_found)
            return []
        if is_action and not signature.kind.is_action:
            self._report(sink, location, hook_name, hook_is_filter)
            return []
        if not is_action and not signature.kind.is_filter:
            self._report(sink, location, hook_name, hook_is_action)
            return []

        arg_count = accepted_args(call_args, self._default_accepted_args)
        return registration_contract(signature, arg_count)

    @staticmethod
    def _report(
        sink: DiagnosticSink | None,
        location: SourceLocation | None,
        hook_name: str,
        build: DiagnosticFactory,
    ) -> None:
        # Diagnostics need a location to point at.
        if location is None or sink is None:
            return
        diagnostic = build(hook_name, location)
        logger.debug("Reporting %s", diagnostic)
        sink.report(diagnostic)
