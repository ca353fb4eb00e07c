"""Hook kinds, signatures, and the position-wise merge rule.

Hooks are either actions (invoked for side effects) or filters (invoked to
transform a value). The ``*_reference`` kinds come from the by-reference
invocation forms and are equivalent to their base kind for compatibility.

INVARIANT: merging never shortens a signature. Incoming entries override
by position; entries beyond the incoming length are preserved.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import StrEnum

from hooksig.domain.types import MIXED, NULL, VOID, TypeDescriptor, union


class HookKind(StrEnum):
    """Registered kind of a hook."""

    ACTION = "action"
    FILTER = "filter"
    ACTION_REFERENCE = "action_reference"
    FILTER_REFERENCE = "filter_reference"

    @property
    def is_action(self) -> bool:
        return self in (HookKind.ACTION, HookKind.ACTION_REFERENCE)

    @property
    def is_filter(self) -> bool:
        return self in (HookKind.FILTER, HookKind.FILTER_REFERENCE)


# --- Invocation and registration function names ---

FILTER_INVOCATIONS: dict[str, HookKind] = {
    "apply_filters": HookKind.FILTER,
    "apply_filters_ref_array": HookKind.FILTER_REFERENCE,
    "apply_filters_deprecated": HookKind.FILTER,
}

ACTION_INVOCATIONS: dict[str, HookKind] = {
    "do_action": HookKind.ACTION,
    "do_action_ref_array": HookKind.ACTION_REFERENCE,
    "do_action_deprecated": HookKind.ACTION,
}

ADD_ACTION = "add_action"
ADD_FILTER = "add_filter"
REGISTRATION_FUNCTIONS: tuple[str, ...] = (ADD_ACTION, ADD_FILTER)


def invocation_kind(function_name: str | None) -> HookKind | None:
    """Return the hook kind produced by an invocation function, or None.

    Examples:
        >>> invocation_kind("apply_filters")
        <HookKind.FILTER: 'filter'>
        >>> invocation_kind("add_filter") is None
        True
    """
    if function_name is None:
        return None
    key = function_name.lstrip("\\").lower()
    return FILTER_INVOCATIONS.get(key) or ACTION_INVOCATIONS.get(key)


def merge_types(
    existing: Sequence[TypeDescriptor],
    incoming: Sequence[TypeDescriptor],
) -> tuple[TypeDescriptor, ...]:
    """Overlay *incoming* onto *existing* position by position."""
    length = max(len(existing), len(incoming))
    return tuple(incoming[i] if i < len(incoming) else existing[i] for i in range(length))


@dataclass(frozen=True)
class HookSignature:
    """Kind plus ordered parameter types of one hook.

    ``parameter_types[0]`` is the first argument after the hook name.
    """

    name: str
    kind: HookKind
    parameter_types: tuple[TypeDescriptor, ...] = field(default_factory=tuple)

    @property
    def return_type(self) -> TypeDescriptor:
        """Actions return ``void|null``; filters return their first parameter type."""
        if self.kind.is_action:
            return union([VOID, NULL])
        if self.parameter_types:
            return self.parameter_types[0]
        return MIXED

    def merged(self, incoming: Sequence[TypeDescriptor]) -> HookSignature:
        """Return a copy with *incoming* merged in; the kind is kept."""
        if not incoming:
            return self
        return HookSignature(
            name=self.name,
            kind=self.kind,
            parameter_types=merge_types(self.parameter_types, incoming),
        )
