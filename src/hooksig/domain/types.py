"""Type descriptors — the normalized value types carried by hook signatures.

A closed set of frozen variants:

- :class:`Primitive`: bool, int, float, string, array, object, mixed, void, null.
- :class:`Literal`: a literal ``true``/``false``, integer, float or string.
- :class:`Named`: an object of a named class (``WP_Post``).
- :class:`ArrayShape`: ``array{ field: type, ... }`` with ordered fields.
- :class:`CallableType`: ``callable(params): return``.
- :class:`UnionType`: an unordered set of alternatives.

INVARIANT: hook signatures never store :class:`Literal` descriptors;
they are widened to their :class:`Primitive` first.

Textual parsing and rendering live in :mod:`hooksig.domain.type_parser`.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum
from typing import TypeAlias


class TypeKind(StrEnum):
    """Primitive kinds a descriptor can reduce to."""

    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"
    MIXED = "mixed"
    VOID = "void"
    NULL = "null"


@dataclass(frozen=True, slots=True)
class Primitive:
    kind: TypeKind


@dataclass(frozen=True, slots=True)
class Literal:
    """A literal-valued subtype such as ``true`` or ``'x'``."""

    kind: TypeKind
    value: bool | int | float | str


@dataclass(frozen=True, slots=True)
class Named:
    """An object of a named class or interface."""

    name: str


@dataclass(frozen=True, slots=True)
class ShapeField:
    name: str
    type: TypeDescriptor
    optional: bool = False


@dataclass(frozen=True, slots=True)
class ArrayShape:
    """Structured array with ordered, named fields."""

    fields: tuple[ShapeField, ...]

    def field(self, name: str) -> ShapeField | None:
        for entry in self.fields:
            if entry.name == name:
                return entry
        return None


@dataclass(frozen=True, slots=True)
class CallableType:
    """A callable with ordered parameters.

    ``params`` is None for a bare ``callable`` whose parameters are unknown.
    """

    params: tuple[TypeDescriptor, ...] | None
    returns: TypeDescriptor


@dataclass(frozen=True, slots=True)
class UnionType:
    members: frozenset[TypeDescriptor]


TypeDescriptor: TypeAlias = Primitive | Literal | Named | ArrayShape | CallableType | UnionType

BOOL = Primitive(TypeKind.BOOL)
INT = Primitive(TypeKind.INT)
FLOAT = Primitive(TypeKind.FLOAT)
STRING = Primitive(TypeKind.STRING)
ARRAY = Primitive(TypeKind.ARRAY)
OBJECT = Primitive(TypeKind.OBJECT)
MIXED = Primitive(TypeKind.MIXED)
VOID = Primitive(TypeKind.VOID)
NULL = Primitive(TypeKind.NULL)


def branches(descriptor: TypeDescriptor) -> list[TypeDescriptor]:
    """Return the alternatives of a union, or ``[descriptor]`` for any other shape."""
    if isinstance(descriptor, UnionType):
        return list(descriptor.members)
    return [descriptor]


def union(descriptors: Iterable[TypeDescriptor]) -> TypeDescriptor:
    """Build a deduplicated union, flattening nested unions.

    A single alternative collapses to itself; no alternatives yields ``mixed``.
    """
    members: set[TypeDescriptor] = set()
    for descriptor in descriptors:
        members.update(branches(descriptor))
    if not members:
        return MIXED
    if len(members) == 1:
        return next(iter(members))
    return UnionType(frozenset(members))


def widen(descriptor: TypeDescriptor) -> TypeDescriptor:
    """Map a literal to its general primitive; identity on every other shape.

    Examples:
        >>> widen(Literal(TypeKind.BOOL, True))
        Primitive(kind=<TypeKind.BOOL: 'bool'>)
        >>> widen(INT) is INT
        True
    """
    if isinstance(descriptor, Literal):
        return Primitive(descriptor.kind)
    return descriptor


def widen_branches(descriptor: TypeDescriptor) -> TypeDescriptor:
    """Widen every alternative of *descriptor* and reassemble the union.

    Shape fields and callable parameters/returns are widened too, so the
    result never satisfies :func:`contains_literal`.
    """
    return union(_widen_nested(widen(branch)) for branch in branches(descriptor))


def _widen_nested(descriptor: TypeDescriptor) -> TypeDescriptor:
    if isinstance(descriptor, ArrayShape):
        return ArrayShape(
            tuple(
                ShapeField(entry.name, widen_branches(entry.type), entry.optional)
                for entry in descriptor.fields
            )
        )
    if isinstance(descriptor, CallableType):
        params = descriptor.params
        return CallableType(
            None if params is None else tuple(widen_branches(p) for p in params),
            widen_branches(descriptor.returns),
        )
    return descriptor


def contains_literal(descriptor: TypeDescriptor) -> bool:
    """Whether a literal occurs anywhere inside *descriptor*."""
    if isinstance(descriptor, Literal):
        return True
    if isinstance(descriptor, UnionType):
        return any(contains_literal(member) for member in descriptor.members)
    if isinstance(descriptor, ArrayShape):
        return any(contains_literal(entry.type) for entry in descriptor.fields)
    if isinstance(descriptor, CallableType):
        params = descriptor.params or ()
        return contains_literal(descriptor.returns) or any(contains_literal(p) for p in params)
    return False


def nullable(descriptor: TypeDescriptor) -> TypeDescriptor:
    """Return ``descriptor|null``."""
    return union([descriptor, NULL])
