"""Host-neutral syntax tree consumed by the extractor, inferencer, and resolver.

Host analyzers translate their own AST into these nodes (or build them
directly). Only the distinctions the hook machinery needs are modelled:
calls with their arguments, the statements a doc block may attach to, and
scalar literals.

Nodes compare and hash by identity, like the host AST nodes they mirror,
so type oracles can key on them.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from hooksig.domain.types import TypeDescriptor


class NodeKind(StrEnum):
    CALL = "call"
    RETURN = "return"
    VARIABLE = "variable"
    ECHO = "echo"
    STRING = "string"
    INTEGER = "integer"
    ASSIGN = "assign"
    STATEMENT = "statement"
    OTHER = "other"


# Node kinds whose attached doc block may describe a hook invocation.
DOC_CARRIERS = frozenset({NodeKind.CALL, NodeKind.RETURN, NodeKind.VARIABLE, NodeKind.ECHO})


@dataclass(frozen=True)
class SourceLocation:
    """Position of a node in a source file (1-based line and column)."""

    file: str
    line: int
    column: int = 1

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.column}"


@dataclass(frozen=True, eq=False)
class Node:
    """One syntax node.

    Attributes:
        kind: Which variant this node is.
        name: Function name for calls, variable name for variables.
        value: Literal value for string and integer nodes.
        args: Call arguments, in order.
        children: Any other nested nodes, in source order.
        doc: Attached ``/** ... */`` documentation block, if any.
        location: Where the node starts.
    """

    kind: NodeKind
    name: str | None = None
    value: str | int | None = None
    args: tuple[Node, ...] = ()
    children: tuple[Node, ...] = ()
    doc: str | None = None
    location: SourceLocation | None = None

    @property
    def is_call(self) -> bool:
        return self.kind is NodeKind.CALL

    def string_value(self) -> str | None:
        """The literal string value, or None if this is not a string literal."""
        if self.kind is NodeKind.STRING and isinstance(self.value, str):
            return self.value
        return None

    def int_value(self) -> int | None:
        """The literal integer value, or None if this is not an integer literal."""
        if self.kind is NodeKind.INTEGER and isinstance(self.value, int):
            return self.value
        return None

    def walk(self) -> Iterator[Node]:
        """Yield this node and every descendant in pre-order.

        A node's call arguments are visited before its other children.
        """
        stack: list[Node] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed((*node.args, *node.children)))


@dataclass(frozen=True)
class SourceFile:
    """One analyzed file: its path and top-level statements."""

    path: Path
    statements: tuple[Node, ...] = field(default_factory=tuple)

    def walk(self) -> Iterator[Node]:
        for statement in self.statements:
            yield from statement.walk()


# ---------------------------------------------------------------------------
# Constructors
# ---------------------------------------------------------------------------


def call(
    name: str,
    *args: Node,
    doc: str | None = None,
    location: SourceLocation | None = None,
) -> Node:
    return Node(NodeKind.CALL, name=name, args=tuple(args), doc=doc, location=location)


def string(value: str) -> Node:
    return Node(NodeKind.STRING, value=value)


def integer(value: int) -> Node:
    return Node(NodeKind.INTEGER, value=value)


def variable(name: str, *, doc: str | None = None) -> Node:
    return Node(NodeKind.VARIABLE, name=name, doc=doc)


def statement(kind: NodeKind, *children: Node, doc: str | None = None) -> Node:
    """Build a non-call node (``return``, ``echo``, assignment, ...)."""
    return Node(kind, children=tuple(children), doc=doc)


# ---------------------------------------------------------------------------
# Type oracle
# ---------------------------------------------------------------------------


@runtime_checkable
class TypeOracle(Protocol):
    """Statically inferred types of already-analyzed expressions."""

    def type_of(self, node: Node) -> TypeDescriptor | None: ...


class MappingOracle:
    """A :class:`TypeOracle` backed by a node → type mapping."""

    def __init__(self, types: Mapping[Node, TypeDescriptor] | None = None) -> None:
        self._types: dict[Node, TypeDescriptor] = dict(types or {})

    def record(self, node: Node, descriptor: TypeDescriptor) -> None:
        self._types[node] = descriptor

    def type_of(self, node: Node) -> TypeDescriptor | None:
        return self._types.get(node)


def first_string_arg(args: Sequence[Node]) -> str | None:
    """The literal hook name passed as the first argument, if any."""
    if not args:
        return None
    return args[0].string_value()
