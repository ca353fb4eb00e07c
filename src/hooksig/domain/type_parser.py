"""Textual type expressions — parse into descriptors and render back.

Supported syntax::

    int | string | WP_Post | ?int | (int|string)
    string[] | array<int, string> | list<WP_Term>
    true | false | 42 | 1.5 | 'literal'
    callable | callable(int, string): bool
    array{ name: string, id?: int, 0: bool }

Anything else (intersections, conditional types, stray punctuation) makes
:func:`parse` fall back to ``mixed``. Untyped or badly typed documentation
is common and must never block analysis.
"""

from __future__ import annotations

import logging
import re

from hooksig.domain.types import (
    ARRAY,
    BOOL,
    FLOAT,
    INT,
    MIXED,
    NULL,
    OBJECT,
    STRING,
    VOID,
    ArrayShape,
    CallableType,
    Literal,
    Named,
    Primitive,
    ShapeField,
    TypeDescriptor,
    TypeKind,
    UnionType,
    nullable,
    union,
)

logger = logging.getLogger(__name__)


class TypeSyntaxError(ValueError):
    """Raised internally for type expressions outside the supported grammar."""


_TOKEN_PATTERN = re.compile(
    r"""
    (?P<space>\s+)
    |(?P<string>'(?:[^'\\]|\\.)*'|"(?:[^"\\]|\\.)*")
    |(?P<number>-?\d+(?:\.\d+)?)
    |(?P<name>\$this\b|\\?[A-Za-z_][\w\\-]*)
    |(?P<variable>\$\w+)
    |(?P<ellipsis>\.\.\.)
    |(?P<punct>\[\]|[|&?(){}<>,:=])
    """,
    re.VERBOSE,
)

_IDENTIFIER = re.compile(r"^[A-Za-z_][\w-]*$")

_ALIASES: dict[str, TypeDescriptor] = {
    "bool": BOOL,
    "boolean": BOOL,
    "int": INT,
    "integer": INT,
    "positive-int": INT,
    "negative-int": INT,
    "non-negative-int": INT,
    "non-positive-int": INT,
    "float": FLOAT,
    "double": FLOAT,
    "string": STRING,
    "non-empty-string": STRING,
    "numeric-string": STRING,
    "class-string": STRING,
    "array": ARRAY,
    "list": ARRAY,
    "non-empty-array": ARRAY,
    "non-empty-list": ARRAY,
    "iterable": ARRAY,
    "object": OBJECT,
    "$this": OBJECT,
    "self": OBJECT,
    "static": OBJECT,
    "mixed": MIXED,
    "resource": MIXED,
    "void": VOID,
    "null": NULL,
    "scalar": union([BOOL, INT, FLOAT, STRING]),
}

_SHAPE_NAMES = frozenset({"array", "list", "non-empty-array", "non-empty-list"})
_CALLABLE_NAMES = frozenset({"callable", "closure", "\\closure"})

Token = tuple[str, str]


def tokenize(text: str) -> list[Token]:
    """Split *text* into ``(kind, text)`` tokens, dropping whitespace."""
    tokens: list[Token] = []
    pos = 0
    while pos < len(text):
        match = _TOKEN_PATTERN.match(text, pos)
        if match is None:
            raise TypeSyntaxError(f"Unexpected character {text[pos]!r} at {pos}")
        kind = match.lastgroup or ""
        if kind != "space":
            tokens.append((kind, match.group()))
        pos = match.end()
    return tokens


def _unquote(text: str) -> str:
    body = text[1:-1]
    return re.sub(r"\\(.)", r"\1", body)


class _Parser:
    """Recursive-descent parser over a token list."""

    def __init__(self, tokens: list[Token]) -> None:
        self._tokens = tokens
        self._pos = 0

    def parse(self) -> TypeDescriptor:
        result = self._union()
        token = self._peek()
        if token is not None:
            raise TypeSyntaxError(f"Unexpected trailing token {token[1]!r}")
        return result

    # ------------------------------------------------------------------
    # Token helpers
    # ------------------------------------------------------------------

    def _peek(self, offset: int = 0) -> Token | None:
        index = self._pos + offset
        if index < len(self._tokens):
            return self._tokens[index]
        return None

    def _peek_text(self, offset: int = 0) -> str | None:
        token = self._peek(offset)
        return token[1] if token else None

    def _next(self) -> Token:
        token = self._peek()
        if token is None:
            raise TypeSyntaxError("Unexpected end of type expression")
        self._pos += 1
        return token

    def _accept(self, text: str) -> bool:
        if self._peek_text() == text:
            self._pos += 1
            return True
        return False

    def _expect(self, text: str) -> None:
        if not self._accept(text):
            raise TypeSyntaxError(f"Expected {text!r}, got {self._peek_text()!r}")

    # ------------------------------------------------------------------
    # Grammar
    # ------------------------------------------------------------------

    def _union(self) -> TypeDescriptor:
        members = [self._postfix()]
        while self._accept("|"):
            members.append(self._postfix())
        if self._peek_text() == "&":
            raise TypeSyntaxError("Intersection types are not supported")
        return union(members)

    def _postfix(self) -> TypeDescriptor:
        descriptor = self._atom()
        while self._accept("[]"):
            descriptor = ARRAY
        return descriptor

    def _atom(self) -> TypeDescriptor:
        kind, text = self._next()
        if text == "?":
            return nullable(self._postfix())
        if text == "(":
            inner = self._union()
            self._expect(")")
            return inner
        if kind == "string":
            return Literal(TypeKind.STRING, _unquote(text))
        if kind == "number":
            if "." in text:
                return Literal(TypeKind.FLOAT, float(text))
            return Literal(TypeKind.INT, int(text))
        if kind == "name":
            return self._named(text)
        raise TypeSyntaxError(f"Unexpected token {text!r}")

    def _named(self, text: str) -> TypeDescriptor:
        lowered = text.lower()
        if lowered in _SHAPE_NAMES and self._accept("{"):
            return self._shape()
        if lowered in _CALLABLE_NAMES and self._peek_text() == "(":
            return self._callable()

        if lowered == "true":
            base: TypeDescriptor = Literal(TypeKind.BOOL, True)
        elif lowered == "false":
            base = Literal(TypeKind.BOOL, False)
        elif lowered == "callable":
            base = CallableType(None, MIXED)
        elif lowered in _ALIASES:
            base = _ALIASES[lowered]
        else:
            base = Named(text.lstrip("\\"))

        if self._accept("<"):
            # Generic parameters are checked for syntax but not retained.
            self._union()
            while self._accept(","):
                self._union()
            self._expect(">")
        return base

    def _shape(self) -> ArrayShape:
        fields: list[ShapeField] = []
        position = 0
        while not self._accept("}"):
            key = self._shape_key()
            if key is None:
                fields.append(ShapeField(str(position), self._union()))
                position += 1
            else:
                name, optional = key
                fields.append(ShapeField(name, self._union(), optional))
            if not self._accept(","):
                self._expect("}")
                break
        return ArrayShape(tuple(fields))

    def _shape_key(self) -> tuple[str, bool] | None:
        token = self._peek()
        if token is None or token[0] not in ("name", "string", "number"):
            return None
        following = self._peek_text(1)
        if following == ":":
            self._pos += 2
            optional = False
        elif following == "?" and self._peek_text(2) == ":":
            self._pos += 3
            optional = True
        else:
            return None
        kind, text = token
        return (_unquote(text) if kind == "string" else text), optional

    def _callable(self) -> CallableType:
        self._expect("(")
        params: list[TypeDescriptor] = []
        if not self._accept(")"):
            while True:
                params.append(self._union())
                self._accept("...")
                token = self._peek()
                if token is not None and token[0] == "variable":
                    self._pos += 1
                self._accept("=")
                if self._accept(")"):
                    break
                self._expect(",")
        returns: TypeDescriptor = MIXED
        if self._accept(":"):
            returns = self._postfix()
        return CallableType(tuple(params), returns)


def parse(text: str | None) -> TypeDescriptor:
    """Parse a type expression, returning ``mixed`` for anything unsupported.

    Never raises: empty input and grammar errors both produce ``mixed``.
    """
    if text is None or not text.strip():
        return MIXED
    try:
        return _Parser(tokenize(text)).parse()
    except (TypeSyntaxError, RecursionError) as exc:
        logger.debug("Unparseable type expression %r: %s", text, exc)
        return MIXED


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def _render_key(name: str) -> str:
    if _IDENTIFIER.match(name) or name.isdigit():
        return name
    escaped = name.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def _render_literal(descriptor: Literal) -> str:
    if descriptor.kind is TypeKind.BOOL:
        return "true" if descriptor.value else "false"
    if descriptor.kind is TypeKind.STRING:
        escaped = str(descriptor.value).replace("\\", "\\\\").replace("'", "\\'")
        return f"'{escaped}'"
    return repr(descriptor.value)


def render(descriptor: TypeDescriptor) -> str:
    """Render *descriptor* in the textual syntax accepted by :func:`parse`.

    Union members are sorted so the output is deterministic.
    """
    if isinstance(descriptor, Primitive):
        return str(descriptor.kind)
    if isinstance(descriptor, Named):
        return descriptor.name
    if isinstance(descriptor, Literal):
        return _render_literal(descriptor)
    if isinstance(descriptor, ArrayShape):
        parts = [
            f"{_render_key(entry.name)}{'?' if entry.optional else ''}: {render(entry.type)}"
            for entry in descriptor.fields
        ]
        return "array{" + ", ".join(parts) + "}"
    if isinstance(descriptor, CallableType):
        if descriptor.params is None:
            return "callable"
        params = ", ".join(render(param) for param in descriptor.params)
        returns = render(descriptor.returns)
        if isinstance(descriptor.returns, UnionType):
            returns = f"({returns})"
        return f"callable({params}): {returns}"
    return "|".join(sorted(render(member) for member in descriptor.members))
