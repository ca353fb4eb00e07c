"""Documentation block parsing — ``/** ... */`` into summary and tags.

Pure functions, no infrastructure dependencies. Tags start at lines
beginning with ``@name`` unless an earlier tag left a ``{`` open, which is
how hash-notation descriptions keep their nested ``@type`` lines::

    /**
     * Filters the query arguments.
     *
     * @param array $args {
     *     Query arguments.
     *
     *     @type int    $number Maximum results.
     *     @type string $order  Sort direction.
     * }
     * @param string $context Where the query runs.
     */
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TypeAlias


class DocBlockError(ValueError):
    """Raised when text is not a documentation block at all."""


@dataclass(frozen=True)
class DocTag:
    name: str
    content: str


@dataclass(frozen=True)
class ParamTag:
    """A well-formed ``@param [type] [$variable] [description]`` tag."""

    type_text: str | None
    variable: str | None
    description: str
    name: str = "param"


@dataclass(frozen=True)
class InvalidTag:
    """A tag whose body could not be understood."""

    name: str
    content: str
    reason: str


Tag: TypeAlias = DocTag | ParamTag | InvalidTag


@dataclass(frozen=True)
class DocBlock:
    summary: str
    tags: tuple[Tag, ...]

    def tags_by_name(self, name: str) -> list[Tag]:
        return [tag for tag in self.tags if tag.name == name]


_LINE_PREFIX = re.compile(r"^\s*\*? ?")
_TAG_START = re.compile(r"^@([\w-]+)(?:\s+(.*))?$")
_VARIABLE = re.compile(r"^&?(?:\.\.\.)?\$(\w+)")
_NESTED_TYPE = re.compile(r"@type\s+(\S+)\s+\$(\w+)")

_OPENERS = {"{": "}", "[": "]", "(": ")", "<": ">"}
_CLOSERS = frozenset(_OPENERS.values())


def _brace_delta(line: str) -> int:
    return line.count("{") - line.count("}")


def _split_type_token(content: str) -> tuple[str, str]:
    """Split a leading type token off *content*, respecting nested brackets.

    Raises:
        ValueError: If the brackets in the type token are unbalanced.
    """
    stack: list[str] = []
    quote: str | None = None
    for index, char in enumerate(content):
        if quote is not None:
            if char == quote:
                quote = None
            continue
        if char in ("'", '"'):
            quote = char
        elif char in _OPENERS:
            stack.append(_OPENERS[char])
        elif char in _CLOSERS:
            if not stack or stack.pop() != char:
                raise ValueError(f"unbalanced {char!r} in type")
        elif char.isspace() and not stack:
            return content[:index], content[index:].strip()
    if stack or quote is not None:
        raise ValueError("unterminated type")
    return content, ""


def parse_param(content: str) -> ParamTag | InvalidTag:
    """Parse the body of a ``@param`` tag."""
    text = content.strip()
    type_text: str | None = None
    if text and not _VARIABLE.match(text):
        try:
            type_text, text = _split_type_token(text)
        except ValueError as exc:
            return InvalidTag("param", content, str(exc))

    variable: str | None = None
    match = _VARIABLE.match(text)
    if match:
        variable = match.group(1)
        text = text[match.end() :].strip()
    return ParamTag(type_text=type_text, variable=variable, description=text)


def parse_docblock(text: str) -> DocBlock:
    """Parse a ``/** ... */`` block into its summary and tags.

    Raises:
        DocBlockError: If *text* is not delimited as a documentation block.
    """
    stripped = text.strip()
    if not stripped.startswith("/**") or not stripped.endswith("*/") or len(stripped) < 5:
        raise DocBlockError("Not a documentation block")

    body = stripped[3:-2]
    summary_lines: list[str] = []
    raw_tags: list[tuple[str, list[str]]] = []
    depth = 0

    for raw_line in body.splitlines():
        line = _LINE_PREFIX.sub("", raw_line, count=1).rstrip()
        match = _TAG_START.match(line)
        if match and depth <= 0:
            raw_tags.append((match.group(1), [match.group(2) or ""]))
            depth = _brace_delta(line)
        elif raw_tags:
            raw_tags[-1][1].append(line)
            depth += _brace_delta(line)
        else:
            summary_lines.append(line)

    tags: list[Tag] = []
    for name, lines in raw_tags:
        content = "\n".join(lines).strip()
        if name == "param":
            tags.append(parse_param(content))
        else:
            tags.append(DocTag(name, content))
    return DocBlock(summary="\n".join(summary_lines).strip(), tags=tuple(tags))


def recover_array_shape(types: Sequence[str] | None, content: str) -> list[str] | None:
    """Rebuild an ``array{ ... }`` type from hash-notation ``@type`` lines.

    Only applies when the declared type is the bare ``array`` (or missing)
    and *content* opens exactly one nested block. Returns None when
    nothing can be recovered.

    Examples:
        >>> recover_array_shape(["array"], "Args. { @type int $id ID. }")
        ['array{ id: int }']
        >>> recover_array_shape(["string"], "{ @type int $id }") is None
        True
    """
    if types is not None and list(types) != ["array"]:
        return None
    if content.count("{") != 1:
        return None
    matches = _NESTED_TYPE.findall(content)
    if not matches:
        return None
    properties = ", ".join(f"{field_name}: {type_text}" for type_text, field_name in matches)
    return [f"array{{ {properties} }}"]
