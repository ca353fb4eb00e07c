"""DocCommentExtractor — hook signatures from doc blocks above invocations.

A doc block written right before ``apply_filters()`` is often attached by
the parser to the enclosing ``return``/``echo``/assignment instead of the
call. The extractor carries the most recent doc block forward across one
pre-order walk and hands it to the next hook invocation, unless some other
non-call node intervenes first.

Hooks found in a file are registered once the walk ends. If the walk
fails part-way, whatever was found before the failure is still registered.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from hooksig.domain.docblock import DocBlock, ParamTag, parse_docblock, recover_array_shape
from hooksig.domain.hooks import HookKind, invocation_kind
from hooksig.domain.nodes import DOC_CARRIERS, Node, SourceFile, first_string_arg
from hooksig.domain.type_parser import parse
from hooksig.domain.types import MIXED, TypeDescriptor
from hooksig.services.registry import HookRegistry

logger = logging.getLogger(__name__)

DocParser = Callable[[str], DocBlock]


@dataclass
class TraversalContext:
    """State carried across one file's walk."""

    pending_doc: str | None = None
    found: dict[str, tuple[HookKind, list[TypeDescriptor]]] = field(default_factory=dict)


def param_types(block: DocBlock) -> list[TypeDescriptor]:
    """One type per ``@param`` tag, ``mixed`` for untyped or invalid tags.

    Every tag keeps its slot so later parameters stay in position.
    """
    types: list[TypeDescriptor] = []
    for tag in block.tags_by_name("param"):
        if not isinstance(tag, ParamTag) or tag.type_text is None:
            types.append(MIXED)
            continue
        declared = [tag.type_text]
        recovered = recover_array_shape(declared, tag.description)
        types.append(parse((recovered or declared)[0]))
    return types


class DocCommentExtractor:
    """Walks one file at a time and registers documented hooks."""

    def __init__(self, registry: HookRegistry, doc_parser: DocParser = parse_docblock) -> None:
        self._registry = registry
        self._parse_doc = doc_parser

    def extract(self, source: SourceFile) -> dict[str, list[TypeDescriptor]]:
        """Walk *source* and register every documented hook invocation.

        Returns the parameter types found per hook name.
        """
        return self.extract_nodes(source.statements, label=str(source.path))

    def extract_nodes(
        self, statements: Iterable[Node], *, label: str = "<nodes>"
    ) -> dict[str, list[TypeDescriptor]]:
        context = TraversalContext()
        try:
            for statement in statements:
                for node in statement.walk():
                    self.visit(node, context)
        except Exception:
            logger.debug("Hook doc extraction aborted in %s", label, exc_info=True)

        for name, (kind, types) in context.found.items():
            self._registry.register(name, types, kind)
        return {name: types for name, (_kind, types) in context.found.items()}

    def visit(self, node: Node, context: TraversalContext) -> None:
        """Apply the doc-association rules to one node."""
        if node.doc and node.kind in DOC_CARRIERS:
            context.pending_doc = node.doc
        elif context.pending_doc is not None and not node.is_call:
            context.pending_doc = None

        if context.pending_doc is None or not node.is_call:
            return
        kind = invocation_kind(node.name)
        if kind is None:
            return

        hook_name = first_string_arg(node.args)
        if hook_name is None:
            context.pending_doc = None
            return

        try:
            block = self._parse_doc(context.pending_doc)
        except Exception as exc:
            logger.debug("Unparseable doc block for hook %s: %s", hook_name, exc)
            context.pending_doc = None
            return

        types = param_types(block)
        if not types:
            return
        context.found[hook_name] = (kind, types)
        context.pending_doc = None
