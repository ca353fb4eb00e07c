"""CorpusLoader — seeds the registry from the hook knowledge base.

Runs once per session: action records first, then filter records. Corpus
entries have the lowest precedence, so later documentation and inference
merge on top of them.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from hooksig.domain.docblock import recover_array_shape
from hooksig.domain.type_parser import parse
from hooksig.domain.types import TypeDescriptor
from hooksig.infrastructure.corpus import CorpusRecord, CorpusTag, read_corpus_file
from hooksig.services.registry import HookRegistry

logger = logging.getLogger(__name__)


def tag_type_text(tag: CorpusTag) -> str:
    """The ``|``-joined type expression of a param tag, after shape recovery.

    Returns an empty string when the tag declares no types.
    """
    types = recover_array_shape(tag.types, tag.content) or tag.types
    if not types:
        return ""
    return "|".join(types)


def record_types(record: CorpusRecord) -> list[TypeDescriptor]:
    """Parse the param tags of *record* into ordered type descriptors.

    Tags without a usable type expression are dropped.
    """
    texts = [tag_type_text(tag) for tag in record.param_tags()]
    return [parse(text) for text in texts if text]


class CorpusLoader:
    """Loads corpus files into a :class:`HookRegistry`."""

    def __init__(self, registry: HookRegistry) -> None:
        self._registry = registry

    def load_records(self, records: Iterable[CorpusRecord]) -> int:
        """Register every record. Returns how many were registered."""
        count = 0
        for record in records:
            try:
                types = record_types(record)
            except Exception:
                logger.debug("Skipping corpus hook %s", record.name, exc_info=True)
                continue
            self._registry.register(record.name, types, record.kind)
            count += 1
        return count

    def load(self, actions_path: Path, filters_path: Path) -> int:
        """Seed the registry from the two corpus files.

        No-op (returns 0) when the registry was already seeded.
        """
        if self._registry.is_seeded:
            return 0
        count = 0
        for path in (actions_path, filters_path):
            count += self.load_records(read_corpus_file(path))
        self._registry.mark_seeded()
        logger.debug("Seeded %d hooks from corpus", count)
        return count
