"""HookRegistry — hook name to signature store owned by one analysis session.

Three producers feed it, in order of arrival: the corpus loader (once),
the doc-comment extractor (per file), and the call-site inferencer (per
invocation, only for unknown hooks). The resolver only reads.

INVARIANT: ``register`` never removes information and never stores a
literal type. Types merge by position and the first registered kind for a
name is kept.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Iterator

from hooksig.domain.hooks import HookKind, HookSignature
from hooksig.domain.types import TypeDescriptor, widen_branches

logger = logging.getLogger(__name__)


class HookRegistry:
    """Mutable map of hook signatures with the merge policy built in."""

    def __init__(self) -> None:
        self._hooks: dict[str, HookSignature] = {}
        self._lock = threading.Lock()
        self._seeded = False

    def register(
        self,
        name: str,
        types: Iterable[TypeDescriptor | None],
        kind: HookKind = HookKind.FILTER,
    ) -> HookSignature | None:
        """Add or merge a signature for *name*.

        Empty entries in *types* are dropped first and literal types are
        widened. Returns the stored signature, or None when nothing changed.
        """
        cleaned = tuple(widen_branches(t) for t in types if t is not None)
        with self._lock:
            existing = self._hooks.get(name)
            if existing is None:
                signature = HookSignature(name=name, kind=kind, parameter_types=cleaned)
            elif not cleaned:
                return None
            else:
                if existing.kind != kind:
                    logger.debug(
                        "Keeping kind %s for hook %s (incoming %s)", existing.kind, name, kind
                    )
                signature = existing.merged(cleaned)
            self._hooks[name] = signature
        return signature

    def lookup(self, name: str) -> HookSignature | None:
        return self._hooks.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._hooks

    def __len__(self) -> int:
        return len(self._hooks)

    def __iter__(self) -> Iterator[HookSignature]:
        return iter(list(self._hooks.values()))

    def names(self) -> list[str]:
        return sorted(self._hooks)

    # ------------------------------------------------------------------
    # Corpus seeding
    # ------------------------------------------------------------------

    @property
    def is_seeded(self) -> bool:
        """Whether the corpus loader has already populated this registry."""
        return self._seeded

    def mark_seeded(self) -> None:
        self._seeded = True
