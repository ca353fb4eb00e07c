"""AnalysisSession — one registry and the components that share it.

A session lives as long as one analysis run in one process. Independent
worker processes each build their own session and load their own corpus.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from hooksig.services.corpus import CorpusLoader
from hooksig.services.extractor import DocCommentExtractor
from hooksig.services.inference import CallSiteInferencer
from hooksig.services.registry import HookRegistry
from hooksig.services.resolver import SignatureResolver

if TYPE_CHECKING:
    from hooksig.config.settings import HooksigSettings

logger = logging.getLogger(__name__)


class AnalysisSession:
    """Owns the hook registry and wires it into every producer and the resolver.

    Usage::

        session = AnalysisSession(HooksigSettings.from_cli())
        session.ensure_corpus()
        session.extractor.extract(source_file)
        contract = session.resolver.resolve("add_filter", call.args, location=..., sink=...)
    """

    def __init__(
        self,
        settings: HooksigSettings,
        registry: HookRegistry | None = None,
    ) -> None:
        self.settings = settings
        self.registry = registry if registry is not None else HookRegistry()
        self.loader = CorpusLoader(self.registry)
        self.extractor = DocCommentExtractor(self.registry)
        self.inferencer = CallSiteInferencer(self.registry)
        self.resolver = SignatureResolver(
            self.registry,
            default_accepted_args=settings.resolver.default_accepted_args,
            report_missing=settings.resolver.report_missing,
        )

    def ensure_corpus(self) -> int:
        """Load the corpus once. Returns the number of hooks loaded by this call."""
        if self.registry.is_seeded:
            return 0
        if not self.settings.corpus.enabled:
            self.registry.mark_seeded()
            return 0
        logger.debug("Loading hook corpus from %s", self.settings.corpus_dir)
        return self.loader.load(self.settings.actions_path, self.settings.filters_path)
