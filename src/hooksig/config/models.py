"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, hooksig.toml only contains overrides.
An empty (or missing) hooksig.toml is a valid configuration.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

# --- hooksig.toml sections ---


class CorpusConfig(BaseModel):
    """[corpus] section."""

    model_config = {"frozen": True}

    enabled: bool = True
    directory: Path | None = None
    actions_file: str = "actions.json"
    filters_file: str = "filters.json"


class ResolverConfig(BaseModel):
    """[resolver] section."""

    model_config = {"frozen": True}

    default_accepted_args: int = Field(default=1, ge=0)
    report_missing: bool = True


class HooksigConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    corpus: CorpusConfig = Field(default_factory=CorpusConfig)
    resolver: ResolverConfig = Field(default_factory=ResolverConfig)
