"""Corpus file reading — hook knowledge-base JSON into validated records.

The corpus ships as two files, ``actions.json`` and ``filters.json``, each
holding ``{"hooks": [record, ...]}`` (a bare list is accepted too)::

    {
      "name": "the_content",
      "file": "wp-includes/post-template.php",
      "type": "filter",
      "doc": {
        "description": "Filters the post content.",
        "tags": [
          {"name": "param", "content": "Content of the current post.",
           "types": ["string"], "variable": "$content"}
        ]
      }
    }

Records and their tags are validated one at a time; a malformed record or
tag is logged and skipped so the rest of the file still loads.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import AliasChoices, BaseModel, Field, ValidationError, field_validator

from hooksig.domain.hooks import HookKind

logger = logging.getLogger(__name__)


class CorpusTag(BaseModel):
    """One documentation tag of a corpus record."""

    model_config = {"frozen": True}

    name: str
    content: str = ""
    types: list[str] | None = None


class CorpusDoc(BaseModel):
    model_config = {"frozen": True}

    description: str = ""
    long_description: str = ""
    tags: list[CorpusTag] = Field(default_factory=list)

    @field_validator("tags", mode="before")
    @classmethod
    def _drop_malformed_tags(cls, value: Any) -> Any:
        """Validate tags one at a time so a bad tag never rejects its record."""
        if value is None:
            return []
        if not isinstance(value, list):
            return value
        tags: list[CorpusTag] = []
        for index, raw in enumerate(value):
            try:
                tags.append(CorpusTag.model_validate(raw))
            except ValidationError as exc:
                logger.debug("Skipping corpus tag %d: %s", index, exc)
        return tags


class CorpusRecord(BaseModel):
    """One hook entry of the knowledge base."""

    model_config = {"frozen": True}

    name: str
    kind: HookKind = Field(validation_alias=AliasChoices("type", "kind"))
    file: str | None = None
    doc: CorpusDoc = Field(default_factory=CorpusDoc)

    def param_tags(self) -> list[CorpusTag]:
        return [tag for tag in self.doc.tags if tag.name == "param"]


def parse_records(payload: Any, *, source: str = "<memory>") -> list[CorpusRecord]:
    """Validate the records of a decoded corpus payload, skipping bad ones."""
    raw_records = payload.get("hooks", []) if isinstance(payload, dict) else payload
    if not isinstance(raw_records, list):
        logger.warning("Corpus %s has no hook list", source)
        return []

    records: list[CorpusRecord] = []
    for index, raw in enumerate(raw_records):
        try:
            records.append(CorpusRecord.model_validate(raw))
        except ValidationError as exc:
            logger.debug("Skipping corpus record %d in %s: %s", index, source, exc)
    return records


def read_corpus_file(path: Path) -> list[CorpusRecord]:
    """Read one corpus file. Missing or undecodable files yield no records."""
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.warning("Corpus file not found: %s", path)
        return []
    except OSError:
        logger.warning("Could not read corpus file %s", path, exc_info=True)
        return []

    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        logger.warning("Invalid JSON in corpus file %s: %s", path, exc)
        return []

    records = parse_records(payload, source=str(path))
    logger.debug("Read %d hook records from %s", len(records), path)
    return records
