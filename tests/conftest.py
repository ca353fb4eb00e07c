"""Shared pytest fixtures and test helpers for hooksig tests."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from hooksig.config.settings import HooksigSettings
from hooksig.services.registry import HookRegistry
from hooksig.services.session import AnalysisSession

# ---------------------------------------------------------------------------
# Sample corpus
# ---------------------------------------------------------------------------


def _param(types: list[str] | None, content: str = "", variable: str = "") -> dict[str, Any]:
    tag: dict[str, Any] = {"name": "param", "content": content}
    if types is not None:
        tag["types"] = types
    if variable:
        tag["variable"] = variable
    return tag


ACTION_RECORDS: list[dict[str, Any]] = [
    {
        "name": "save_post",
        "type": "action",
        "file": "wp-includes/post.php",
        "doc": {
            "description": "Fires once a post has been saved.",
            "tags": [
                _param(["int"], "Post ID.", "$post_id"),
                _param(["WP_Post"], "Post object.", "$post"),
                _param(["bool"], "Whether this is an existing post being updated.", "$update"),
                {"name": "since", "content": "1.5.0"},
            ],
        },
    },
    {
        "name": "init",
        "type": "action",
        "file": "wp-settings.php",
        "doc": {"description": "Fires after WordPress has finished loading.", "tags": []},
    },
    {
        "name": "pre_get_posts",
        "type": "action_reference",
        "doc": {"tags": [_param(["WP_Query"], "The WP_Query instance.", "$query")]},
    },
]

FILTER_RECORDS: list[dict[str, Any]] = [
    {
        "name": "my_filter",
        "type": "filter",
        "doc": {"tags": [_param(["int"], "A number.", "$value")]},
    },
    {
        "name": "the_title",
        "type": "filter",
        "file": "wp-includes/post-template.php",
        "doc": {
            "description": "Filters the post title.",
            "tags": [
                _param(["string"], "The post title.", "$title"),
                _param(["int"], "The post ID.", "$id"),
            ],
        },
    },
    {
        "name": "query_args",
        "type": "filter",
        "doc": {
            "tags": [
                _param(
                    ["array"],
                    "Query arguments. { @type int $number Maximum results. "
                    "@type string $order Sort direction. }",
                    "$args",
                ),
            ]
        },
    },
    {
        "name": "the_content",
        "type": "filter",
        "doc": {"tags": [_param(["string"], "Content of the current post.", "$content")]},
    },
]


def write_corpus(
    directory: Path,
    actions: list[dict[str, Any]] | None = None,
    filters: list[dict[str, Any]] | None = None,
) -> Path:
    """Write actions.json and filters.json into *directory* and return it."""
    directory.mkdir(parents=True, exist_ok=True)
    (directory / "actions.json").write_text(
        json.dumps({"hooks": ACTION_RECORDS if actions is None else actions}),
        encoding="utf-8",
    )
    (directory / "filters.json").write_text(
        json.dumps({"hooks": FILTER_RECORDS if filters is None else filters}),
        encoding="utf-8",
    )
    return directory


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep HOOKSIG_* variables from the outer environment out of tests."""
    import os

    for key in list(os.environ):
        if key.startswith("HOOKSIG_"):
            monkeypatch.delenv(key)


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Undo logging changes made by configure_logging() during a test."""
    root = logging.getLogger()
    root_handlers = root.handlers[:]
    root_level = root.level
    own = logging.getLogger("hooksig")
    own_handlers = own.handlers[:]
    own_level = own.level
    own_propagate = own.propagate
    yield
    root.handlers = root_handlers
    root.setLevel(root_level)
    own.handlers = own_handlers
    own.setLevel(own_level)
    own.propagate = own_propagate


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def corpus_dir(tmp_path: Path) -> Path:
    """Directory holding the sample actions.json and filters.json."""
    return write_corpus(tmp_path / "corpus")


@pytest.fixture
def make_corpus() -> Callable[..., Path]:
    """Factory writing a custom corpus: ``make_corpus(directory, actions=..., filters=...)``."""
    return write_corpus


@pytest.fixture
def settings(tmp_path: Path, corpus_dir: Path) -> HooksigSettings:
    return HooksigSettings.from_cli(
        project_root=tmp_path,
        corpus={"directory": str(corpus_dir)},
    )


@pytest.fixture
def registry() -> HookRegistry:
    return HookRegistry()


@pytest.fixture
def session(settings: HooksigSettings) -> AnalysisSession:
    """Session over the sample corpus, corpus already loaded."""
    s = AnalysisSession(settings)
    s.ensure_corpus()
    return s


@pytest.fixture
def _isolated_project(tmp_path: Path, corpus_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run the CLI from a temp project whose hooksig.toml points at the sample corpus.

    Use via ``@pytest.mark.usefixtures("_isolated_project")`` on command test classes.
    """
    (tmp_path / "hooksig.toml").write_text(
        f'[corpus]\ndirectory = "{corpus_dir.as_posix()}"\n', encoding="utf-8"
    )
    monkeypatch.chdir(tmp_path)
