"""Tests for the list command."""

import json

import pytest
from click.testing import CliRunner

from hooksig.cli import cli


@pytest.mark.usefixtures("_isolated_project")
class TestListCommand:
    def test_lists_all(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["list"])
        assert result.exit_code == 0, result.output
        for name in ("save_post", "init", "pre_get_posts", "the_title", "the_content"):
            assert name in result.output
        assert "7 hooks" in result.output

    def test_kind_filter_includes_references(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "list", "--kind", "action"])
        assert result.exit_code == 0
        assert result.output.split() == ["init", "pre_get_posts", "save_post"]

    def test_prefix_json(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "list", "--prefix", "the_"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["data"]["count"] == 2
        assert [h["name"] for h in data["data"]["hooks"]] == ["the_content", "the_title"]

    def test_invalid_kind(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["list", "--kind", "widget"])
        assert result.exit_code == 2

    def test_no_match(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["list", "--prefix", "zzz"])
        assert result.exit_code == 0
        assert "No hooks found." in result.output
