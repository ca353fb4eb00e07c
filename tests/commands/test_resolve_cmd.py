"""Tests for the resolve command."""

import json

import pytest
from click.testing import CliRunner

from hooksig.cli import cli


@pytest.mark.usefixtures("_isolated_project")
class TestResolveCommand:
    def test_filter_contract(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "resolve", "the_title", "--accepted-args", "2"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)["data"]
        assert data["function"] == "add_filter"
        assert data["parameters"][1]["type"] == "callable(string, int): string"

    def test_accepted_args_default_is_one(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "resolve", "the_title"])
        data = json.loads(result.stdout)["data"]
        assert data["parameters"][1]["type"] == "callable(string): string"

    def test_action(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["resolve", "init", "--action"])
        assert result.exit_code == 0, result.output
        assert "function: add_action" in result.output
        assert "accepted_args" in result.output

    def test_kind_mismatch_exits_1(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["resolve", "save_post"])
        assert result.exit_code == 1
        assert "Hook save_post is an action not a filter" in result.output

    def test_negative_accepted_args_rejected(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["resolve", "the_title", "--accepted-args", "-1"])
        assert result.exit_code == 2
