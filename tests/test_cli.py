"""Tests for the root CLI group and global flags."""

import pytest
from click.testing import CliRunner

from hooksig import __version__
from hooksig.cli import cli


class TestRootGroup:
    def test_help(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        for name in ("show", "list", "resolve", "parse-type"):
            assert name in result.output
        assert "--json" in result.output

    def test_no_subcommand_prints_help(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, [])
        assert result.exit_code == 0
        assert "Usage:" in result.output

    def test_version(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert f"hooksig, version {__version__}" in result.output

    def test_examples(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--examples"])
        assert result.exit_code == 0
        assert result.output.startswith("Examples:")
        assert "hooksig --json show the_content" in result.output

    def test_examples_listed_in_help(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["resolve", "--help"])
        assert result.exit_code == 0
        assert "--examples" in result.output
        assert "--accepted-args" in result.output

    def test_unknown_command(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["frobnicate"])
        assert result.exit_code == 2


class TestGlobalConfig:
    def test_explicit_config_path(self, cli_runner: CliRunner, tmp_path, corpus_dir) -> None:
        config = tmp_path / "custom.toml"
        config.write_text(f'[corpus]\ndirectory = "{corpus_dir.as_posix()}"\n', encoding="utf-8")
        result = cli_runner.invoke(cli, ["-c", str(config), "-q", "show", "the_content"])
        assert result.exit_code == 0, result.output
        assert result.output.strip() == "OK: show_hook"

    def test_invalid_toml(
        self, cli_runner: CliRunner, tmp_path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "hooksig.toml").write_text("[corpus\n", encoding="utf-8")
        monkeypatch.chdir(tmp_path)
        result = cli_runner.invoke(cli, ["parse-type", "int"])
        assert result.exit_code == 1
        assert "Invalid TOML" in result.output

    def test_env_override(
        self, cli_runner: CliRunner, corpus_dir, tmp_path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("HOOKSIG_CORPUS__DIRECTORY", str(corpus_dir))
        result = cli_runner.invoke(cli, ["-q", "list", "--prefix", "the_t"])
        assert result.exit_code == 0, result.output
        assert result.output.strip() == "the_title"
