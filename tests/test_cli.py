"""Tests for the root CLI group and global flags."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from blogctl import __version__
from blogctl.cli import cli

USER = ["id=jdoe", "email=jdoe@example.com", "firstName=J", "lastName=D", "roles=author"]


@pytest.mark.usefixtures("_isolated_root")
class TestRootGroup:
    def test_version(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_lists_commands(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        for name in ("create", "find", "update", "remove", "load", "clear", "meta"):
            assert name in result.output

    def test_no_subcommand_prints_help(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(cli, [])
        assert result.exit_code == 0
        assert "Usage" in result.output
        assert not (tmp_path / ".blogctl").exists()

    def test_verbose_shows_telemetry(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-v", "create", "users", *USER])
        assert result.exit_code == 0
        assert "telemetry:" in result.output
        assert "BlogService.create" in result.output

    def test_json_verbose_includes_meta(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "-v", "meta"])
        assert result.exit_code == 0
        assert '"op": "meta"' in result.output


@pytest.mark.usefixtures("_isolated_root")
class TestConfigFlags:
    def test_memory_backend_from_config(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        cfg = tmp_path / "custom.toml"
        cfg.write_text('[store]\nbackend = "memory"\n')
        result = cli_runner.invoke(cli, ["-c", str(cfg), "create", "users", *USER])
        assert result.exit_code == 0
        assert not (tmp_path / ".blogctl").exists()

    def test_memory_backend_does_not_persist(
        self, cli_runner: CliRunner, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("BLOGCTL_STORE__BACKEND", "memory")
        assert cli_runner.invoke(cli, ["create", "users", *USER]).exit_code == 0
        result = cli_runner.invoke(cli, ["--json", "find", "users"])
        assert json.loads(result.output)["data"]["items"] == []

    def test_default_count_from_config(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "blogctl.toml").write_text("[find]\ndefault_count = 2\n")
        for i in range(3):
            args = [f"id=u{i}", *USER[1:]]
            assert cli_runner.invoke(cli, ["create", "users", *args]).exit_code == 0
        result = cli_runner.invoke(cli, ["--json", "find", "users"])
        assert len(json.loads(result.output)["data"]["items"]) == 2

    def test_store_path_from_config(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "blogctl.toml").write_text('[store]\npath = "db/custom.db"\n')
        assert cli_runner.invoke(cli, ["create", "users", *USER]).exit_code == 0
        assert (tmp_path / "db" / "custom.db").is_file()

    def test_invalid_toml(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "blogctl.toml").write_text("[store\n")
        result = cli_runner.invoke(cli, ["meta"])
        assert result.exit_code == 1
        assert "Invalid TOML" in result.output

    def test_invalid_config_value(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "blogctl.toml").write_text("[find]\ndefault_count = 0\n")
        result = cli_runner.invoke(cli, ["meta"])
        assert result.exit_code == 1
        assert "find.default_count" in result.output

    def test_subdirectory_shares_project_store(
        self, cli_runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "blogctl.toml").write_text("")
        nested = tmp_path / "drafts"
        nested.mkdir()
        monkeypatch.chdir(nested)
        assert cli_runner.invoke(cli, ["create", "users", *USER]).exit_code == 0
        assert (tmp_path / ".blogctl" / "blog.db").is_file()
        assert not (nested / ".blogctl").exists()
