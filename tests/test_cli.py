"""
Tests for CLI commands — ee search/download, config check, and global options.
"""

import json
from pathlib import Path

from click.testing import CliRunner

from tt_bootstrap.main import cli

SDK = "tarantool-enterprise-sdk-gc64-2.11.1-0-r563.linux.x86_64.tar.gz"
SDK_OLD = "tarantool-enterprise-sdk-1.10.10-52-r419.linux.x86_64.tar.gz"


class TestCLIGlobal:
    """Tests for global CLI behavior."""

    def test_help(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "provision a local Tarantool environment" in result.output
        assert "ee" in result.output

    def test_version(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_ee_help(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["ee", "--help"])
        assert result.exit_code == 0
        assert "search" in result.output
        assert "download" in result.output


class TestEESearchCommand:
    def _make_repo(self, tmp_path: Path) -> Path:
        distfiles = tmp_path / "distfiles"
        distfiles.mkdir()
        (distfiles / SDK).write_bytes(b"")
        (distfiles / SDK_OLD).write_bytes(b"")
        config = tmp_path / "tt.yaml"
        config.write_text("repo:\n  distfiles: distfiles\n")
        return config

    def test_local_repo(self, tmp_path: Path, linux_x86_64):
        config = self._make_repo(tmp_path)
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config), "ee", "search", "--local-repo"])
        assert result.exit_code == 0
        assert "2 bundle(s)" in result.output
        assert result.output.index("1.10.10-52-r419") < result.output.index("2.11.1-0-r563")

    def test_local_repo_quiet(self, tmp_path: Path, linux_x86_64):
        config = self._make_repo(tmp_path)
        runner = CliRunner()
        result = runner.invoke(cli, ["-q", "--config", str(config), "ee", "search", "--local-repo"])
        assert result.exit_code == 0
        assert "bundle(s)" not in result.output
        assert "2.11.1-0-r563" in result.output

    def test_local_repo_json(self, tmp_path: Path, linux_x86_64):
        config = self._make_repo(tmp_path)
        runner = CliRunner()
        result = runner.invoke(
            cli, ["--config", str(config), "ee", "search", "--local-repo", "--json"]
        )
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["count"] == 2
        assert data["versions"][-1]["tarball"] == SDK

    def test_local_repo_empty(self, tmp_path: Path, linux_x86_64):
        (tmp_path / "distfiles").mkdir()
        config = tmp_path / "tt.yaml"
        config.write_text("repo:\n  distfiles: distfiles\n")
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config), "ee", "search", "--local-repo"])
        assert result.exit_code == 0
        assert "No bundles found" in result.output

    def test_local_repo_missing(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "tt.yaml").write_text("{}\n")
        runner = CliRunner()
        result = runner.invoke(cli, ["ee", "search", "--local-repo"])
        assert result.exit_code == 1
        assert "Local repository not found" in result.output

    def test_no_credentials(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "tt.yaml").write_text("{}\n")
        runner = CliRunner()
        result = runner.invoke(cli, ["ee", "search"])
        assert result.exit_code == 1
        assert "no credentials" in result.output

    def test_no_credentials_json(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "tt.yaml").write_text("{}\n")
        runner = CliRunner()
        result = runner.invoke(cli, ["ee", "search", "--json"])
        assert result.exit_code == 1
        assert "error" in json.loads(result.output)

    def test_corrupted_credentials_file(self, tmp_path: Path):
        (tmp_path / "creds").write_text("only-user\n")
        config = tmp_path / "tt.yaml"
        config.write_text("ee:\n  credential_path: creds\n")
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config), "ee", "search"])
        assert result.exit_code == 1
        assert "corrupted credentials" in result.output


class TestEEDownloadCommand:
    def test_no_credentials(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "tt.yaml").write_text("{}\n")
        runner = CliRunner()
        result = runner.invoke(cli, ["ee", "download", "--dir", str(tmp_path)])
        assert result.exit_code == 1
        assert "no credentials" in result.output
        assert list(tmp_path.glob("*.tar.gz")) == []


class TestConfigCheckCommand:
    def test_valid(self, tmp_path: Path, env_creds):
        config = tmp_path / "tt.yaml"
        config.write_text("{}\n")
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config), "config", "check"])
        assert result.exit_code == 0
        assert "Configuration is valid" in result.output

    def test_missing(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        runner = CliRunner()
        result = runner.invoke(cli, ["config", "check"])
        assert result.exit_code == 1
        assert "No tt.yaml" in result.output

    def test_json(self, tmp_path: Path):
        (tmp_path / "creds").write_text("toor\n1234\n")
        config = tmp_path / "tt.yaml"
        config.write_text("ee:\n  credential_path: creds\n")
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config), "config", "check", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["valid"] is True
        assert data["credential_path"] == str((tmp_path / "creds").resolve())
