"""
Tests for CLI commands — generate, config check, includes, and global options.
"""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from umbrella.main import cli


@pytest.fixture
def env(includes_dir: Path, static_includes: Path, header_template: Path, header_dest: Path) -> dict:
    return {
        "HEADER_DEST": str(header_dest),
        "HEADER_TEMPLATE": str(header_template),
        "INCLUDES_DIR": str(includes_dir),
        "UMBRELLA_STATIC_INCLUDES": str(static_includes),
    }


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    cwd = tmp_path / "cwd"
    cwd.mkdir()
    monkeypatch.chdir(cwd)


class TestCLIGlobal:
    def test_help(self):
        result = CliRunner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "Umbrella header generator" in result.output

    def test_version(self):
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output


class TestGenerateCommand:
    def test_success(self, env: dict, header_dest: Path):
        result = CliRunner().invoke(cli, ["generate"], env=env)
        assert result.exit_code == 0, result.output
        assert "Generated" in result.output
        assert header_dest.is_file()

    def test_quiet(self, env: dict):
        result = CliRunner().invoke(cli, ["--quiet", "generate"], env=env)
        assert result.exit_code == 0
        assert "Generated" not in result.output

    def test_flags_instead_of_env(self, env: dict, header_dest: Path):
        args = [
            "generate",
            "--dest", env["HEADER_DEST"],
            "--template", env["HEADER_TEMPLATE"],
            "--includes-dir", env["INCLUDES_DIR"],
            "--static-includes", env["UMBRELLA_STATIC_INCLUDES"],
        ]
        result = CliRunner().invoke(cli, args)
        assert result.exit_code == 0, result.output
        assert header_dest.is_file()

    def test_missing_required(self, env: dict):
        del env["HEADER_DEST"]
        result = CliRunner().invoke(cli, ["generate"], env=env)
        assert result.exit_code == 1
        assert "HEADER_DEST is required." in result.output

    def test_unreadable_template(self, env: dict, tmp_path: Path):
        env["HEADER_TEMPLATE"] = str(tmp_path / "missing.in")
        result = CliRunner().invoke(cli, ["generate"], env=env)
        assert result.exit_code == 1
        assert "must exist and be readable" in result.output

    def test_divergence(self, env: dict, includes_dir: Path, header_dest: Path):
        (includes_dir / "openssl" / "c.h").write_text("")
        result = CliRunner().invoke(cli, ["generate"], env=env)
        assert result.exit_code == 1
        assert "Includes have changed" in result.output
        assert "#import <openssl/c.h>" in result.output
        assert not header_dest.exists()

    def test_json_success(self, env: dict):
        result = CliRunner().invoke(cli, ["generate", "--json"], env=env)
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["ok"] is True
        assert data["include_count"] == 2

    def test_json_config_error(self, env: dict):
        del env["INCLUDES_DIR"]
        result = CliRunner().invoke(cli, ["generate", "--json"], env=env)
        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["error_kind"] == "ConfigurationError"


class TestConfigCheckCommand:
    def test_valid(self, env: dict):
        result = CliRunner().invoke(cli, ["config", "check"], env=env)
        assert result.exit_code == 0
        assert "Configuration is valid" in result.output
        assert "namespace: openssl" in result.output

    def test_valid_json(self, env: dict, header_dest: Path):
        result = CliRunner().invoke(cli, ["config", "check", "--json"], env=env)
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["config"]["header_dest"] == str(header_dest)

    def test_invalid(self):
        result = CliRunner().invoke(cli, ["config", "check"])
        assert result.exit_code == 1
        assert "is required" in result.output

    def test_config_file_option(self, tmp_path: Path, env: dict):
        path = tmp_path / "custom.yml"
        path.write_text("directive: '#include'\n")
        result = CliRunner().invoke(cli, ["--config", str(path), "config", "check", "--json"], env=env)
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["config"]["directive"] == "#include"


class TestIncludesScan:
    def test_sorted_output(self, includes_dir: Path):
        result = CliRunner().invoke(cli, ["includes", "scan", "--includes-dir", str(includes_dir)])
        assert result.exit_code == 0
        assert result.output.splitlines() == [
            "#import <openssl/a.h>",
            "#import <openssl/b.h>",
        ]

    def test_env_and_directive(self, includes_dir: Path):
        result = CliRunner().invoke(
            cli,
            ["includes", "scan", "--directive", "#include", "--json"],
            env={"INCLUDES_DIR": str(includes_dir)},
        )
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["count"] == 2
        assert data["includes"][0] == "#include <openssl/a.h>"

    def test_missing_dir(self, tmp_path: Path):
        result = CliRunner().invoke(cli, ["includes", "scan", "--includes-dir", str(tmp_path / "nope")])
        assert result.exit_code == 1
        assert "must exist" in result.output


class TestIncludesCheck:
    def test_match(self, env: dict):
        del env["HEADER_DEST"]
        del env["HEADER_TEMPLATE"]
        result = CliRunner().invoke(cli, ["includes", "check"], env=env)
        assert result.exit_code == 0, result.output
        assert "matches 2 header(s)" in result.output

    def test_drift(self, env: dict, includes_dir: Path):
        (includes_dir / "openssl" / "a.h").unlink()
        (includes_dir / "openssl" / "c.h").write_text("")
        result = CliRunner().invoke(cli, ["includes", "check"], env=env)
        assert result.exit_code == 1
        assert "+ #import <openssl/c.h>" in result.output
        assert "- #import <openssl/a.h>" in result.output

    def test_drift_json(self, env: dict, includes_dir: Path):
        (includes_dir / "openssl" / "c.h").write_text("")
        result = CliRunner().invoke(cli, ["includes", "check", "--json"], env=env)
        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["reconciliation"]["extra_in_scanned"] == ["#import <openssl/c.h>"]

    def test_writes_nothing(self, env: dict, header_dest: Path):
        CliRunner().invoke(cli, ["includes", "check"], env=env)
        assert not header_dest.exists()


class TestIncludesScanConfig:
    def test_reads_config_file(self, tmp_path: Path, includes_dir: Path):
        path = tmp_path / "umbrella.yml"
        path.write_text(f"includes_dir: {includes_dir.name}\ndirective: '#include'\n")
        result = CliRunner().invoke(cli, ["--config", str(path), "includes", "scan"])
        assert result.exit_code == 0, result.output
        assert result.output.splitlines() == [
            "#include <openssl/a.h>",
            "#include <openssl/b.h>",
        ]

    def test_flag_beats_config_file(self, tmp_path: Path, includes_dir: Path):
        path = tmp_path / "umbrella.yml"
        path.write_text("includes_dir: elsewhere\nnamespace: curl\n")
        result = CliRunner().invoke(
            cli,
            ["--config", str(path), "includes", "scan", "--includes-dir", str(includes_dir), "--namespace", "openssl"],
        )
        assert result.exit_code == 0, result.output
        assert len(result.output.splitlines()) == 2

    def test_missing_includes_dir_setting(self):
        result = CliRunner().invoke(cli, ["includes", "scan"])
        assert result.exit_code == 1
        assert "INCLUDES_DIR is required." in result.output
