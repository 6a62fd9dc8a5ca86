"""Tests for speclint.cli.commands.lint_cmd."""

from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from speclint.cli.main import app


@pytest.fixture
def runner():
    """Fixture providing a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("SPECLINT_CONFIG_PATH", raising=False)
    monkeypatch.delenv("SPECLINT_REPOS_DIR", raising=False)


class TestLintCommand:
    def test_valid_spec_passes(self, runner, make_spec) -> None:
        path = make_spec()
        result = runner.invoke(app, ["lint", "--quick", str(path)])
        assert result.exit_code == 0
        assert "Bananas (0.0.1)" in result.stdout
        assert "1 spec passed validation" in result.stdout

    def test_missing_license_fails(self, runner, make_spec) -> None:
        path = make_spec(license={"type": "MIT"}, summary="")
        result = runner.invoke(app, ["lint", "--quick", str(path)])
        assert result.exit_code == 1
        assert "- ERROR | Missing license[:file] or [:text]" in result.stdout
        assert "- WARN | Missing summary" in result.stdout

    def test_only_errors_hides_warnings_and_keeps_exit_status(self, runner, make_spec) -> None:
        path = make_spec(license={"type": "MIT"}, summary="")
        result = runner.invoke(app, ["lint", "--quick", "--only-errors", str(path)])
        assert result.exit_code == 1
        assert "Missing license[:file] or [:text]" in result.stdout
        assert "WARN" not in result.stdout

    def test_lints_current_working_directory(self, runner, make_spec) -> None:
        make_spec()
        result = runner.invoke(app, ["lint", "--quick", "--only-errors"])
        assert result.exit_code == 0
        assert "passed validation" in result.stdout

    def test_empty_directory_is_a_configuration_error(self, runner) -> None:
        result = runner.invoke(app, ["lint", "--quick"])
        assert result.exit_code == 2
        assert "no .pkgspec file found" in result.output
        assert "passed validation" not in result.output

    def test_repository_by_name(self, runner, make_spec, tmp_path) -> None:
        repos = tmp_path / "repos"
        make_spec(
            file_name="InAppSettingKit",
            directory=repos / "master" / "InAppSettingKit" / "0.0.1",
            name="InAppSettingsKit",
            homepage="",
        )
        result = runner.invoke(
            app, ["lint", "--quick", "--repos-dir", str(repos), "master"]
        )
        assert result.exit_code == 1
        assert "The name of the spec should match the name of the file" in result.stdout
        assert "WARN" in result.stdout

    def test_platform_filter(self, runner, make_spec) -> None:
        platforms = {
            "ios": {"source_files": ["Classes"]},
            "osx": {"source_files": ["Mac"], "compiler_flags": ["-fobjc-arc"]},
        }
        path = make_spec(platforms=platforms)
        result = runner.invoke(app, ["lint", "--quick", "--platforms", "ios", str(path)])
        assert result.exit_code == 0
        assert "-fobjc-arc" not in result.stdout

        result = runner.invoke(app, ["lint", "--quick", "-p", "ios,osx", str(path)])
        assert "WARN | Use requires_arc instead of -fobjc-arc" in result.stdout

    def test_json_output(self, runner, make_spec) -> None:
        path = make_spec(license={"type": "MIT"})
        result = runner.invoke(app, ["lint", "--quick", "--format", "json", str(path)])
        assert result.exit_code == 1
        payload = json.loads(result.stdout)
        assert payload["verdict"] == "fail"
        assert payload["specs"][0]["findings"][0]["rule_id"] == "license_present"

    def test_invalid_format(self, runner, make_spec) -> None:
        result = runner.invoke(app, ["lint", "--format", "xml", str(make_spec())])
        assert result.exit_code == 2

    def test_config_file_is_used(self, runner, make_spec, tmp_path) -> None:
        repos = tmp_path / "elsewhere"
        make_spec(directory=repos / "trunk" / "Bananas" / "0.0.1")
        (tmp_path / "speclint.toml").write_text(f'repos_dir = "{repos.as_posix()}"\n')
        result = runner.invoke(app, ["lint", "--quick", "trunk"])
        assert result.exit_code == 0
        assert "Bananas (0.0.1)" in result.stdout


def test_version(runner) -> None:
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert result.stdout.startswith("speclint ")
