"""Unit tests for keyscript.cli.main: commands invoked through click's CliRunner."""
from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from keyscript.cli.main import cli

VALID = "capslock::esc;\nif(gaming){ !a::left; }\n"
FORMATTED = "capslock::esc;\nif (gaming) {\n    !a::left;\n}\n"
INVALID = "a::b;\nc::d e::f;\n"


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    # Relative paths keep rich output on one line.
    monkeypatch.chdir(tmp_path)
    return tmp_path


def _write(directory: Path, name: str, text: str) -> str:
    (directory / name).write_text(text, encoding="utf-8")
    return name


class TestCheck:
    def test_valid_script(self, runner: CliRunner, workdir: Path) -> None:
        name = _write(workdir, "ok.ks", VALID)
        result = runner.invoke(cli, ["check", name])
        assert result.exit_code == 0
        assert "OK" in result.output
        assert "2 top-level" in result.output

    def test_invalid_script(self, runner: CliRunner, workdir: Path) -> None:
        name = _write(workdir, "bad.ks", INVALID)
        result = runner.invoke(cli, ["check", name])
        assert result.exit_code == 1
        assert "Syntax error" in result.output
        assert "err: at line 2:" in result.output
        assert "expected 'if'" in result.output

    def test_furthest_merge_policy(self, runner: CliRunner, workdir: Path) -> None:
        name = _write(workdir, "bad.ks", INVALID)
        result = runner.invoke(cli, ["check", name, "--merge-policy", "furthest"])
        assert result.exit_code == 1
        assert "expected ';'" in result.output

    def test_all_expected(self, runner: CliRunner, workdir: Path) -> None:
        name = _write(workdir, "bad.ks", INVALID)
        result = runner.invoke(cli, ["check", name, "--all-expected"])
        assert result.exit_code == 1
        assert "also tried" in result.output

    def test_missing_file(self, runner: CliRunner, workdir: Path) -> None:
        result = runner.invoke(cli, ["check", "missing.ks"])
        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_verbose_flag_accepted(self, runner: CliRunner, workdir: Path) -> None:
        name = _write(workdir, "ok.ks", VALID)
        result = runner.invoke(cli, ["--verbose", "check", name])
        assert result.exit_code == 0


class TestFmt:
    def test_prints_formatted(self, runner: CliRunner, workdir: Path) -> None:
        name = _write(workdir, "a.ks", VALID)
        result = runner.invoke(cli, ["fmt", name])
        assert result.exit_code == 0
        assert result.output == FORMATTED

    def test_check_unformatted(self, runner: CliRunner, workdir: Path) -> None:
        name = _write(workdir, "a.ks", VALID)
        result = runner.invoke(cli, ["fmt", name, "--check"])
        assert result.exit_code == 1
        assert "NEEDS FORMATTING" in result.output

    def test_check_formatted(self, runner: CliRunner, workdir: Path) -> None:
        name = _write(workdir, "a.ks", FORMATTED)
        result = runner.invoke(cli, ["fmt", name, "--check"])
        assert result.exit_code == 0
        assert "already formatted" in result.output

    def test_in_place(self, runner: CliRunner, workdir: Path) -> None:
        name = _write(workdir, "a.ks", VALID)
        result = runner.invoke(cli, ["fmt", name, "--in-place"])
        assert result.exit_code == 0
        assert (workdir / name).read_text(encoding="utf-8") == FORMATTED

    def test_invalid_script(self, runner: CliRunner, workdir: Path) -> None:
        name = _write(workdir, "bad.ks", INVALID)
        result = runner.invoke(cli, ["fmt", name])
        assert result.exit_code == 1


class TestParse:
    def test_json_to_file(self, runner: CliRunner, workdir: Path) -> None:
        name = _write(workdir, "a.ks", VALID)
        result = runner.invoke(cli, ["parse", name, "-o", "out.json"])
        assert result.exit_code == 0
        data = json.loads((workdir / "out.json").read_text(encoding="utf-8"))
        assert data["kind"] == "Block"
        assert data["statements"][1]["kind"] == "IfStmt"

    def test_yaml_to_file(self, runner: CliRunner, workdir: Path) -> None:
        import yaml

        name = _write(workdir, "a.ks", VALID)
        result = runner.invoke(cli, ["parse", name, "--format", "yaml", "-o", "out.yaml"])
        assert result.exit_code == 0
        data = yaml.safe_load((workdir / "out.yaml").read_text(encoding="utf-8"))
        assert data["statements"][0]["expr"]["kind"] == "KeyMappingInline"

    def test_stdout(self, runner: CliRunner, workdir: Path) -> None:
        name = _write(workdir, "a.ks", "a;")
        result = runner.invoke(cli, ["parse", name])
        assert result.exit_code == 0
        assert "Variable" in result.output


class TestKeysAndVersion:
    def test_keys(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["keys"])
        assert result.exit_code == 0
        assert "capslock" in result.output

    def test_key_aliases(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["keys", "--aliases"])
        assert result.exit_code == 0
        assert "LEFTCTRL" in result.output

    def test_version_command(self, runner: CliRunner, expected_version: str) -> None:
        result = runner.invoke(cli, ["version"])
        assert result.exit_code == 0
        assert expected_version in result.output

    def test_help_lists_commands(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        for command in ("check", "fmt", "parse", "keys", "version"):
            assert command in result.output
