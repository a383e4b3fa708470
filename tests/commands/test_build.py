"""Tests for the build and preview commands."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from mosaicpods.cli import cli


def _write_json(path: Path, data: object) -> str:
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


@pytest.mark.usefixtures("_isolated_project")
class TestBuildCommand:
    def test_build_json(self, cli_runner: CliRunner, project_root: Path) -> None:
        submission = _write_json(
            project_root / "submission.json",
            {
                "pod": {
                    "name": "Home hero",
                    "fields": {"title": "Welcome", "background": "k1"},
                    "alt_texts": {"background": "Hero"},
                }
            },
        )
        result = cli_runner.invoke(cli, ["--json", "build", "hero_banner", submission])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["op"] == "build_definition"
        assert data["data"]["definition"] == {
            "title": "Welcome",
            "background": {"attachment_key": "k1", "alt_text": "Hero"},
        }

    def test_build_from_stdin_with_existing(
        self, cli_runner: CliRunner, project_root: Path
    ) -> None:
        existing = _write_json(
            project_root / "current.json",
            {"title": "Old", "background": {"attachment_key": "old1", "alt_text": "Old"}},
        )
        payload = json.dumps({"alt_texts": {"background": "New"}})
        result = cli_runner.invoke(
            cli, ["--json", "build", "hero_banner", "-", "--existing", existing], input=payload
        )
        assert result.exit_code == 0
        assert json.loads(result.output)["data"]["definition"] == {
            "title": "Old",
            "background": {"attachment_key": "old1", "alt_text": "New"},
        }

    def test_build_human_output_and_warnings(
        self, cli_runner: CliRunner, project_root: Path
    ) -> None:
        submission = _write_json(project_root / "s.json", {"fields": {"subtitle": "Sub"}})
        result = cli_runner.invoke(cli, ["build", "hero_banner", submission])
        assert result.exit_code == 0
        assert '"subtitle": "Sub"' in result.stdout
        assert "WARNING: Required field 'title' is missing" in result.stderr

    def test_invalid_submission_json(self, cli_runner: CliRunner, project_root: Path) -> None:
        bad = project_root / "bad.json"
        bad.write_text("{nope")
        result = cli_runner.invoke(cli, ["build", "hero_banner", str(bad)])
        assert result.exit_code == 2
        assert "invalid JSON" in result.output

    def test_invalid_advanced_definition(self, cli_runner: CliRunner, project_root: Path) -> None:
        submission = _write_json(project_root / "s.json", {"definition": "[1]"})
        result = cli_runner.invoke(cli, ["--json", "build", "hero_banner", submission])
        assert result.exit_code == 1
        assert json.loads(result.stderr)["error"]["code"] == "INVALID_DEFINITION_JSON"

    @pytest.mark.parametrize("override", [[1, 2], 3])
    def test_non_object_advanced_definition(
        self, cli_runner: CliRunner, project_root: Path, override: object
    ) -> None:
        submission = _write_json(
            project_root / "s.json", {"definition": override, "fields": {"title": "x"}}
        )
        result = cli_runner.invoke(cli, ["build", "hero_banner", submission])
        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "ERROR  build_definition" in result.stderr

    def test_numeric_name_accepted(self, cli_runner: CliRunner, project_root: Path) -> None:
        submission = _write_json(project_root / "s.json", {"name": 42, "fields": {"title": "x"}})
        result = cli_runner.invoke(cli, ["--json", "build", "hero_banner", submission])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["data"]["name"] == "42"


@pytest.mark.usefixtures("_isolated_project")
class TestPreviewCommand:
    def test_preview_placeholder(self, cli_runner: CliRunner, project_root: Path) -> None:
        submission = _write_json(project_root / "s.json", {"fields": {"title": "Hi"}})
        result = cli_runner.invoke(cli, ["-q", "preview", "hero_banner", submission])
        assert result.exit_code == 0
        assert "pod-preview-missing" in result.stdout

    def test_preview_after_scaffold(self, cli_runner: CliRunner, project_root: Path) -> None:
        assert cli_runner.invoke(cli, ["scaffold", "--type", "hero_banner"]).exit_code == 0
        submission = _write_json(project_root / "s.json", {"fields": {"title": "Hi"}})
        result = cli_runner.invoke(cli, ["preview", "hero_banner", submission])
        assert result.exit_code == 0
        assert '<h2 class="title">Hi</h2>' in result.stdout
