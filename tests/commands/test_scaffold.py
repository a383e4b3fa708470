"""Tests for the scaffold command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from mosaicpods.cli import cli


@pytest.mark.usefixtures("_isolated_project")
class TestScaffoldCommand:
    def test_scaffold_all(self, cli_runner: CliRunner, project_root: Path) -> None:
        result = cli_runner.invoke(cli, ["--json", "scaffold"])
        assert result.exit_code == 0
        assert len(json.loads(result.output)["data"]["created"]) == 3
        assert (project_root / "templates" / "pods" / "contact.html.j2").is_file()

    def test_second_run_skips(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["scaffold", "--type", "contact"])
        result = cli_runner.invoke(cli, ["scaffold", "--type", "contact"])
        assert result.exit_code == 0
        assert "WARNING: Skipped existing template" in result.stderr

    def test_unknown_type(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["scaffold", "--type", "nope"])
        assert result.exit_code == 1
        assert "Unknown pod type(s): nope" in result.stderr
