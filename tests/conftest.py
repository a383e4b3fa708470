"""Shared pytest fixtures for mosaicpods tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from mosaicpods.config.settings import PodSettings
from mosaicpods.infrastructure.registry import SchemaRegistry
from mosaicpods.infrastructure.site import Site

POD_DEFINITIONS_YAML = """\
categories:
  Heroes: Large banners at the top of a page
  Content: Body sections

pod_definitions:
  hero_banner:
    name: Hero banner
    category: Heroes
    description: Full-width banner with a call to action
    schema:
      title:
        type: text
        required: true
      subtitle:
        type: text
      featured:
        type: boolean
      background:
        type: image
        crop_ratios: ["16:9"]
      cta_text:
        type: text
      cta_url:
        type: url
      buttons:
        type: array
        max_items: 2
        item_schema:
          label: {type: text}
          url: {type: url}

  card_grid:
    name: Card grid
    category: Content
    schema:
      heading:
        type: text
      columns:
        type: integer
      cards:
        type: array
        min_items: 1
        item_schema:
          photo: {type: image}
          caption: {type: text}
          meta:
            type: object
            schema:
              author: {type: text}
              rating: {type: number}

  contact:
    name: Contact
    category: Content
    schema:
      email: {type: email}
      opens_on: {type: date}
      style:
        type: select
        options: [light, dark]
"""


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def project_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Temporary project with ``config/pod_definitions.yml``.

    This is the single source of truth for the project layout used by the
    site, service and command tests.
    """
    monkeypatch.delenv("MOSAICPODS_CONFIG", raising=False)
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    (config_dir / "pod_definitions.yml").write_text(POD_DEFINITIONS_YAML, encoding="utf-8")
    return tmp_path


@pytest.fixture
def registry() -> SchemaRegistry:
    """Registry loaded from the sample definitions (no file involved)."""
    reg = SchemaRegistry()
    reg.loads(POD_DEFINITIONS_YAML)
    return reg


@pytest.fixture
def site(project_root: Path) -> Site:
    """Site wired to the temporary project."""
    return Site(PodSettings.from_cli(project_root=project_root))


@pytest.fixture
def _isolated_project(project_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to the temp project so the CLI discovers it.

    Use via ``@pytest.mark.usefixtures("_isolated_project")`` on command
    test classes.
    """
    monkeypatch.chdir(project_root)
