"""Tests for Site wiring."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from mosaicpods.config.settings import PodSettings
from mosaicpods.domain.errors import SchemaLoadError
from mosaicpods.infrastructure.site import Site


class TestSite:
    def test_registry_loaded_lazily(self, site: Site, project_root: Path) -> None:
        assert site.registry.loaded
        assert site.registry.snapshot.source == project_root / "config" / "pod_definitions.yml"

    def test_fallback_path(self, tmp_path: Path) -> None:
        docs = tmp_path / "docs"
        docs.mkdir()
        (docs / "pod_definitions.yml").write_text(
            "pods:\n  a:\n    name: A\n    category: C\n    schema:\n      x: {type: text}\n"
        )
        site = Site(PodSettings.from_cli(project_root=tmp_path))
        assert site.registry.available_types() == ["a"]

    def test_missing_registry_raises(self, tmp_path: Path) -> None:
        site = Site(PodSettings.from_cli(project_root=tmp_path))
        with pytest.raises(SchemaLoadError):
            _ = site.registry

    def test_template_root(self, site: Site, project_root: Path) -> None:
        assert site.template_root == project_root / "templates"

    def test_images_from_settings(self, project_root: Path) -> None:
        (project_root / "mosaicpods.toml").write_text('[images]\nbase_path = "/cdn/img/"\n')
        site = Site(PodSettings.from_cli(project_root=project_root))
        assert site.images.base_path == "cdn/img"

    def test_hot_reload(self, project_root: Path) -> None:
        (project_root / "mosaicpods.toml").write_text("[schemas]\nhot_reload = true\n")
        site = Site(PodSettings.from_cli(project_root=project_root))
        assert "contact" in site.registry.available_types()

        source = project_root / "config" / "pod_definitions.yml"
        source.write_text(
            "pods:\n  only:\n    name: O\n    category: C\n    schema:\n      x: {type: text}\n"
        )
        mtime = source.stat().st_mtime + 10
        os.utime(source, (mtime, mtime))
        assert site.registry.available_types() == ["only"]
