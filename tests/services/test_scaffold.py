"""Tests for ScaffoldService."""

from __future__ import annotations

from pathlib import Path

from mosaicpods.domain.definition import PodSubmission
from mosaicpods.infrastructure.site import Site
from mosaicpods.services.definition import DefinitionService
from mosaicpods.services.scaffold import ScaffoldService


class TestScaffold:
    def test_generates_all_types(self, site: Site, project_root: Path) -> None:
        result = ScaffoldService(site).generate()
        assert result.ok
        pods_dir = project_root / "templates" / "pods"
        assert sorted(p.name for p in pods_dir.iterdir()) == [
            "card_grid.html.j2",
            "contact.html.j2",
            "hero_banner.html.j2",
        ]
        assert len(result.data["created"]) == 3
        assert result.data["skipped"] == []

    def test_skips_existing_without_force(self, site: Site, project_root: Path) -> None:
        pods_dir = project_root / "templates" / "pods"
        pods_dir.mkdir(parents=True)
        (pods_dir / "contact.html.j2").write_text("mine")

        result = ScaffoldService(site).generate(pod_types=["contact"])
        assert result.data["created"] == []
        assert result.data["skipped"] == [str(pods_dir / "contact.html.j2")]
        assert result.warnings == [f"Skipped existing template: {pods_dir / 'contact.html.j2'}"]
        assert (pods_dir / "contact.html.j2").read_text() == "mine"

    def test_force_overwrites(self, site: Site, project_root: Path) -> None:
        pods_dir = project_root / "templates" / "pods"
        pods_dir.mkdir(parents=True)
        (pods_dir / "contact.html.j2").write_text("mine")

        result = ScaffoldService(site).generate(pod_types=["contact"], force=True)
        assert result.data["created"] == [str(pods_dir / "contact.html.j2")]
        assert "pod-contact" in (pods_dir / "contact.html.j2").read_text()

    def test_unknown_type(self, site: Site) -> None:
        result = ScaffoldService(site).generate(pod_types=["contact", "nope"])
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "UNKNOWN_POD_TYPE"
        assert result.error.detail["unknown"] == ["nope"]

    def test_scaffolded_template_used_by_preview(self, site: Site) -> None:
        ScaffoldService(site).generate(pod_types=["contact"])
        result = DefinitionService(site).preview(
            "contact", PodSubmission(fields={"email": "hi@example.com", "style": "dark"})
        )
        assert result.data["template"] == "contact.html.j2"
        assert 'href="mailto:hi@example.com"' in result.data["html"]
        assert '<div class="style style-dark"></div>' in result.data["html"]
