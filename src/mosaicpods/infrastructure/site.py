"""Site — the single dependency injected into every service.

A Site owns the schema registry, the template environment and the image
resolver for one project root.  Everything is created lazily so that
``--help`` and ``--version`` never touch the filesystem.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from mosaicpods.domain.images import ImageReferenceResolver
from mosaicpods.infrastructure.registry import SchemaRegistry
from mosaicpods.infrastructure.templates import build_template_environment

if TYPE_CHECKING:
    from pathlib import Path

    from jinja2 import Environment

    from mosaicpods.config.settings import PodSettings

logger = logging.getLogger(__name__)


class Site:
    """Project-scoped wiring of registry, templates and image resolution."""

    def __init__(self, settings: PodSettings, *, registry: SchemaRegistry | None = None) -> None:
        self.settings = settings
        self._registry = registry
        self._templates: Environment | None = None
        self.images = ImageReferenceResolver(
            base_path=settings.images.base_path,
            default_variant=settings.images.default_variant,
        )

    @property
    def root(self) -> Path:
        return self.settings.project_root

    @property
    def template_root(self) -> Path:
        return self.root / self.settings.templates.directory

    @property
    def registry(self) -> SchemaRegistry:
        """The schema registry, loaded on first access.

        With ``[schemas] hot_reload`` enabled, every access re-checks the
        source file and reloads it when it changed.

        Raises:
            SchemaLoadError: If the registry cannot be loaded.
        """
        if self._registry is None:
            self._registry = SchemaRegistry(self.settings.schema_search_paths())
        if not self._registry.loaded:
            self._registry.load()
        elif self.settings.schemas.hot_reload:
            self._registry.reload_if_changed()
        return self._registry

    @property
    def templates(self) -> Environment:
        if self._templates is None:
            self._templates = build_template_environment(
                "pods",
                project_root=self.root,
                template_dir=self.settings.templates.directory,
                resolver=self.images,
            )
        return self._templates
