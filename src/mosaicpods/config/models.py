"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, mosaicpods.toml only contains
overrides.  A project that keeps its registry at
``config/pod_definitions.yml`` needs no config file at all.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- mosaicpods.toml sections ---


class SchemasConfig(BaseModel):
    """[schemas] section."""

    model_config = {"frozen": True}

    path: str = "config/pod_definitions.yml"
    fallback_paths: list[str] = Field(default_factory=lambda: ["docs/pod_definitions.yml"])
    hot_reload: bool = False


class ImagesConfig(BaseModel):
    """[images] section."""

    model_config = {"frozen": True}

    base_path: str = "admin/image_attachments"
    default_variant: str = "desktop"


class TemplatesConfig(BaseModel):
    """[templates] section."""

    model_config = {"frozen": True}

    directory: str = "templates"
