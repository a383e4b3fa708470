"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``MOSAICPODS_*`` prefix
  3. TOML file    — ``mosaicpods.toml`` discovered via walk-up
  4. Code defaults — baked into the section models

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource` that
reuses the ``find_config`` walk-up discovery from
:mod:`mosaicpods.config.discovery`.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from mosaicpods.config.discovery import find_config, find_project_root
from mosaicpods.config.models import ImagesConfig, SchemasConfig, TemplatesConfig


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``mosaicpods.toml`` file discovered via walk-up."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                import click

                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class PodSettings(BaseSettings):
    """Unified settings for mosaicpods.

    Attributes:
        project_root: Directory relative paths resolve against (parent of
            ``mosaicpods.toml``, else the nearest directory holding a pod
            registry, else CWD).
        config_path: The config file actually used, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "MOSAICPODS_",
        "env_nested_delimiter": "__",
    }

    # --- Resolved path (derived from the config location, not read from TOML) ---
    project_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    schemas: SchemasConfig = Field(default_factory=SchemasConfig)
    images: ImagesConfig = Field(default_factory=ImagesConfig)
    templates: TemplatesConfig = Field(default_factory=TemplatesConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        project_root: Path | None = None,
        **cli_flags: Any,
    ) -> PodSettings:
        """Construct settings from CLI invocation.

        Discovers ``mosaicpods.toml`` via walk-up (or explicit
        *config_path*), resolves *project_root* from the config file's
        parent directory (or the nearest directory holding a pod registry),
        and merges CLI flags as highest-priority overrides.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(project_root)

        resolved_root = project_root
        if resolved_root is None:
            if toml_path is not None:
                resolved_root = toml_path.parent
            else:
                resolved_root = find_project_root() or Path.cwd()

        _tls.toml_path = toml_path
        try:
            return cls(
                project_root=resolved_root,
                config_path=toml_path,
                **cli_flags,
            )
        finally:
            _tls.toml_path = None

    def schema_search_paths(self) -> list[Path]:
        """Registry source candidates, primary path first."""
        raw = [self.schemas.path, *self.schemas.fallback_paths]
        return [p if p.is_absolute() else self.project_root / p for p in map(Path, raw)]
