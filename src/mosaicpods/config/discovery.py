"""Locating the pod project a command runs against.

Two things are looked up by walking from the working directory towards
the filesystem root:

* ``mosaicpods.toml``: the optional settings file.  ``MOSAICPODS_CONFIG``
  (or ``--config``) names one explicitly and disables the walk.
* the project root: the nearest directory holding a pod definitions
  file at one of the default registry locations.  Used when there is no
  settings file, so commands work from any subdirectory of an app.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

from mosaicpods.config.models import SchemasConfig

CONFIG_FILENAME = "mosaicpods.toml"
CONFIG_ENV_VAR = "MOSAICPODS_CONFIG"

_DEFAULT_SCHEMAS = SchemasConfig()
REGISTRY_MARKERS: tuple[str, ...] = (_DEFAULT_SCHEMAS.path, *_DEFAULT_SCHEMAS.fallback_paths)


def _ancestors(start: Path | None) -> Iterator[Path]:
    current = (start or Path.cwd()).resolve()
    yield current
    yield from current.parents


def find_config(start: Path | None = None) -> Path | None:
    """Return the ``mosaicpods.toml`` governing *start* (default: cwd).

    An explicit ``MOSAICPODS_CONFIG`` is returned only if the file exists;
    it never falls back to the walk.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        explicit = Path(env_path)
        return explicit if explicit.is_file() else None

    for directory in _ancestors(start):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def find_project_root(start: Path | None = None) -> Path | None:
    """Nearest directory at or above *start* that holds a pod registry."""
    for directory in _ancestors(start):
        if any((directory / marker).is_file() for marker in REGISTRY_MARKERS):
            return directory
    return None
