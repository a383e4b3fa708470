"""SchemaRegistry — the loaded set of pod type schemas.

The registry reads a YAML document with every pod type under a top-level
``pod_definitions`` (or ``pods``) mapping.  The parsed result is held in
an immutable :class:`RegistrySnapshot`.  Reloading builds a complete new
snapshot and swaps the reference under a writer lock; readers grab the
current reference without locking, so they see either the old or the new
registry and never a mix.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from mosaicpods.domain.errors import SchemaLoadError, SchemaValidationError
from mosaicpods.domain.schema import PodTypeSchema

logger = logging.getLogger(__name__)

DEFINITION_KEYS: tuple[str, ...] = ("pod_definitions", "pods")


@dataclass(frozen=True)
class RegistrySnapshot:
    """One fully-parsed registry generation."""

    schemas: Mapping[str, PodTypeSchema] = field(default_factory=lambda: MappingProxyType({}))
    categories: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    problems: tuple[str, ...] = ()
    entry_count: int = 0
    source: Path | None = None
    mtime: float | None = None


def _to_plain(node: Any) -> Any:
    """Convert ruamel containers to plain dicts/lists (keys as strings)."""
    if isinstance(node, Mapping):
        return {str(k): _to_plain(v) for k, v in node.items()}
    if isinstance(node, list):
        return [_to_plain(v) for v in node]
    return node


def parse_document(
    data: Any, *, source: Path | None = None, mtime: float | None = None
) -> RegistrySnapshot:
    """Build a snapshot from an already-decoded YAML document.

    Raises:
        SchemaLoadError: If the document or its definitions key is not a
            mapping.
    """
    where = str(source) if source else "pod definitions"
    if not isinstance(data, Mapping):
        msg = f"{where} must parse to a mapping"
        raise SchemaLoadError(msg)

    entries = None
    for key in DEFINITION_KEYS:
        entries = data.get(key)
        if entries is not None:
            break
    if not isinstance(entries, Mapping):
        msg = f"{where} must have a 'pod_definitions' mapping"
        raise SchemaLoadError(msg)

    schemas: dict[str, PodTypeSchema] = {}
    problems: list[str] = []
    for raw_name, config in entries.items():
        type_name = str(raw_name)
        schema, entry_problems = PodTypeSchema.from_config(type_name, config)
        problems.extend(entry_problems)
        if schema is not None:
            schemas[type_name] = schema

    categories = data.get("categories")
    return RegistrySnapshot(
        schemas=MappingProxyType(schemas),
        categories=MappingProxyType(dict(categories) if isinstance(categories, Mapping) else {}),
        problems=tuple(problems),
        entry_count=len(entries),
        source=source,
        mtime=mtime,
    )


class SchemaRegistry:
    """Owner of the active pod type schemas.

    Usage::

        registry = SchemaRegistry([Path("config/pod_definitions.yml")])
        registry.load()
        registry.schema_for("hero_banner")
    """

    def __init__(self, search_paths: Sequence[Path] = ()) -> None:
        self.search_paths: tuple[Path, ...] = tuple(search_paths)
        self._snapshot = RegistrySnapshot()
        self._loaded = False
        self._write_lock = threading.Lock()

    # --- Loading ---

    def resolve_source(self) -> Path:
        """First existing file among the search paths."""
        for candidate in self.search_paths:
            if candidate.is_file():
                return candidate
        searched = ", ".join(str(p) for p in self.search_paths) or "<none>"
        msg = f"pod_definitions.yml not found (searched: {searched})"
        raise SchemaLoadError(msg)

    def load(self, path: Path | None = None) -> Mapping[str, PodTypeSchema]:
        """Read and parse the source file, then swap it in.

        The previous snapshot stays active if anything fails.

        Raises:
            SchemaLoadError: On a missing file, bad YAML, or bad layout.
        """
        source = path or self.resolve_source()
        try:
            text = source.read_text(encoding="utf-8")
            mtime = source.stat().st_mtime
        except OSError as exc:
            msg = f"Cannot read {source}: {exc}"
            raise SchemaLoadError(msg) from exc

        snapshot = self._parse(text, source=source, mtime=mtime)
        self._swap(snapshot)
        return snapshot.schemas

    def loads(self, text: str, *, source: Path | None = None) -> Mapping[str, PodTypeSchema]:
        """Parse YAML *text* and swap it in (no file involved)."""
        snapshot = self._parse(text, source=source, mtime=None)
        self._swap(snapshot)
        return snapshot.schemas

    def reload(self) -> Mapping[str, PodTypeSchema]:
        """Re-read the current source (or resolve it again)."""
        logger.info("Reloading pod definitions")
        return self.load(self._snapshot.source)

    def reload_if_changed(self) -> bool:
        """Reload only when the source file's mtime moved.

        Returns True when a reload happened.  Load failures are logged
        and the previous snapshot kept, matching development hot-reload
        where a half-saved file must not take the registry down.
        """
        source = self._snapshot.source
        if source is None:
            return False
        try:
            mtime = source.stat().st_mtime
        except OSError:
            logger.warning("Pod definitions source disappeared: %s", source)
            return False
        if mtime == self._snapshot.mtime:
            return False

        try:
            self.load(source)
        except SchemaLoadError as exc:
            logger.error("Reload of %s failed: %s", source, exc)
            return False
        if self._snapshot.problems:
            logger.error("Pod definitions have problems: %s", "; ".join(self._snapshot.problems))
        else:
            logger.info("Pod definitions validation OK")
        return True

    def _parse(self, text: str, *, source: Path | None, mtime: float | None) -> RegistrySnapshot:
        try:
            data = YAML(typ="safe").load(text)
        except YAMLError as exc:
            msg = f"Invalid YAML in {source or 'pod definitions'}: {exc}"
            raise SchemaLoadError(msg) from exc
        snapshot = parse_document(_to_plain(data), source=source, mtime=mtime)
        for problem in snapshot.problems:
            logger.warning("Pod definition problem: %s", problem)
        return snapshot

    def _swap(self, snapshot: RegistrySnapshot) -> None:
        with self._write_lock:
            self._snapshot = snapshot
            self._loaded = True
        logger.debug(
            "Loaded %d pod types from %s",
            len(snapshot.schemas),
            snapshot.source or "<string>",
        )

    # --- Lookups (lock-free reads of the current snapshot) ---

    @property
    def snapshot(self) -> RegistrySnapshot:
        return self._snapshot

    @property
    def loaded(self) -> bool:
        return self._loaded

    def schema_for(self, type_name: str) -> PodTypeSchema | None:
        """Schema for *type_name*, or None when no schema is available."""
        return self._snapshot.schemas.get(str(type_name))

    def available_types(self) -> list[str]:
        return list(self._snapshot.schemas)

    def categories(self) -> dict[str, Any]:
        return dict(self._snapshot.categories)

    def validate(self) -> bool:
        """Structural check of the loaded document.

        Raises:
            SchemaValidationError: Listing every problem found.
        """
        snapshot = self._snapshot
        if snapshot.entry_count == 0:
            raise SchemaValidationError(["No pod definitions loaded"])
        if snapshot.problems:
            raise SchemaValidationError(list(snapshot.problems))
        return True
