"""ScaffoldService — write starter templates for registered pod types."""

from __future__ import annotations

import logging

from mosaicpods.domain.scaffold import render_pod_template
from mosaicpods.infrastructure.templates import pod_template_name
from mosaicpods.services.base import BaseService
from mosaicpods.services.result import ServiceResult

logger = logging.getLogger(__name__)


class ScaffoldService(BaseService):
    """Generate ``pods/{pod_type}.html.j2`` for every registered type."""

    def generate(self, *, pod_types: list[str] | None = None, force: bool = False) -> ServiceResult:
        """Write starter templates; existing files are skipped unless *force*."""
        op = "scaffold_templates"
        registry, failure = self._load_registry(op)
        if failure is not None:
            return failure
        assert registry is not None

        requested = pod_types or registry.available_types()
        unknown = [t for t in requested if registry.schema_for(t) is None]
        if unknown:
            return ServiceResult.failure(
                op,
                "UNKNOWN_POD_TYPE",
                f"Unknown pod type(s): {', '.join(unknown)}",
                {"unknown": unknown, "available": registry.available_types()},
            )

        target_dir = self._site.template_root / "pods"
        target_dir.mkdir(parents=True, exist_ok=True)

        created: list[str] = []
        skipped: list[str] = []
        for type_name in requested:
            schema = registry.schema_for(type_name)
            assert schema is not None
            target = target_dir / pod_template_name(type_name)
            if target.exists() and not force:
                logger.info("Skipping %s, already exists", target)
                skipped.append(str(target))
                continue
            target.write_text(render_pod_template(schema), encoding="utf-8")
            logger.info("Generated template for %s", type_name)
            created.append(str(target))

        warnings = [f"Skipped existing template: {path}" for path in skipped]
        return ServiceResult(
            ok=True,
            op=op,
            data={"created": created, "skipped": skipped, "directory": str(target_dir)},
            warnings=warnings,
        )
