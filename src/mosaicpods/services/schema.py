"""SchemaService — registry inspection and validation."""

from __future__ import annotations

import logging

from mosaicpods.domain.errors import SchemaLoadError, SchemaValidationError
from mosaicpods.services.base import BaseService
from mosaicpods.services.result import ServiceResult

logger = logging.getLogger(__name__)


class SchemaService(BaseService):
    """Validate, list and describe registered pod types."""

    def validate(self) -> ServiceResult:
        """Run the explicit structural check over the loaded registry."""
        op = "validate_schemas"
        registry, failure = self._load_registry(op)
        if failure is not None:
            return failure
        assert registry is not None

        try:
            registry.validate()
        except SchemaValidationError as exc:
            return ServiceResult.failure(
                op,
                "SCHEMA_INVALID",
                f"{len(exc.problems)} problem(s) in pod definitions",
                {"problems": exc.problems},
            )
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "source": str(registry.snapshot.source) if registry.snapshot.source else None,
                "count": len(registry.available_types()),
                "valid": True,
            },
        )

    def list_types(self, *, category: str | None = None) -> ServiceResult:
        op = "list_pod_types"
        registry, failure = self._load_registry(op)
        if failure is not None:
            return failure
        assert registry is not None

        items = []
        for type_name in registry.available_types():
            schema = registry.schema_for(type_name)
            if schema is None or (category is not None and schema.category != category):
                continue
            items.append(
                {
                    "type": schema.type_name,
                    "name": schema.display_name,
                    "category": schema.category,
                    "fields": len(schema.fields),
                }
            )
        return ServiceResult(
            ok=True,
            op=op,
            data={"count": len(items), "items": items, "categories": registry.categories()},
        )

    def show_type(self, pod_type: str) -> ServiceResult:
        """Describe one pod type with its form field descriptors."""
        op = "show_pod_type"
        schema, failure = self._schema(op, pod_type)
        if failure is not None:
            return failure
        assert schema is not None
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "type": schema.type_name,
                "name": schema.display_name,
                "category": schema.category,
                "description": schema.description,
                "fields": schema.form_fields(),
            },
        )

    def reload(self) -> ServiceResult:
        """Re-read the registry source, keeping the old one on failure."""
        op = "reload_schemas"
        registry, failure = self._load_registry(op)
        if failure is not None:
            return failure
        assert registry is not None

        try:
            registry.reload()
        except SchemaLoadError as exc:
            logger.error("Reload failed, keeping previous pod definitions: %s", exc)
            return ServiceResult.failure(op, "SCHEMA_LOAD_FAILED", str(exc))
        return ServiceResult(
            ok=True,
            op=op,
            data={"count": len(registry.available_types())},
            warnings=list(registry.snapshot.problems),
        )
