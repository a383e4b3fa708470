"""BaseService — abstract foundation for all mosaicpods services.

Every service receives a :class:`Site` at construction time. The Site
provides the schema registry, the template environment and the image
resolver.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from mosaicpods.domain.errors import SchemaLoadError
from mosaicpods.services.result import ServiceResult

if TYPE_CHECKING:
    from mosaicpods.domain.schema import PodTypeSchema
    from mosaicpods.infrastructure.registry import SchemaRegistry
    from mosaicpods.infrastructure.site import Site

logger = logging.getLogger(__name__)


class BaseService:
    """Abstract base for all service-layer classes.

    Usage::

        class SchemaService(BaseService):
            def validate(self) -> ServiceResult:
                registry, failure = self._load_registry("validate_schemas")
                if failure is not None:
                    return failure
                ...
    """

    def __init__(self, site: Site) -> None:
        self._site = site

    def _load_registry(self, op: str) -> tuple[SchemaRegistry, None] | tuple[None, ServiceResult]:
        """Registry for *op*, or a SCHEMA_LOAD_FAILED result."""
        try:
            return self._site.registry, None
        except SchemaLoadError as exc:
            logger.error("Pod definitions failed to load: %s", exc)
            return None, ServiceResult.failure(op, "SCHEMA_LOAD_FAILED", str(exc))

    def _schema(
        self, op: str, pod_type: str
    ) -> tuple[PodTypeSchema, None] | tuple[None, ServiceResult]:
        """Schema for *pod_type*, or a failure result naming what went wrong."""
        registry, failure = self._load_registry(op)
        if failure is not None:
            return None, failure
        assert registry is not None
        schema = registry.schema_for(pod_type)
        if schema is None:
            return None, ServiceResult.failure(
                op,
                "UNKNOWN_POD_TYPE",
                f"Pod type '{pod_type}' is not defined in pod definitions",
                {"pod_type": pod_type, "available": registry.available_types()},
            )
        return schema, None
