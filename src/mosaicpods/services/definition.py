"""DefinitionService — build, preview and inspect pod definitions."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from mosaicpods.domain.definition import (
    DefinitionBuilder,
    PodSubmission,
    collect_attachment_keys,
)
from mosaicpods.domain.errors import DefinitionParseError
from mosaicpods.domain.images import normalize
from mosaicpods.infrastructure.templates import render_pod
from mosaicpods.services.base import BaseService
from mosaicpods.services.result import ServiceResult

logger = logging.getLogger(__name__)


class DefinitionService(BaseService):
    """Turn form submissions into definitions and definitions into output."""

    def build(
        self,
        pod_type: str,
        submission: PodSubmission,
        *,
        existing: Mapping[str, Any] | None = None,
    ) -> ServiceResult:
        """Build the definition for one pod (create, or update with *existing*)."""
        op = "build_definition"
        schema, failure = self._schema(op, pod_type)
        if failure is not None:
            return failure
        assert schema is not None

        try:
            built = DefinitionBuilder(schema).build(submission, existing)
        except DefinitionParseError as exc:
            logger.info("Rejected advanced definition for %s: %s", pod_type, exc)
            return ServiceResult.failure(op, "INVALID_DEFINITION_JSON", str(exc))

        logger.debug("Built definition for %s: %r", pod_type, built.definition)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "pod_type": pod_type,
                "name": submission.name,
                "definition": built.definition,
                "attachment_keys": collect_attachment_keys(built.definition),
            },
            warnings=built.warnings,
        )

    def preview(self, pod_type: str, submission: PodSubmission) -> ServiceResult:
        """Build a definition and render it through the pod type's template."""
        op = "preview_pod"
        built = self.build(pod_type, submission)
        if not built.ok:
            return built.model_copy(update={"op": op})

        definition = built.data["definition"]
        rendered = render_pod(
            self._site.templates,
            pod_type,
            definition,
            template_dir=self._site.settings.templates.directory,
        )
        warnings = list(built.warnings)
        if rendered.template is None:
            warnings.append(f"No template for pod type '{pod_type}', rendered placeholder")
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "pod_type": pod_type,
                "template": rendered.template,
                "html": rendered.html,
                "definition": definition,
            },
            warnings=warnings,
        )

    def resolve_image(
        self,
        definition: Mapping[str, Any],
        field: str,
        *,
        variant: str | None = None,
    ) -> ServiceResult:
        """Resolve the image stored at *field* to a renderable URL."""
        op = "resolve_image"
        if field not in definition:
            return ServiceResult.failure(
                op,
                "FIELD_NOT_FOUND",
                f"Definition has no field '{field}'",
                {"fields": sorted(definition)},
            )

        images = self._site.images
        ref = normalize(definition, field)
        warnings: list[str] = []
        if not ref.is_present:
            warnings.append(f"Field '{field}' has no image reference")
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "field": field,
                "present": ref.is_present,
                "attachment_key": ref.attachment_key,
                "variant": images.effective_variant(ref, variant) if ref.attachment_key else None,
                "url": images.resolve_url(ref, variant),
                "alt_text": ref.alt_text,
            },
            warnings=warnings,
        )

    def attachment_keys(self, definition: Mapping[str, Any]) -> ServiceResult:
        """List every attachment key referenced anywhere in *definition*."""
        keys = collect_attachment_keys(definition)
        return ServiceResult(
            ok=True,
            op="scan_attachments",
            data={"count": len(keys), "items": [{"attachment_key": k} for k in keys]},
        )
