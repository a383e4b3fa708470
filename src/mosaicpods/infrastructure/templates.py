"""Shared Jinja2 template loading with per-project override support."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from jinja2 import (
    BaseLoader,
    ChoiceLoader,
    Environment,
    FileSystemLoader,
    PackageLoader,
    TemplateNotFound,
)

from mosaicpods.domain.images import ImageReferenceResolver

MISSING_TEMPLATE = "_missing.html.j2"


def pod_template_name(pod_type: str) -> str:
    return f"{pod_type}.html.j2"


def build_template_environment(
    group: str,
    *,
    project_root: Path | None = None,
    template_dir: str = "templates",
    resolver: ImageReferenceResolver | None = None,
) -> Environment:
    """Build a Jinja2 environment with project templates before packaged defaults.

    Project templates are loaded from ``<project_root>/<template_dir>/``.
    Both a namespaced directory (for example ``templates/pods/``) and the
    shared root are searched.  The image helpers are exposed as globals
    (``pod_image_tag``, ``pod_image_url``, ``pod_image_present``).
    """
    loaders: list[BaseLoader] = []
    if project_root is not None:
        template_root = project_root / template_dir
        loaders.append(FileSystemLoader([str(template_root / group), str(template_root)]))

    loaders.append(PackageLoader("mosaicpods", f"templates/{group}"))
    env = Environment(loader=ChoiceLoader(loaders), keep_trailing_newline=True, autoescape=True)

    images = resolver or ImageReferenceResolver()

    def pod_image_present(value: object, field: str | None = None) -> bool:
        return images.is_present(images.normalize(value, field))

    env.globals.update(
        pod_image_tag=images.image_tag,
        pod_image_url=images.image_url,
        pod_image_present=pod_image_present,
    )
    return env


@dataclass(frozen=True)
class RenderedPod:
    """HTML for one pod; ``template`` is None when the placeholder was used."""

    html: str
    template: str | None


def render_pod(
    env: Environment,
    pod_type: str,
    data: dict[str, Any],
    *,
    template_dir: str = "templates",
) -> RenderedPod:
    """Render *data* through the pod type's template.

    A missing template renders the packaged placeholder instead of
    failing, so previews work before a template has been written.
    """
    name = pod_template_name(pod_type)
    try:
        template = env.get_template(name)
    except TemplateNotFound:
        placeholder = env.get_template(MISSING_TEMPLATE)
        return RenderedPod(
            html=placeholder.render(pod_type=pod_type, template_dir=template_dir),
            template=None,
        )
    return RenderedPod(html=template.render(data=data), template=name)
