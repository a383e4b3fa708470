"""Image references inside pod definitions.

Image fields are stored in definitions as objects::

    {"attachment_key": "hero_image_123", "alt_text": "Alt",
     "dimension_desktop": "1200,600", "dimension_mobile": "600,600"}

or, for legacy content, as a plain URL string.  :class:`ImageRef` is the
single normalised shape; :class:`ImageReferenceResolver` turns one into
a renderable URL or ``<img>`` tag.
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

from markupsafe import Markup, escape
from pydantic import BaseModel

DEFAULT_BASE_PATH = "admin/image_attachments"
ORIGINAL_VARIANT = "original"

_KEY_NORMALIZER = re.compile(r"[^a-z0-9]")

# Normalised source key -> ImageRef attribute.
_KEY_ALIASES: dict[str, str] = {
    "attachmentkey": "attachment_key",
    "url": "url",
    "alttext": "alt_text",
    "alt": "alt_text",
    "dimensiondesktop": "dimension_desktop",
    "dimensionmobile": "dimension_mobile",
    "caption": "caption",
    "filename": "filename",
    "contenttype": "content_type",
    "bytesize": "byte_size",
    "uploadedat": "uploaded_at",
}


class ImageRef(BaseModel):
    """Canonical image reference.

    INVARIANT: ``attachment_key`` wins over ``url`` when both are set.
    """

    model_config = {"frozen": True}

    attachment_key: str | None = None
    url: str | None = None
    alt_text: str = ""
    dimension_desktop: str | None = None
    dimension_mobile: str | None = None
    caption: str | None = None
    filename: str | None = None
    content_type: str | None = None
    byte_size: int | None = None
    uploaded_at: str | None = None

    @property
    def is_present(self) -> bool:
        return bool(self.attachment_key) or bool(self.url)

    def to_definition(self) -> dict[str, Any]:
        """JSON-compatible form stored in a definition (unset keys omitted)."""
        return self.model_dump(mode="json", exclude_none=True)


def _normalize_key(key: object) -> str:
    return _KEY_NORMALIZER.sub("", str(key).lower())


def _as_text(value: object) -> str | None:
    if value is None:
        return None
    text = value if isinstance(value, str) else str(value)
    return text if text.strip() else None


def _as_size(value: object) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


def image_ref_from_mapping(value: Mapping[Any, Any]) -> ImageRef:
    """Read an ImageRef out of persisted JSON, liberal about key spelling.

    ``attachment_key``, ``:attachment_key``, ``attachmentKey`` and
    ``AttachmentKey`` all resolve to the same attribute.  The first
    spelling found wins.
    """
    found: dict[str, Any] = {}
    for raw_key, raw_value in value.items():
        attr = _KEY_ALIASES.get(_normalize_key(raw_key))
        if attr is None or attr in found or raw_value is None:
            continue
        found[attr] = raw_value

    return ImageRef(
        attachment_key=_as_text(found.get("attachment_key")),
        url=_as_text(found.get("url")),
        alt_text=str(found.get("alt_text") or ""),
        dimension_desktop=_as_text(found.get("dimension_desktop")),
        dimension_mobile=_as_text(found.get("dimension_mobile")),
        caption=_as_text(found.get("caption")),
        filename=_as_text(found.get("filename")),
        content_type=_as_text(found.get("content_type")),
        byte_size=_as_size(found.get("byte_size")),
        uploaded_at=_as_text(found.get("uploaded_at")),
    )


def _dig(data: object, field: str) -> object:
    if not isinstance(data, Mapping):
        return None
    if field in data:
        return data[field]
    target = _normalize_key(field)
    for key, value in data.items():
        if _normalize_key(key) == target:
            return value
    return None


def normalize(value: object, field: str | None = None) -> ImageRef:
    """Normalise a stored image value into an :class:`ImageRef`.

    With *field*, *value* is the surrounding data mapping and the image
    is looked up under that key first.
    """
    if field is not None:
        value = _dig(value, field)

    if isinstance(value, ImageRef):
        return value
    if isinstance(value, str) and value.lstrip().startswith("{"):
        try:
            value = json.loads(value)
        except json.JSONDecodeError:
            return ImageRef(url=value)
    if isinstance(value, str):
        return ImageRef(url=value)
    if isinstance(value, Mapping):
        return image_ref_from_mapping(value)
    return ImageRef()


class ImageReferenceResolver:
    """Resolve image references to application-relative URLs.

    URLs follow ``/{base_path}/{attachment_key}/{variant}``; the image
    service behind that path performs the actual resizing.
    """

    def __init__(
        self, base_path: str = DEFAULT_BASE_PATH, default_variant: str = "desktop"
    ) -> None:
        self.base_path = base_path.strip("/")
        self.default_variant = default_variant

    normalize = staticmethod(normalize)

    @staticmethod
    def is_present(ref: ImageRef) -> bool:
        return ref.is_present

    def effective_variant(self, ref: ImageRef, variant: str | None = None) -> str:
        """Variant actually requested for *ref*.

        Desktop and mobile resizes need a stored dimension hint; without
        one the original is requested instead.
        """
        requested = (variant or self.default_variant).strip() or ORIGINAL_VARIANT
        if requested == "desktop" and not ref.dimension_desktop:
            return ORIGINAL_VARIANT
        if requested == "mobile" and not ref.dimension_mobile:
            return ORIGINAL_VARIANT
        return requested

    def resolve_url(self, ref: ImageRef, variant: str | None = None) -> str | None:
        """URL for *ref*, or None when nothing is present.

        Plain URL references are returned untouched.
        """
        if ref.attachment_key:
            key = quote(ref.attachment_key, safe="")
            return f"/{self.base_path}/{key}/{self.effective_variant(ref, variant)}"
        return ref.url or None

    def image_url(
        self, value: object, field: str | None = None, variant: str | None = None
    ) -> str | None:
        return self.resolve_url(normalize(value, field), variant)

    def image_tag(
        self,
        value: object,
        field: str | None = None,
        *,
        variant: str | None = None,
        alt: str | None = None,
        **attrs: Any,
    ) -> Markup:
        """Render an ``<img>`` tag, or empty markup when no image is set.

        *alt* overrides the stored alt text.  Extra keyword arguments
        become HTML attributes (``class_`` renders as ``class``).
        """
        ref = normalize(value, field)
        if not ref.is_present:
            return Markup("")

        url = self.resolve_url(ref, variant) or ""
        resolved_alt = ref.alt_text if alt is None else alt
        parts = [f'src="{escape(url)}"', f'alt="{escape(resolved_alt)}"']
        for name, attr_value in attrs.items():
            if attr_value is None or attr_value is False:
                continue
            attr_name = name.rstrip("_").replace("_", "-")
            if attr_value is True:
                parts.append(str(escape(attr_name)))
            else:
                parts.append(f'{escape(attr_name)}="{escape(attr_value)}"')
        return Markup(f"<img {' '.join(parts)}>")
