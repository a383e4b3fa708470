"""Starter Jinja2 templates generated from pod type schemas.

The generated template renders a pod definition bound to ``data`` and
uses the image helpers registered on the template environment.  It is a
starting point to be edited by hand, so the output favours readable,
predictable markup over completeness.
"""

from __future__ import annotations

import json
import re

from markupsafe import escape

from mosaicpods.domain.schema import FieldSchema, PodTypeSchema
from mosaicpods.domain.types import FieldType

_HEADING_HINTS: tuple[str, ...] = ("title", "heading", "headline")
_SUBHEADING_HINTS: tuple[str, ...] = ("subtitle", "subheading", "tagline")
_LINK_SUFFIXES: tuple[str, ...] = ("_url", "_link", "_href")
_TEXT_SUFFIXES: tuple[str, ...] = ("_text", "_label", "_title")


def dasherize(name: str) -> str:
    return name.strip().replace("_", "-").replace(" ", "-").lower()


def _comment(text: str | None) -> str:
    """*text* made safe inside a Jinja comment block."""
    return (text or "").replace("#}", "# }")


def _alias(name: str, depth: int) -> str:
    """A Jinja identifier for an object field bound with ``set``."""
    ident = re.sub(r"\W", "_", name)
    return f"obj_{ident}_{depth}"


def _lit(name: str) -> str:
    """A Jinja string literal for *name*."""
    return json.dumps(name)


def _text_tag(name: str) -> str:
    lowered = name.lower()
    if any(hint in lowered for hint in _SUBHEADING_HINTS):
        return "h3"
    if any(hint in lowered for hint in _HEADING_HINTS):
        return "h2"
    return "p"


def associated_text_field(name: str, siblings: dict[str, FieldSchema]) -> str | None:
    """Sibling text field that labels a URL field (``cta_url`` -> ``cta_text``)."""
    stems: list[str] = []
    for suffix in _LINK_SUFFIXES:
        if name.endswith(suffix):
            stems.append(name[: -len(suffix)])
    if name in ("url", "link", "href"):
        stems.append("")

    for stem in stems:
        for suffix in _TEXT_SUFFIXES:
            candidate = f"{stem}{suffix}" if stem else suffix.lstrip("_")
            sibling = siblings.get(candidate)
            if sibling is not None and sibling.type is FieldType.TEXT:
                return candidate
    return None


class _TemplateWriter:
    def __init__(self, schema: PodTypeSchema) -> None:
        self.schema = schema
        self.prefix = dasherize(schema.type_name)
        self.lines: list[str] = []

    def emit(self, indent: int, text: str) -> None:
        self.lines.append(f"{'  ' * indent}{text}")

    def render(self) -> str:
        schema = self.schema
        self.lines = [
            "{#",
            f"  Pod: {_comment(schema.display_name)}",
            f"  Description: {_comment(schema.description)}",
            f"  Category: {_comment(schema.category)}",
            "  Generated from pod_definitions.yml",
            "#}",
        ]
        classes = [f"pod-{self.prefix}"]
        if schema.category:
            classes.append(f"pod-category-{dasherize(schema.category)}")
        self.emit(0, f'<div class="{" ".join(classes)}">')
        for schema_field in schema.fields.values():
            self.field_block(
                "data", schema_field, schema.fields, indent=1, css=self.prefix, depth=0
            )
        self.emit(0, "</div>")
        return "\n".join(self.lines) + "\n"

    def field_block(
        self,
        var: str,
        schema_field: FieldSchema,
        siblings: dict[str, FieldSchema],
        *,
        indent: int,
        css: str,
        depth: int,
    ) -> None:
        name = schema_field.name
        value = f"{var}[{_lit(name)}]"
        css_name = f"{css}-{dasherize(name)}"
        field_type = schema_field.type

        self.emit(indent, f"{{% if {var}.get({_lit(name)}) %}}")
        if field_type is FieldType.ARRAY:
            item = f"item{depth}" if depth else "item"
            self.emit(indent + 1, f'<div class="{css_name}-collection">')
            self.emit(indent + 2, '<div class="collection-header">')
            self.emit(indent + 3, f'<h3 class="collection-title">{escape(schema_field.label)}</h3>')
            self.emit(indent + 2, "</div>")
            self.emit(indent + 2, f"{{% for {item} in {value} %}}")
            self.emit(indent + 3, f'<div class="{css_name}-item item-{{{{ loop.index0 }}}}">')
            for sub in schema_field.item_schema.values():
                self.field_block(
                    item,
                    sub,
                    schema_field.item_schema,
                    indent=indent + 4,
                    css="item",
                    depth=depth + 1,
                )
            self.emit(indent + 3, "</div>")
            self.emit(indent + 2, "{% endfor %}")
            self.emit(indent + 1, "</div>")
        elif field_type is FieldType.OBJECT:
            obj = _alias(name, depth)
            self.emit(indent + 1, f'<div class="{css_name}">')
            self.emit(indent + 2, f"{{% set {obj} = {value} %}}")
            for sub in schema_field.object_schema.values():
                self.field_block(
                    obj,
                    sub,
                    schema_field.object_schema,
                    indent=indent + 2,
                    css=css_name,
                    depth=depth + 1,
                )
            self.emit(indent + 1, "</div>")
        else:
            self.emit(indent + 1, f'<div class="{css_name}">')
            self.leaf(var, schema_field, siblings, indent=indent + 2)
            self.emit(indent + 1, "</div>")
        self.emit(indent, "{% endif %}")

    def leaf(
        self, var: str, schema_field: FieldSchema, siblings: dict[str, FieldSchema], *, indent: int
    ) -> None:
        name = schema_field.name
        value = f"{var}[{_lit(name)}]"
        css = dasherize(name)
        field_type = schema_field.type

        if field_type is FieldType.IMAGE:
            self.emit(indent, '<div class="image-field">')
            call = f'pod_image_tag({var}, {_lit(name)}, variant="desktop", class_="img-responsive")'
            self.emit(indent + 1, f"{{{{ {call} }}}}")
            self.emit(indent, "</div>")
        elif field_type is FieldType.RICH_TEXT:
            self.emit(indent, '<div class="rich-text-content">')
            self.emit(indent + 1, f"{{{{ {value} | safe }}}}")
            self.emit(indent, "</div>")
        elif field_type is FieldType.URL:
            text_field = associated_text_field(name, siblings)
            label = f"{var}[{_lit(text_field)}]" if text_field else value
            self.emit(indent, f'<a class="link" href="{{{{ {value} }}}}">{{{{ {label} }}}}</a>')
        elif field_type is FieldType.SELECT:
            self.emit(indent, f'<div class="{css} {css}-{{{{ {value} }}}}"></div>')
        elif field_type is FieldType.BOOLEAN:
            note = f"<!-- {escape(schema_field.label)} is enabled -->"
            self.emit(indent, f'<div class="{css}-enabled">{note}</div>')
        elif field_type is FieldType.NUMBER:
            self.emit(indent, f'<span class="{css}">{{{{ {value} }}}}</span>')
        elif field_type is FieldType.DATE:
            expr = f"{{{{ {value} }}}}"
            self.emit(indent, f'<time class="{css}" datetime="{expr}">{expr}</time>')
        elif field_type is FieldType.EMAIL:
            expr = f"{{{{ {value} }}}}"
            self.emit(indent, f'<a class="{css}" href="mailto:{expr}">{expr}</a>')
        else:
            tag = _text_tag(name)
            self.emit(indent, f'<{tag} class="{css}">{{{{ {value} }}}}</{tag}>')


def render_pod_template(schema: PodTypeSchema) -> str:
    """Generate a starter template for *schema*."""
    return _TemplateWriter(schema).render()
