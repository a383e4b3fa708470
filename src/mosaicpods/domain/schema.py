"""Pod type schemas parsed from the YAML registry.

Each registry entry looks like::

    hero_banner:
      name: Hero banner
      category: marketing
      description: Full-width banner with a call to action
      schema:
        title: {type: text, required: true}
        background: {type: image, crop_ratios: ["16:9"]}
        buttons:
          type: array
          max_items: 2
          item_schema:
            label: {type: text}
            url: {type: url}

Parsing is lenient: problems are collected as messages rather than
raised, so one bad field does not take a whole pod type offline.  The
registry surfaces the collected problems through ``validate()``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from mosaicpods.domain.types import FieldType

REQUIRED_ENTRY_KEYS: tuple[str, ...] = ("name", "category", "schema")

# Field config keys copied verbatim onto FieldSchema.
_PASSTHROUGH_KEYS: tuple[str, ...] = (
    "placeholder",
    "help",
    "min_items",
    "max_items",
    "accept",
    "max_size",
    "condition",
)


def _str_list(value: object) -> list[str]:
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value]
    if value is None:
        return []
    return [str(value)]


def humanize(name: str) -> str:
    """Turn a field key into a display label (``hero_title`` -> ``Hero title``)."""
    text = name.strip()
    if text.endswith("_id"):
        text = text[:-3]
    text = text.replace("_", " ").strip()
    return text[:1].upper() + text[1:].lower()


class FieldSchema(BaseModel):
    """One declared field of a pod type (possibly nested)."""

    model_config = {"frozen": True}

    name: str
    type: FieldType
    label: str
    placeholder: str | None = None
    help: str | None = None
    required: bool = False
    options: list[str] = Field(default_factory=list)
    min_items: int | None = None
    max_items: int | None = None
    item_schema: dict[str, FieldSchema] = Field(default_factory=dict)
    object_schema: dict[str, FieldSchema] = Field(default_factory=dict)
    crop_ratios: list[str] = Field(default_factory=list)
    accept: str | None = None
    max_size: int | str | None = None
    condition: Any = None

    @property
    def sub_fields(self) -> dict[str, FieldSchema]:
        """Nested schema for container types, empty for leaves."""
        if self.type is FieldType.ARRAY:
            return self.item_schema
        if self.type is FieldType.OBJECT:
            return self.object_schema
        return {}

    def descriptor(self) -> dict[str, Any]:
        """Form-generation descriptor, keyed the way the YAML source is."""
        data = self.model_dump(mode="json", exclude_none=True)
        data["item_schema"] = {k: v.descriptor() for k, v in self.item_schema.items()}
        data["schema"] = {k: v.descriptor() for k, v in self.object_schema.items()}
        del data["object_schema"]
        return data


class PodTypeSchema(BaseModel):
    """A named pod type and its ordered fields."""

    model_config = {"frozen": True}

    type_name: str
    display_name: str
    category: str | None = None
    description: str | None = None
    fields: dict[str, FieldSchema] = Field(default_factory=dict)

    def get_field(self, name: str) -> FieldSchema | None:
        return self.fields.get(name)

    def form_fields(self) -> list[dict[str, Any]]:
        """Ordered field descriptors used to generate an edit form."""
        return [f.descriptor() for f in self.fields.values()]

    @classmethod
    def from_config(cls, type_name: str, config: object) -> tuple[PodTypeSchema | None, list[str]]:
        """Parse one registry entry.

        Returns ``(schema, problems)``.  The schema is None only when the
        entry is unusable (not a mapping, or no mapping under ``schema``);
        missing ``name``/``category`` and bad fields are reported but the
        remaining fields are still served.
        """
        if not isinstance(config, Mapping):
            return None, [f"Pod type '{type_name}' must map to a mapping"]

        problems = [
            f"Pod '{type_name}' missing '{key}'" for key in REQUIRED_ENTRY_KEYS if key not in config
        ]
        raw_schema = config.get("schema")
        if "schema" in config and not isinstance(raw_schema, Mapping):
            problems.append(f"Pod '{type_name}' schema must be a mapping")
        if not isinstance(raw_schema, Mapping):
            return None, problems

        fields, field_problems = parse_fields(raw_schema, pod_type=type_name)
        problems.extend(field_problems)

        display_name = config.get("name")
        category = config.get("category")
        description = config.get("description")
        schema = cls(
            type_name=type_name,
            display_name=str(display_name) if display_name else humanize(type_name),
            category=str(category) if category is not None else None,
            description=str(description) if description is not None else None,
            fields=fields,
        )
        return schema, problems


def parse_fields(
    raw_schema: Mapping[str, Any],
    *,
    pod_type: str,
    path: tuple[str, ...] = (),
) -> tuple[dict[str, FieldSchema], list[str]]:
    """Parse a ``field name -> config`` mapping, recursing into containers."""
    fields: dict[str, FieldSchema] = {}
    problems: list[str] = []

    for raw_name, cfg in raw_schema.items():
        name = str(raw_name)
        dotted = ".".join((*path, name))
        where = f"Field '{dotted}' in pod '{pod_type}'"

        if not isinstance(cfg, Mapping) or not isinstance(cfg.get("type"), str):
            problems.append(f"{where} must have a 'type'")
            continue

        field_type = FieldType.parse(cfg["type"])
        if field_type is None:
            problems.append(f"{where} has unknown type '{cfg['type']}'")
            continue

        item_schema: dict[str, FieldSchema] = {}
        object_schema: dict[str, FieldSchema] = {}
        nested_key = {FieldType.ARRAY: "item_schema", FieldType.OBJECT: "schema"}.get(field_type)

        if nested_key is not None:
            raw_nested = cfg.get(nested_key)
            if not isinstance(raw_nested, Mapping) or not raw_nested:
                problems.append(f"{where} ({field_type}) must declare a non-empty '{nested_key}'")
                continue
            nested, nested_problems = parse_fields(
                raw_nested, pod_type=pod_type, path=(*path, name)
            )
            problems.extend(nested_problems)
            if field_type is FieldType.ARRAY:
                item_schema = nested
            else:
                object_schema = nested
        elif cfg.get("item_schema") or cfg.get("schema"):
            problems.append(f"{where} ({field_type}) must not declare a nested schema")

        kwargs: dict[str, Any] = {k: cfg[k] for k in _PASSTHROUGH_KEYS if cfg.get(k) is not None}
        try:
            fields[name] = FieldSchema(
                name=name,
                type=field_type,
                label=str(cfg.get("label") or humanize(name)),
                required=cfg.get("required") is True,
                options=_str_list(cfg.get("options")),
                crop_ratios=_str_list(cfg.get("crop_ratios")),
                item_schema=item_schema,
                object_schema=object_schema,
                **kwargs,
            )
        except PydanticValidationError as exc:
            details = "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
            )
            problems.append(f"{where} has invalid options ({details})")

    return fields, problems
