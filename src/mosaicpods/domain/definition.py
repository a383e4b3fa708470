"""Definition assembly — submitted form values to a pod definition.

A submission carries the raw field values plus three side-channel maps
(alt texts and the two responsive dimension hints) addressed by the same
path as the field they describe::

    fields:      {"cards": {"0": {"photo": "k1"}}}
    alt_texts:   {"cards": {"0": {"photo": "Team photo"}}}

:class:`DefinitionBuilder` walks the submission against a
:class:`~mosaicpods.domain.schema.PodTypeSchema` and produces one
schema-conformant, JSON-compatible definition.  Building is pure: the
existing definition and the submission are never mutated.
"""

from __future__ import annotations

import copy
import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Final, assert_never

from pydantic import BaseModel, Field

from mosaicpods.domain.coercion import coerce, is_blank, suppress_blank, to_bool, to_int
from mosaicpods.domain.errors import DefinitionParseError
from mosaicpods.domain.images import ImageRef, image_ref_from_mapping
from mosaicpods.domain.schema import FieldSchema, PodTypeSchema
from mosaicpods.domain.types import FieldType

logger = logging.getLogger(__name__)

Definition = dict[str, Any]
FieldPath = tuple[str, ...]

SIDE_CHANNELS: tuple[str, ...] = ("alt_texts", "dimension_desktops", "dimension_mobiles")


class _Omit:
    """Marker for "write nothing at this key"."""

    def __repr__(self) -> str:
        return "OMIT"


OMIT: Final = _Omit()


class PodSubmission(BaseModel):
    """One pod form submission.

    ``definition`` is the advanced whole-definition override: JSON text
    (or an already-decoded mapping) used as the starting document.
    """

    model_config = {"frozen": True}

    pod_type: str | None = None
    name: str | None = None
    fields: dict[str, Any] = Field(default_factory=dict)
    alt_texts: dict[str, Any] = Field(default_factory=dict)
    dimension_desktops: dict[str, Any] = Field(default_factory=dict)
    dimension_mobiles: dict[str, Any] = Field(default_factory=dict)
    definition: str | dict[str, Any] | None = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> PodSubmission:
        """Build a submission from a request payload.

        Keys may sit at the top level or under a ``pod`` key; nested keys
        win.  Unrelated keys are ignored and null maps become empty.

        Scalar ``pod_type``/``name`` values are stringified and container
        values dropped.  A ``definition`` that is neither text nor a mapping
        is kept as its JSON text, so the build rejects it with
        :class:`~mosaicpods.domain.errors.DefinitionParseError`.
        """
        data = {k: v for k, v in payload.items() if k != "pod"}
        nested = payload.get("pod")
        if isinstance(nested, Mapping):
            data.update(nested)

        known = {k: data[k] for k in cls.model_fields if k in data}
        for key in ("fields", *SIDE_CHANNELS):
            if not isinstance(known.get(key), Mapping):
                known.pop(key, None)
        for key in ("pod_type", "name"):
            value = known.get(key)
            if value is None or isinstance(value, str):
                continue
            if isinstance(value, (Mapping, list)):
                logger.debug("Dropping non-scalar %s from submission", key)
                known.pop(key)
            else:
                known[key] = str(value)
        override = known.get("definition")
        if override is not None and not isinstance(override, (str, Mapping)):
            known["definition"] = json.dumps(override)
        return cls.model_validate(known)

    def side_value(self, channel: str, path: FieldPath) -> str | None:
        """Side-channel value at *path*, or None when nothing was submitted."""
        node: Any = getattr(self, channel)
        for key in path:
            if not isinstance(node, Mapping) or key not in node:
                return None
            node = node[key]
        if node is None or isinstance(node, Mapping):
            return None
        return node if isinstance(node, str) else str(node)


@dataclass(frozen=True)
class BuiltDefinition:
    """Result of a definition build."""

    definition: Definition
    warnings: list[str] = field(default_factory=list)


def _existing_at(container: object, key: str) -> Any:
    if isinstance(container, Mapping):
        return container.get(key)
    return None


def _existing_item(container: object, index: int) -> Any:
    if isinstance(container, list) and 0 <= index < len(container):
        return container[index]
    return None


def _parse_upload(raw: object) -> Mapping[str, Any] | None:
    """Decode the structured metadata an upload leaves in the form value."""
    if isinstance(raw, Mapping):
        return raw
    if not isinstance(raw, str):
        return None
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError:
        return None
    return parsed if isinstance(parsed, Mapping) else None


def _fresh(value: str | None) -> str | None:
    return None if is_blank(value) else value


class DefinitionBuilder:
    """Assemble definitions for one pod type.

    Usage::

        builder = DefinitionBuilder(registry.schema_for("hero_banner"))
        built = builder.build(PodSubmission(fields={"title": "Hello"}))
        built.definition  # {"title": "Hello"}
    """

    def __init__(self, schema: PodTypeSchema) -> None:
        self.schema = schema

    # --- Public API ---

    def build(
        self,
        submission: PodSubmission,
        existing: Mapping[str, Any] | None = None,
    ) -> BuiltDefinition:
        """Merge *submission* onto a starting document.

        Raises:
            DefinitionParseError: If the advanced override is not a JSON
                object.  Nothing is partially applied.
        """
        warnings: list[str] = []
        definition = self._starting_document(submission, existing, warnings)

        for name in self._submitted_names(submission):
            schema_field = self.schema.get_field(name)
            if schema_field is None:
                logger.debug(
                    "Skipping field %r not declared by pod type %r", name, self.schema.type_name
                )
                continue
            value = self._build_top_level(
                schema_field,
                submission.fields.get(name),
                submission,
                _existing_at(existing, name),
                warnings,
            )
            if value is OMIT:
                definition.pop(name, None)
            else:
                definition[name] = value

        warnings.extend(self._constraint_warnings(definition))
        return BuiltDefinition(definition=definition, warnings=warnings)

    # --- Starting document ---

    def _starting_document(
        self,
        submission: PodSubmission,
        existing: Mapping[str, Any] | None,
        warnings: list[str],
    ) -> Definition:
        override = submission.definition
        if isinstance(override, Mapping) and override:
            base: Definition = copy.deepcopy(dict(override))
        elif isinstance(override, str) and override.strip() not in ("", "{}"):
            try:
                parsed = json.loads(override)
            except json.JSONDecodeError as exc:
                msg = f"Invalid JSON provided for definition: {exc}"
                raise DefinitionParseError(msg) from exc
            if not isinstance(parsed, dict):
                msg = f"Advanced definition must be a JSON object, got {type(parsed).__name__}"
                raise DefinitionParseError(msg)
            base = parsed
        elif existing:
            base = copy.deepcopy(dict(existing))
        else:
            base = {}

        # INVARIANT: every top-level key is a declared field.
        for key in list(base):
            if self.schema.get_field(key) is None:
                del base[key]
                logger.debug("Dropping undeclared key %r from starting document", key)
                warnings.append(f"Dropped undeclared field '{key}'")
        return base

    def _submitted_names(self, submission: PodSubmission) -> list[str]:
        """Submitted field names, plus image fields touched only by side channels.

        An alt text can be edited without re-submitting the image value.
        """
        names = list(submission.fields)
        for channel in SIDE_CHANNELS:
            for name in getattr(submission, channel):
                schema_field = self.schema.get_field(name)
                if (
                    name not in names
                    and schema_field is not None
                    and schema_field.type is FieldType.IMAGE
                ):
                    names.append(name)
        return names

    # --- Field dispatch ---

    def _build_top_level(
        self,
        schema_field: FieldSchema,
        raw: Any,
        submission: PodSubmission,
        existing: Any,
        warnings: list[str],
    ) -> Any:
        path: FieldPath = (schema_field.name,)
        field_type = schema_field.type

        if field_type is FieldType.ARRAY:
            return self._build_array(schema_field, raw, path, submission, existing, warnings)
        if field_type is FieldType.OBJECT:
            if not isinstance(raw, Mapping):
                return {}
            return self._build_members(
                schema_field.object_schema, raw, path, submission, existing, warnings
            )
        if field_type is FieldType.IMAGE:
            return self._merge_image(raw, path, submission, existing)
        if field_type is FieldType.BOOLEAN:
            return coerce(raw, field_type)
        if field_type is FieldType.NUMBER:
            return OMIT if is_blank(raw) else coerce(raw, field_type)

        value = suppress_blank(coerce(raw, field_type), field_type)
        return OMIT if is_blank(value) else value

    def _build_member(
        self,
        schema_field: FieldSchema,
        raw: Any,
        path: FieldPath,
        submission: PodSubmission,
        existing: Any,
        warnings: list[str],
    ) -> Any:
        """Sub-field of an object or array item: raw values pass through."""
        field_type = schema_field.type

        if field_type is FieldType.IMAGE:
            return self._merge_image(raw, path, submission, existing)
        if field_type is FieldType.BOOLEAN:
            return to_bool(raw)
        if field_type is FieldType.NUMBER:
            return OMIT if is_blank(raw) else to_int(raw)
        if field_type is FieldType.ARRAY:
            if raw is None:
                return OMIT
            return self._build_array(schema_field, raw, path, submission, existing, warnings)
        if field_type is FieldType.OBJECT:
            if not isinstance(raw, Mapping):
                return OMIT
            return self._build_members(
                schema_field.object_schema, raw, path, submission, existing, warnings
            )
        if field_type in (
            FieldType.TEXT,
            FieldType.RICH_TEXT,
            FieldType.URL,
            FieldType.SELECT,
            FieldType.DATE,
            FieldType.EMAIL,
        ):
            return OMIT if is_blank(raw) else raw
        assert_never(field_type)

    def _build_members(
        self,
        sub_fields: Mapping[str, FieldSchema],
        data: Mapping[str, Any],
        path: FieldPath,
        submission: PodSubmission,
        existing: Any,
        warnings: list[str],
    ) -> dict[str, Any]:
        built: dict[str, Any] = {}
        for sub_name, sub_field in sub_fields.items():
            value = self._build_member(
                sub_field,
                data.get(sub_name),
                (*path, sub_name),
                submission,
                _existing_at(existing, sub_name),
                warnings,
            )
            if value is not OMIT:
                built[sub_name] = value
        return built

    def _build_array(
        self,
        schema_field: FieldSchema,
        raw: Any,
        path: FieldPath,
        submission: PodSubmission,
        existing: Any,
        warnings: list[str],
    ) -> list[dict[str, Any]]:
        """Rebuild an array submitted as ``{"0": {...}, "1": {...}}``.

        Indices sort numerically (``"10"`` after ``"2"``); items that end
        up empty are dropped.
        """
        items: list[dict[str, Any]] = []
        for index, item_data in self._indexed_entries(raw, path, warnings):
            item = self._build_members(
                schema_field.item_schema,
                item_data if isinstance(item_data, Mapping) else {},
                (*path, str(index)),
                submission,
                _existing_item(existing, index),
                warnings,
            )
            if item:
                items.append(item)
        return items

    @staticmethod
    def _indexed_entries(raw: Any, path: FieldPath, warnings: list[str]) -> list[tuple[int, Any]]:
        if isinstance(raw, list):
            return list(enumerate(raw))
        if not isinstance(raw, Mapping):
            return []

        entries: list[tuple[int, Any]] = []
        for key, item_data in raw.items():
            try:
                index = int(str(key).strip())
            except ValueError:
                warnings.append(f"Skipped non-numeric index '{key}' in '{'.'.join(path)}'")
                continue
            entries.append((index, item_data))
        entries.sort(key=lambda entry: entry[0])
        return entries

    # --- Images ---

    def _merge_image(
        self,
        raw: Any,
        path: FieldPath,
        submission: PodSubmission,
        existing: Any,
    ) -> Any:
        """Apply the image merge rule at *path* (any nesting depth)."""
        alt_text = submission.side_value("alt_texts", path)
        desktop = submission.side_value("dimension_desktops", path)
        mobile = submission.side_value("dimension_mobiles", path)

        if not is_blank(raw):
            uploaded = _parse_upload(raw)
            if uploaded is not None:
                stored = image_ref_from_mapping(uploaded)
                if stored.is_present:
                    # Fresh hints win only when non-blank.
                    merged = stored.model_copy(
                        update={
                            "alt_text": _fresh(alt_text) or stored.alt_text,
                            "dimension_desktop": _fresh(desktop) or stored.dimension_desktop,
                            "dimension_mobile": _fresh(mobile) or stored.dimension_mobile,
                        }
                    )
                    return merged.to_definition()
            return ImageRef(
                attachment_key=raw if isinstance(raw, str) else json.dumps(raw, sort_keys=True),
                alt_text=alt_text or "",
                dimension_desktop=_fresh(desktop),
                dimension_mobile=_fresh(mobile),
            ).to_definition()

        if isinstance(existing, Mapping) and existing:
            retained = copy.deepcopy(dict(existing))
            if alt_text is not None:
                retained["alt_text"] = alt_text
            return retained
        if isinstance(existing, str) and existing.strip():
            # Legacy form: a bare attachment key.
            return {"attachment_key": existing, "alt_text": alt_text or ""}

        if _fresh(alt_text):
            return {"alt_text": alt_text}
        return OMIT

    # --- Constraints ---

    def _constraint_warnings(self, definition: Definition) -> list[str]:
        """Non-fatal checks for ``required`` and array item limits."""
        warnings: list[str] = []
        for name, schema_field in self.schema.fields.items():
            value = definition.get(name)
            if schema_field.required and is_blank(value):
                warnings.append(f"Required field '{name}' is missing")
            if schema_field.type is not FieldType.ARRAY or not isinstance(value, list):
                continue
            if schema_field.min_items is not None and len(value) < schema_field.min_items:
                warnings.append(
                    f"Field '{name}' has {len(value)} items, "
                    f"expected at least {schema_field.min_items}"
                )
            if schema_field.max_items is not None and len(value) > schema_field.max_items:
                warnings.append(
                    f"Field '{name}' has {len(value)} items, "
                    f"expected at most {schema_field.max_items}"
                )
        return warnings


def collect_attachment_keys(definition: object) -> list[str]:
    """Every ``attachment_key`` in *definition*, at any depth, in order.

    Used after a save to attach pending uploads to the pod.
    """
    found: list[str] = []

    def _scan(node: object) -> None:
        if isinstance(node, list):
            for item in node:
                _scan(item)
        elif isinstance(node, Mapping):
            key = node.get("attachment_key")
            if isinstance(key, str) and key.strip():
                if key not in found:
                    found.append(key)
                return
            for value in node.values():
                _scan(value)

    _scan(definition)
    return found
