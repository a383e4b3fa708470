"""Field types for pod schemas.

The set is closed: every branch that dispatches on a field type is
written against :class:`FieldType` so a new member shows up as an
unhandled case instead of silently falling through to string handling.
"""

from __future__ import annotations

from enum import StrEnum


class FieldType(StrEnum):
    """Declared type of a pod schema field."""

    TEXT = "text"
    RICH_TEXT = "rich_text"
    URL = "url"
    SELECT = "select"
    BOOLEAN = "boolean"
    NUMBER = "number"
    DATE = "date"
    EMAIL = "email"
    IMAGE = "image"
    ARRAY = "array"
    OBJECT = "object"

    @property
    def is_container(self) -> bool:
        """True for types that carry a nested schema (array, object)."""
        return self in CONTAINER_TYPES

    @classmethod
    def parse(cls, value: object) -> FieldType | None:
        """Resolve a YAML type name, or None if it is not recognised.

        Matching is case-insensitive and ``integer`` is accepted as an
        alias of ``number``.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        name = value.strip().lower()
        name = TYPE_ALIASES.get(name, name)
        try:
            return cls(name)
        except ValueError:
            return None


TYPE_ALIASES: dict[str, str] = {"integer": "number"}

CONTAINER_TYPES: frozenset[FieldType] = frozenset({FieldType.ARRAY, FieldType.OBJECT})

# Types whose whitespace-only values are treated as absent.
BLANK_SUPPRESSED_TYPES: frozenset[FieldType] = frozenset(
    {FieldType.TEXT, FieldType.SELECT, FieldType.RICH_TEXT, FieldType.URL}
)
