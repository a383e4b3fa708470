"""Loose coercion of raw form values to definition values.

Coercion is total: every input produces some value and nothing here
raises.  Form submissions arrive as strings (``"1"``, ``"on"``, ``""``)
or as already-decoded JSON, and both must land on the same canonical
representation.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any, assert_never

from mosaicpods.domain.types import BLANK_SUPPRESSED_TYPES, FieldType

TRUTHY_VALUES: tuple[object, ...] = ("1", "true", True)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def is_blank(value: object) -> bool:
    """True for None, empty containers, and whitespace-only strings."""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (list, tuple, dict)):
        return len(value) == 0
    return False


def to_bool(raw: object) -> bool:
    """Checkbox semantics: only ``"1"``, ``"true"`` and ``True`` are set.

    The integer ``1`` is not in the set (``True == 1``, so the type is
    checked before membership).
    """
    if isinstance(raw, bool):
        return raw
    return isinstance(raw, str) and raw in TRUTHY_VALUES


def to_int(raw: object) -> int:
    """Integer parse with leading-digit semantics; garbage becomes 0.

    >>> to_int("42")
    42
    >>> to_int("12px")
    12
    >>> to_int("abc")
    0
    """
    if isinstance(raw, bool):
        return int(raw)
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        return int(raw) if raw == raw and raw not in (float("inf"), float("-inf")) else 0
    match = _LEADING_INT.match(str(raw))
    return int(match.group(1)) if match else 0


def coerce(raw: Any, field_type: FieldType) -> Any:
    """Coerce *raw* to the canonical value for *field_type*.

    Booleans never come back as None; every other type passes None
    through unchanged.
    """
    if field_type is FieldType.BOOLEAN:
        return to_bool(raw)
    if raw is None:
        return None

    if field_type is FieldType.NUMBER:
        return to_int(raw)
    if field_type is FieldType.ARRAY:
        return raw if isinstance(raw, list) else []
    if field_type is FieldType.OBJECT:
        return raw if isinstance(raw, Mapping) else {}
    if field_type in (
        FieldType.TEXT,
        FieldType.RICH_TEXT,
        FieldType.URL,
        FieldType.SELECT,
        FieldType.DATE,
        FieldType.EMAIL,
        FieldType.IMAGE,
    ):
        return raw if isinstance(raw, str) else str(raw)
    assert_never(field_type)


def suppress_blank(value: Any, field_type: FieldType) -> Any:
    """Return None for whitespace-only strings of text-like types."""
    if field_type in BLANK_SUPPRESSED_TYPES and isinstance(value, str) and value.strip() == "":
        return None
    return value
