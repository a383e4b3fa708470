"""Tests for loose form value coercion."""

from __future__ import annotations

import pytest

from mosaicpods.domain.coercion import coerce, is_blank, suppress_blank, to_bool, to_int
from mosaicpods.domain.types import FieldType


class TestToBool:
    @pytest.mark.parametrize("raw", ["1", "true", True])
    def test_truthy(self, raw: object) -> None:
        assert to_bool(raw) is True

    @pytest.mark.parametrize("raw", ["0", "false", "on", "TRUE", "", None, 1, False, "yes"])
    def test_everything_else_is_false(self, raw: object) -> None:
        assert to_bool(raw) is False


class TestToInt:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("42", 42),
            (" 7 ", 7),
            ("-3", -3),
            ("12px", 12),
            ("abc", 0),
            ("", 0),
            (5, 5),
            (2.9, 2),
            (float("nan"), 0),
            (True, 1),
        ],
    )
    def test_values(self, raw: object, expected: int) -> None:
        assert to_int(raw) == expected


class TestCoerce:
    def test_none_stays_none(self) -> None:
        for field_type in FieldType:
            if field_type is FieldType.BOOLEAN:
                continue
            assert coerce(None, field_type) is None

    def test_boolean_never_none(self) -> None:
        assert coerce(None, FieldType.BOOLEAN) is False
        assert coerce("1", FieldType.BOOLEAN) is True

    def test_number(self) -> None:
        assert coerce("12", FieldType.NUMBER) == 12
        assert coerce("not a number", FieldType.NUMBER) == 0

    def test_array(self) -> None:
        assert coerce([1, 2], FieldType.ARRAY) == [1, 2]
        assert coerce("x", FieldType.ARRAY) == []
        assert coerce({"0": {}}, FieldType.ARRAY) == []

    def test_object(self) -> None:
        assert coerce({"a": 1}, FieldType.OBJECT) == {"a": 1}
        assert coerce("x", FieldType.OBJECT) == {}

    @pytest.mark.parametrize("field_type", [FieldType.BOOLEAN, FieldType.NUMBER])
    @pytest.mark.parametrize("raw", [True, False, 12, "12px", "abc", "1", None])
    def test_coerce_is_idempotent(self, field_type: FieldType, raw: object) -> None:
        once = coerce(raw, field_type)
        assert coerce(once, field_type) == once

    def test_string_types(self) -> None:
        assert coerce("hello", FieldType.TEXT) == "hello"
        assert coerce(12, FieldType.EMAIL) == "12"
        assert coerce("", FieldType.DATE) == ""


class TestBlank:
    @pytest.mark.parametrize("value", [None, "", "   ", "\n\t", [], {}, ()])
    def test_blank(self, value: object) -> None:
        assert is_blank(value)

    @pytest.mark.parametrize("value", ["x", 0, False, [0], {"a": None}])
    def test_not_blank(self, value: object) -> None:
        assert not is_blank(value)

    def test_suppress_blank_text_like(self) -> None:
        assert suppress_blank("  ", FieldType.TEXT) is None
        assert suppress_blank("", FieldType.URL) is None
        assert suppress_blank(" x ", FieldType.SELECT) == " x "

    def test_suppress_blank_leaves_other_types(self) -> None:
        assert suppress_blank("  ", FieldType.DATE) == "  "
        assert suppress_blank(False, FieldType.BOOLEAN) is False
