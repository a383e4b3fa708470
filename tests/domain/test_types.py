"""Tests for the closed FieldType enum."""

from __future__ import annotations

import pytest

from mosaicpods.domain.types import BLANK_SUPPRESSED_TYPES, FieldType


class TestFieldTypeParse:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("text", FieldType.TEXT),
            ("rich_text", FieldType.RICH_TEXT),
            ("IMAGE", FieldType.IMAGE),
            ("  select ", FieldType.SELECT),
            ("integer", FieldType.NUMBER),
            ("Integer", FieldType.NUMBER),
            (FieldType.ARRAY, FieldType.ARRAY),
        ],
    )
    def test_recognised(self, raw: object, expected: FieldType) -> None:
        assert FieldType.parse(raw) is expected

    @pytest.mark.parametrize("raw", ["textarea", "", None, 3, ["text"]])
    def test_unrecognised(self, raw: object) -> None:
        assert FieldType.parse(raw) is None


class TestFieldTypeProperties:
    def test_containers(self) -> None:
        assert FieldType.ARRAY.is_container
        assert FieldType.OBJECT.is_container
        assert not FieldType.IMAGE.is_container

    def test_string_value(self) -> None:
        assert FieldType.RICH_TEXT == "rich_text"
        assert str(FieldType.URL) == "url"

    def test_blank_suppressed_set(self) -> None:
        assert BLANK_SUPPRESSED_TYPES == {
            FieldType.TEXT,
            FieldType.SELECT,
            FieldType.RICH_TEXT,
            FieldType.URL,
        }
