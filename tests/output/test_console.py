"""Tests for the Rich console factory."""

from mosaicpods.output.console import create_console, get_output, style_for_field_type


class TestConsole:
    def test_renders_to_buffer(self) -> None:
        console = create_console(no_color=True)
        console.print("hello")
        assert get_output(console) == "hello\n"

    def test_field_styles(self) -> None:
        assert style_for_field_type("array") == "pods.field.container"
        assert style_for_field_type("image") == "pods.field.image"
        assert style_for_field_type("text") == "pods.field.leaf"
