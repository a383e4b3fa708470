"""Command group: image references inside stored definitions."""

from __future__ import annotations

from typing import IO, TYPE_CHECKING

import click

from mosaicpods.commands._base import PodsGroup, read_json_object
from mosaicpods.services.definition import DefinitionService

if TYPE_CHECKING:
    from mosaicpods.commands._context import AppContext

_IMAGE_EXAMPLES = """\
  mosaicpods image url definition.json hero_image
  mosaicpods image url definition.json hero_image --variant mobile
  mosaicpods image keys definition.json"""


@click.group(cls=PodsGroup, examples=_IMAGE_EXAMPLES)
@click.pass_obj
def image(app: AppContext) -> None:
    """Resolve image references in pod definitions."""


@image.command(
    examples="""\
  mosaicpods image url definition.json hero_image
  mosaicpods -q image url definition.json hero_image --variant original"""
)
@click.argument("definition_file", type=click.File("r", encoding="utf-8"))
@click.argument("field")
@click.option(
    "--variant",
    default=None,
    help="Image variant (desktop, mobile, original); defaults to [images] default_variant.",
)
@click.pass_obj
def url(app: AppContext, definition_file: IO[str], field: str, variant: str | None) -> None:
    """Resolve the image stored in FIELD to a URL."""
    definition = read_json_object(definition_file, "DEFINITION_FILE")
    app.emit(DefinitionService(app.site).resolve_image(definition, field, variant=variant))


@image.command(
    examples="""\
  mosaicpods image keys definition.json
  mosaicpods --json image keys definition.json"""
)
@click.argument("definition_file", type=click.File("r", encoding="utf-8"))
@click.pass_obj
def keys(app: AppContext, definition_file: IO[str]) -> None:
    """List every attachment key referenced by a definition."""
    definition = read_json_object(definition_file, "DEFINITION_FILE")
    app.emit(DefinitionService(app.site).attachment_keys(definition))
