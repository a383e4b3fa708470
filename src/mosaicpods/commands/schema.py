"""Command group: pod definition registry inspection."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from mosaicpods.commands._base import PodsGroup
from mosaicpods.services.schema import SchemaService

if TYPE_CHECKING:
    from mosaicpods.commands._context import AppContext

_SCHEMA_EXAMPLES = """\
  mosaicpods schema validate
  mosaicpods schema list
  mosaicpods schema list --category Heroes
  mosaicpods schema show hero_banner
  mosaicpods --json schema show hero_banner"""


@click.group(cls=PodsGroup, examples=_SCHEMA_EXAMPLES)
@click.pass_obj
def schema(app: AppContext) -> None:
    """Inspect and validate pod definitions."""


@schema.command(
    examples="""\
  mosaicpods schema validate
  mosaicpods -c site/mosaicpods.toml schema validate"""
)
@click.pass_obj
def validate(app: AppContext) -> None:
    """Check every pod definition and report all problems."""
    app.emit(SchemaService(app.site).validate())


@schema.command(
    name="list",
    examples="""\
  mosaicpods schema list
  mosaicpods schema list --category Content
  mosaicpods -q schema list""",
)
@click.option("--category", default=None, help="Only show pod types in this category.")
@click.pass_obj
def list_cmd(app: AppContext, category: str | None) -> None:
    """List registered pod types."""
    app.emit(SchemaService(app.site).list_types(category=category))


@schema.command(
    examples="""\
  mosaicpods schema show hero_banner
  mosaicpods --json schema show card_grid"""
)
@click.argument("pod_type")
@click.pass_obj
def show(app: AppContext, pod_type: str) -> None:
    """Describe a pod type and its form fields."""
    app.emit(SchemaService(app.site).show_type(pod_type))
