"""Command: generate starter Jinja templates for pod types."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from mosaicpods.commands._base import PodsCommand

if TYPE_CHECKING:
    from mosaicpods.commands._context import AppContext


@click.command(
    cls=PodsCommand,
    examples="""\
  mosaicpods scaffold
  mosaicpods scaffold --type hero_banner --type card_grid
  mosaicpods scaffold --force""",
)
@click.option(
    "--type",
    "pod_types",
    multiple=True,
    help="Pod type to scaffold (repeatable). Defaults to all registered types.",
)
@click.option("--force", is_flag=True, help="Overwrite existing templates.")
@click.pass_obj
def scaffold(app: AppContext, pod_types: tuple[str, ...], force: bool) -> None:
    """Write templates/pods/<type>.html.j2 for registered pod types."""
    from mosaicpods.services.scaffold import ScaffoldService

    app.emit(ScaffoldService(app.site).generate(pod_types=list(pod_types) or None, force=force))
