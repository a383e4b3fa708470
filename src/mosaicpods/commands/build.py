"""Command: build a pod definition from a form submission."""

from __future__ import annotations

from typing import IO, TYPE_CHECKING

import click

from mosaicpods.commands._base import PodsCommand, read_json_object

if TYPE_CHECKING:
    from mosaicpods.commands._context import AppContext


@click.command(
    cls=PodsCommand,
    examples="""\
  mosaicpods build hero_banner submission.json
  mosaicpods build hero_banner submission.json --existing current.json
  cat submission.json | mosaicpods --json build card_grid -""",
)
@click.argument("pod_type")
@click.argument("submission_file", type=click.File("r", encoding="utf-8"))
@click.option(
    "--existing",
    type=click.File("r", encoding="utf-8"),
    default=None,
    help="Stored definition JSON to update instead of creating.",
)
@click.pass_obj
def build(
    app: AppContext,
    pod_type: str,
    submission_file: IO[str],
    existing: IO[str] | None,
) -> None:
    """Build the stored definition for POD_TYPE from SUBMISSION_FILE."""
    from mosaicpods.domain.definition import PodSubmission
    from mosaicpods.services.definition import DefinitionService

    submission = PodSubmission.from_payload(read_json_object(submission_file, "SUBMISSION_FILE"))
    current = read_json_object(existing, "--existing") if existing is not None else None
    app.emit(DefinitionService(app.site).build(pod_type, submission, existing=current))
