"""Command: render a pod submission through its template."""

from __future__ import annotations

from typing import IO, TYPE_CHECKING

import click

from mosaicpods.commands._base import PodsCommand, read_json_object

if TYPE_CHECKING:
    from mosaicpods.commands._context import AppContext


@click.command(
    cls=PodsCommand,
    examples="""\
  mosaicpods preview hero_banner submission.json
  mosaicpods -v preview hero_banner submission.json
  mosaicpods -q preview card_grid submission.json > card.html""",
)
@click.argument("pod_type")
@click.argument("submission_file", type=click.File("r", encoding="utf-8"))
@click.pass_obj
def preview(app: AppContext, pod_type: str, submission_file: IO[str]) -> None:
    """Render SUBMISSION_FILE as POD_TYPE HTML."""
    from mosaicpods.domain.definition import PodSubmission
    from mosaicpods.services.definition import DefinitionService

    submission = PodSubmission.from_payload(read_json_object(submission_file, "SUBMISSION_FILE"))
    app.emit(DefinitionService(app.site).preview(pod_type, submission))
