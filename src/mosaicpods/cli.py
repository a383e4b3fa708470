"""Entry point for the ``mosaicpods`` command.

The root group only turns global flags into :class:`PodSettings` and an
:class:`AppContext`; every subcommand is attached by
:func:`mosaicpods.commands.register_commands`.
"""

from __future__ import annotations

from pathlib import Path

import click

from mosaicpods import __version__
from mosaicpods.commands import register_commands
from mosaicpods.commands._base import PodsGroup
from mosaicpods.commands._context import AppContext
from mosaicpods.config.settings import PodSettings


@click.group(
    cls=PodsGroup,
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
    examples="""\
  mosaicpods schema list
  mosaicpods -C ../shop build hero_banner submission.json
  mosaicpods --json -c deploy/mosaicpods.toml schema validate""",
)
@click.version_option(version=__version__, prog_name="mosaicpods")
@click.option("--json", "json_output", is_flag=True, help="Print results as JSON.")
@click.option("-q", "--quiet", is_flag=True, help="Print only keys, URLs or HTML.")
@click.option("-v", "--verbose", is_flag=True, help="Show debug logs and error detail.")
@click.option("--log-json", is_flag=True, help="Write logs to stderr as JSON lines.")
@click.option("-c", "--config", "config_path", default=None, help="Path to mosaicpods.toml.")
@click.option(
    "-C",
    "--project",
    "project_dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Project directory (default: discovered from the working directory).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    project_dir: Path | None,
) -> None:
    """mosaicpods: build, preview and scaffold schema-driven page pods."""
    ctx.obj = AppContext(
        PodSettings.from_cli(
            config_path=config_path,
            project_root=project_dir.resolve() if project_dir else None,
            json_output=json_output,
            quiet=quiet,
            verbose=verbose,
            log_json=log_json,
        )
    )
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
