"""Subcommand modules for mosaicpods.

Provides register_commands() which uses deferred imports to keep
``mosaicpods --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups and standalone commands on the root CLI group."""
    # --- Groups ---
    from mosaicpods.commands.image import image
    from mosaicpods.commands.schema import schema

    cli.add_command(schema)
    cli.add_command(image)

    # --- Standalone commands ---
    from mosaicpods.commands.build import build
    from mosaicpods.commands.preview import preview
    from mosaicpods.commands.scaffold import scaffold

    cli.add_command(build)
    cli.add_command(preview)
    cli.add_command(scaffold)
