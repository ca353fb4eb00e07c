"""Subcommand modules for hooksig.

Provides register_commands() which uses deferred imports to keep
``hooksig --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from hooksig.commands.list_cmd import list_cmd
    from hooksig.commands.parse_type import parse_type
    from hooksig.commands.resolve import resolve
    from hooksig.commands.show import show

    cli.add_command(show)
    cli.add_command(list_cmd)
    cli.add_command(resolve)
    cli.add_command(parse_type)
