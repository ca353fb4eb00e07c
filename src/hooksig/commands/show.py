"""Command: show one hook's signature."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from hooksig.commands._base import HookCommand

if TYPE_CHECKING:
    from hooksig.commands._context import AppContext


@click.command(
    cls=HookCommand,
    examples="""\
  hooksig show the_content
  hooksig show init
  hooksig --json show wp_insert_post_data""",
)
@click.argument("name")
@click.pass_obj
def show(app: AppContext, name: str) -> None:
    """Show the kind and parameter types of hook NAME."""
    from hooksig.services.catalog import CatalogService

    app.emit(CatalogService(app.session).show(name))
