"""Command: list known hooks."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from hooksig.commands._base import HookCommand

if TYPE_CHECKING:
    from hooksig.commands._context import AppContext


@click.command(
    "list",
    cls=HookCommand,
    examples="""\
  hooksig list
  hooksig list --kind action
  hooksig list --prefix woocommerce_
  hooksig -q list --kind filter""",
)
@click.option(
    "--kind",
    type=click.Choice(["action", "filter"]),
    default=None,
    help="Only hooks of this kind (reference kinds included).",
)
@click.option("--prefix", default=None, help="Only hooks whose name starts with PREFIX.")
@click.pass_obj
def list_cmd(app: AppContext, kind: str | None, prefix: str | None) -> None:
    """List hooks from the corpus."""
    from hooksig.services.catalog import CatalogService

    app.emit(CatalogService(app.session).list_hooks(kind=kind, prefix=prefix))
