"""Command: resolve the contract of an add_action/add_filter call."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from hooksig.commands._base import HookCommand

if TYPE_CHECKING:
    from hooksig.commands._context import AppContext


@click.command(
    cls=HookCommand,
    examples="""\
  hooksig resolve the_title
  hooksig resolve the_title --accepted-args 2
  hooksig resolve save_post --action --accepted-args 3""",
)
@click.argument("name")
@click.option("--action", is_flag=True, help="Resolve as add_action (default: add_filter).")
@click.option(
    "--accepted-args",
    type=click.IntRange(min=0),
    default=None,
    help="Accepted argument count passed to the registration call.",
)
@click.pass_obj
def resolve(app: AppContext, name: str, action: bool, accepted_args: int | None) -> None:
    """Show the parameters a registration call for hook NAME would be checked against."""
    from hooksig.services.catalog import CatalogService

    app.emit(
        CatalogService(app.session).resolve(name, action=action, accepted_args=accepted_args)
    )
