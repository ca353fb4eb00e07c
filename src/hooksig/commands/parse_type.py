"""Command: parse a type expression."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from hooksig.commands._base import HookCommand

if TYPE_CHECKING:
    from hooksig.commands._context import AppContext


@click.command(
    "parse-type",
    cls=HookCommand,
    examples="""\
  hooksig parse-type 'int|string'
  hooksig parse-type '?WP_Post'
  hooksig parse-type 'array{ID: int, title?: string}'""",
)
@click.argument("expression")
@click.pass_obj
def parse_type(app: AppContext, expression: str) -> None:
    """Parse EXPRESSION and print its normalized form."""
    from hooksig.services.catalog import CatalogService

    app.emit(CatalogService(app.session).parse_type(expression))
