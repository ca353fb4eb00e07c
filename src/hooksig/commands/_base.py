"""Click command classes that carry usage examples.

``--examples`` is eager, so ``hooksig show --examples`` prints and exits
before Click complains about the missing NAME argument.
"""

from __future__ import annotations

from typing import Any

import click


def _print_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    if not value or ctx.resilient_parsing:
        return
    click.secho("Examples:", bold=True)
    click.echo(getattr(ctx.command, "examples", "") or "")
    ctx.exit(0)


class _ExamplesMixin:
    """Adds an ``--examples`` flag to commands built with ``examples=...``."""

    examples: str | None

    def get_params(self, ctx: click.Context) -> list[click.Parameter]:
        params: list[click.Parameter] = super().get_params(ctx)  # type: ignore[misc]
        if self.examples:
            flag = click.Option(
                ["--examples"],
                is_flag=True,
                expose_value=False,
                is_eager=True,
                callback=_print_examples,
                help="Show usage examples and exit.",
            )
            params.insert(len(params) - 1, flag)
        return params


class HookCommand(_ExamplesMixin, click.Command):
    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        self.examples = examples
        super().__init__(*args, **kwargs)


class HookGroup(_ExamplesMixin, click.Group):
    """Group whose ``@group.command`` subcommands are :class:`HookCommand`."""

    command_class = HookCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        self.examples = examples
        super().__init__(*args, **kwargs)
