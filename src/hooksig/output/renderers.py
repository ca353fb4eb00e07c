"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from hooksig.output.console import create_console, get_output, style_for_kind

if TYPE_CHECKING:
    from rich.console import Console

    from hooksig.services.result import ServiceResult

Renderer = Callable[..., None]


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"

    hooks = result.data.get("hooks")
    if isinstance(hooks, list):
        return "\n".join(str(h.get("name", "")) for h in hooks if isinstance(h, dict))
    if result.op == "parse_type":
        return str(result.data.get("type", ""))

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="hs.ok")
    op = Text(f"  {result.op}", style="hs.op")
    console.print(label, op, sep="")


def _field(console: Console, key: str, value: Any, style: str = "") -> None:
    k = Text(f"  {key}: ", style="hs.key")
    console.print(k, Text(str(value), style=style), sep="")


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="hs.error")
    op = Text(f"  {result.op}", style="hs.op")
    console.print(label, op, Text(f": {msg}"), sep="")

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Renderers ─────────────────────────────────────────────────────────


def _render_signature(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render show_hook as a header plus a positional parameter table."""
    d = result.data
    _status_line(console, result)
    kind = str(d.get("kind", ""))
    _field(console, "name", d.get("name", ""), "hs.name")
    _field(console, "kind", kind, style_for_kind(kind))
    _field(console, "returns", d.get("returns", ""), "hs.type")

    params = d.get("parameters", [])
    if not params:
        console.print(Text("  (no parameters)", style="dim"))
        return
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Type", style="hs.type")
    for index, type_text in enumerate(params):
        table.add_row(str(index), str(type_text))
    console.print(table)


def _render_hook_table(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render list_hooks as a table."""
    hooks = result.data.get("hooks", [])
    if not hooks:
        console.print(Text("No hooks found.", style="dim"))
        return

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Name", style="hs.name", no_wrap=True)
    table.add_column("Kind")
    table.add_column("Args", justify="right")
    for hook in hooks:
        kind = str(hook.get("kind", ""))
        table.add_row(
            str(hook.get("name", "")),
            Text(kind, style=style_for_kind(kind)),
            str(hook.get("arity", "")),
        )
    console.print(table)
    console.print(Text(f"  {result.data.get('count', len(hooks))} hooks", style="dim"))


def _render_contract(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render resolve_hook as the registration call's parameter list."""
    d = result.data
    _status_line(console, result)
    _field(console, "hook", d.get("hook", ""), "hs.name")
    _field(console, "function", d.get("function", ""))

    params = d.get("parameters", [])
    if not params:
        console.print(Text("  no contract: any arguments accepted", style="dim"))
        return
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Parameter")
    table.add_column("Type", style="hs.type")
    table.add_column("Optional", justify="center")
    for param in params:
        table.add_row(
            str(param.get("name", "")),
            str(param.get("type", "")),
            "yes" if param.get("optional") else "",
        )
    console.print(table)


def _render_parsed_type(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    if verbose:
        _field(console, "input", d.get("input", ""))
    _field(console, "type", d.get("type", ""), "hs.type")


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, _json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Renderer] = {
    "show_hook": _render_signature,
    "list_hooks": _render_hook_table,
    "resolve_hook": _render_contract,
    "parse_type": _render_parsed_type,
}
