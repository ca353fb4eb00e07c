"""Rich Console factory and theme for hooksig output.

Consoles render to a StringIO buffer so formatting stays a pure
``ServiceResult -> str`` function. Rich drops color codes when the
output is not a terminal (tests, pipes).
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

HOOKSIG_THEME = Theme(
    {
        "hs.ok": "bold green",
        "hs.error": "bold red",
        "hs.warning": "bold yellow",
        "hs.op": "bold cyan",
        "hs.key": "dim",
        "hs.name": "bold blue",
        "hs.type": "magenta",
        "hs.kind.action": "green",
        "hs.kind.filter": "yellow",
    }
)

_KIND_STYLES: dict[str, str] = {
    "action": "hs.kind.action",
    "action_reference": "hs.kind.action",
    "filter": "hs.kind.filter",
    "filter_reference": "hs.kind.filter",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=HOOKSIG_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_kind(kind: str) -> str:
    """Return the Rich style name for a hook kind."""
    return _KIND_STYLES.get(kind, "")
