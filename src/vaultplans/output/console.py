"""Rich Console factory and theme for vaultplans output.

Consoles render into a StringIO buffer so formatting stays a pure
``ServiceResult -> str`` function. In non-TTY environments (tests, pipes)
Rich disables color codes on its own.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

PLANS_THEME = Theme(
    {
        "plans.ok": "bold green",
        "plans.error": "bold red",
        "plans.warning": "bold yellow",
        "plans.op": "bold cyan",
        "plans.key": "dim",
        "plans.path": "dim",
        "plans.filename": "bold",
        "plans.state.inbox": "yellow",
        "plans.state.reviewed": "green",
        "plans.state.archive": "blue",
        "plans.priority.high": "bold red",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=PLANS_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_state(state: str) -> str:
    """Rich style name for a plan state (empty for unknown states)."""
    if state in ("inbox", "reviewed", "archive"):
        return f"plans.state.{state}"
    return ""
