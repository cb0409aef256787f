"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). Renderers are
dispatched by ``result.op`` in :func:`render_result`; unknown ops fall
through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from vaultplans.output.console import create_console, get_output, style_for_state

if TYPE_CHECKING:
    from rich.console import Console

    from vaultplans.services.result import ServiceResult


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
    """Minimal output for ``--quiet``: paths for listings, else a status line."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} - {msg}"

    items = result.data.get("items")
    if isinstance(items, list):
        return "\n".join(str(item.get("path", "")) for item in items if isinstance(item, dict))
    if result.data.get("path"):
        return str(result.data["path"])
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="plans.ok")
    op = Text(f"  {result.op}", style="plans.op")
    console.print(label, op, sep="")


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="plans.key")
    if key in ("path", "source"):
        v = Text(str(value), style="plans.path")
    elif key == "filename":
        v = Text(str(value), style="plans.filename")
    elif key == "state":
        v = Text(str(value), style=style_for_state(str(value)))
    elif isinstance(value, (dict, list)):
        v = Text(json.dumps(value, separators=(",", ":")))
    else:
        v = Text(str(value))
    console.print(k, v, sep="")


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="plans.error")
    op = Text(f"  {result.op}", style="plans.op")
    console.print(label, op, Text(" - "), Text(msg), sep="")

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Mutation renderers ────────────────────────────────────────────────


def _render_mutation(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render create/review/archive/move results."""
    _status_line(console, result)
    for key in ("filename", "path", "source", "state", "review_date"):
        if result.data.get(key) is not None:
            _field(console, key, result.data[key])
    if verbose and result.data.get("metadata"):
        _field(console, "metadata", result.data["metadata"])


def _render_init(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for marker in result.data.get("created", []):
        console.print(Text("  created ", style="plans.ok"), Text(marker), sep="")
    for folder in result.data.get("existing", []):
        console.print(Text("  exists  ", style="plans.key"), Text(folder), sep="")


def _render_sweep(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _field(console, "cutoff", result.data.get("cutoff", ""))
    _field(console, "archived", result.data.get("count", 0))
    for filename in result.data.get("archived", []):
        console.print(Text(f"    {filename}"))


# ── Query renderers ───────────────────────────────────────────────────


def _render_plan_table(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render a plan listing as a table."""
    items = result.data.get("items", [])
    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("State")
    table.add_column("Filename", style="plans.filename")
    table.add_column("Project")
    table.add_column("Type")
    table.add_column("Priority")
    table.add_column("Reviewed")
    if verbose:
        table.add_column("Path", style="plans.path")

    for item in items:
        meta = item.get("metadata") or {}
        state = str(item.get("state", ""))
        priority = meta.get("priority", "")
        row = [
            Text(state, style=style_for_state(state)),
            Text(item.get("filename", "")),
            Text(meta.get("project", "")),
            Text(meta.get("type", "")),
            Text(priority, style="plans.priority.high" if priority == "High" else ""),
            Text(meta.get("review_date", "")),
        ]
        if verbose:
            row.append(Text(item.get("path", "")))
        table.add_row(*row)

    console.print(table)
    console.print(f"\n{result.data.get('count', len(items))} plans")


def _render_metadata(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render a single plan's metadata as a panel."""
    d = result.data
    metadata = d.get("metadata")
    if metadata is None:
        console.print(Text(f"No plan named {d.get('filename', '?')}", style="plans.warning"))
        return

    lines = [f"{key}: {value}" for key, value in metadata.items()]
    if verbose and d.get("path"):
        lines.append(f"path: {d['path']}")
    state = str(d.get("state") or "")
    console.print(
        Panel(
            Text("\n".join(lines) or "(no metadata)"),
            title=f"{d.get('filename', '?')} ({state})",
            border_style=style_for_state(state) or "dim",
            expand=False,
        )
    )


def _render_ping(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    console.print(
        Text(
            f"  Connected to Obsidian v{d.get('obsidian')} "
            f"with {d.get('plugin')} v{d.get('plugin_version')}"
        )
    )


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "ping": _render_ping,
    "initialize_structure": _render_init,
    "create_technical_plan": _render_mutation,
    "file_document": _render_mutation,
    "mark_reviewed": _render_mutation,
    "archive_plan": _render_mutation,
    "move_plan": _render_mutation,
    "list_technical_plans": _render_plan_table,
    "get_plan_metadata": _render_metadata,
    "archive_old_reviewed": _render_sweep,
}
