"""Command: show one plan's metadata."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from vaultplans.commands._base import PlanCommand

if TYPE_CHECKING:
    from vaultplans.commands._context import AppContext


@click.command(
    cls=PlanCommand,
    examples="""\
  vaultplans show 2025-01-08_Search_API_Architecture.md
  vaultplans --json show 2025-01-08_Search_API_Architecture.md""",
)
@click.argument("filename")
@click.pass_obj
def show(app: AppContext, filename: str) -> None:
    """Show the frontmatter of FILENAME (searched Inbox, Reviewed, Archive)."""
    app.emit(app.manager.get_plan_metadata(filename))
