"""Command: archive a plan."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from vaultplans.commands._base import PlanCommand

if TYPE_CHECKING:
    from vaultplans.commands._context import AppContext


@click.command(
    cls=PlanCommand,
    examples="""\
  vaultplans archive 2025-01-08_Search_API_Architecture.md""",
)
@click.argument("filename")
@click.pass_obj
def archive(app: AppContext, filename: str) -> None:
    """Move FILENAME from Inbox or Reviewed into Archive, unchanged."""
    app.emit(app.manager.archive_plan(filename))
