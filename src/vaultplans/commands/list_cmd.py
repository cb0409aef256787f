"""Command: list plans."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from vaultplans.commands._base import PlanCommand

if TYPE_CHECKING:
    from vaultplans.commands._context import AppContext


@click.command(
    "list",
    cls=PlanCommand,
    examples="""\
  vaultplans list
  vaultplans list --folder inbox
  vaultplans -q list --folder reviewed""",
)
@click.option(
    "--folder",
    type=click.Choice(["inbox", "reviewed", "archive"], case_sensitive=False),
    default=None,
    help="Only list one folder (default: all three).",
)
@click.pass_obj
def list_cmd(app: AppContext, folder: str | None) -> None:
    """List plans with their metadata."""
    app.emit(app.manager.list_technical_plans(folder))
