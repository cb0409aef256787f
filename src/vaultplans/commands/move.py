"""Command: advance a plan to a later lifecycle folder."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from vaultplans.commands._base import PlanCommand

if TYPE_CHECKING:
    from vaultplans.commands._context import AppContext


@click.command(
    cls=PlanCommand,
    examples="""\
  vaultplans move 2025-01-08_Billing_Design.md --to reviewed
  vaultplans move 2025-01-08_Billing_Design.md --to archive""",
)
@click.argument("filename")
@click.option(
    "--to",
    "target",
    required=True,
    type=click.Choice(["reviewed", "archive"], case_sensitive=False),
    help="Destination folder.",
)
@click.pass_obj
def move(app: AppContext, filename: str, target: str) -> None:
    """Move FILENAME forward in the lifecycle (never backward)."""
    app.emit(app.manager.move_plan(filename, target))
