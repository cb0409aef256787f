"""Command: mark an inbox plan as reviewed."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from vaultplans.commands._base import PlanCommand

if TYPE_CHECKING:
    from vaultplans.commands._context import AppContext


@click.command(
    cls=PlanCommand,
    examples="""\
  vaultplans review 2025-01-08_Search_API_Architecture.md
  vaultplans --json review 2025-01-08_Billing_Design.md""",
)
@click.argument("filename")
@click.pass_obj
def review(app: AppContext, filename: str) -> None:
    """Move FILENAME from Inbox to Reviewed and stamp review_date."""
    app.emit(app.manager.mark_reviewed(filename))
