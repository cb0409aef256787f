"""Command: archive reviewed plans older than N days."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from vaultplans.commands._base import PlanCommand

if TYPE_CHECKING:
    from vaultplans.commands._context import AppContext


@click.command(
    cls=PlanCommand,
    examples="""\
  vaultplans sweep
  vaultplans sweep --days 14""",
)
@click.option(
    "--days",
    "days_old",
    type=click.IntRange(min=0),
    default=None,
    help="Age threshold in days (default: [sweep] days_old, 30).",
)
@click.pass_obj
def sweep(app: AppContext, days_old: int | None) -> None:
    """Archive reviewed plans whose review_date is older than --days."""
    if days_old is None:
        days_old = app.settings.sweep.days_old
    app.emit(app.manager.archive_old_reviewed(days_old))
