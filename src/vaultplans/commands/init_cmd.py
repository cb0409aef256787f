"""Command: create the managed plan folders in the vault."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from vaultplans.commands._base import PlanCommand

if TYPE_CHECKING:
    from vaultplans.commands._context import AppContext


@click.command(
    "init",
    cls=PlanCommand,
    examples="""\
  vaultplans init
  vaultplans --api-url https://127.0.0.1:27124 --api-key $KEY init""",
)
@click.pass_obj
def init_cmd(app: AppContext) -> None:
    """Create the Inbox, Reviewed and Archive folders if missing."""
    app.emit(app.manager.initialize_structure())
