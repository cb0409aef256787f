"""Command: check connectivity to the Obsidian REST API."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from vaultplans.commands._base import PlanCommand

if TYPE_CHECKING:
    from vaultplans.commands._context import AppContext


@click.command(cls=PlanCommand, examples="  vaultplans ping")
@click.pass_obj
def ping(app: AppContext) -> None:
    """Report Obsidian and REST API plugin versions."""
    app.emit(app.manager.status())
