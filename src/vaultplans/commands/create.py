"""Command: file a new technical plan into the inbox."""

from __future__ import annotations

from typing import IO, TYPE_CHECKING

import click

from vaultplans.commands._base import PlanCommand
from vaultplans.domain.metadata import PlanPriority, PlanSource, PlanType

if TYPE_CHECKING:
    from vaultplans.commands._context import AppContext


@click.command(
    cls=PlanCommand,
    examples="""\
  vaultplans create plan.md --project "Search API" --type Architecture
  cat notes.md | vaultplans create - --project Billing --priority High
  vaultplans create plan.md --project Infra --source "Claude Code" --next-action Spike""",
)
@click.argument("body_file", type=click.File("r", encoding="utf-8"), default="-")
@click.option("--project", required=True, help="Project the plan belongs to.")
@click.option(
    "--type",
    "plan_type",
    type=click.Choice([t.value for t in PlanType]),
    default=PlanType.DESIGN.value,
    show_default=True,
)
@click.option(
    "--priority",
    type=click.Choice([p.value for p in PlanPriority]),
    default=PlanPriority.MEDIUM.value,
    show_default=True,
)
@click.option(
    "--source",
    type=click.Choice([s.value for s in PlanSource]),
    default=PlanSource.OTHER_LLM.value,
    show_default=True,
)
@click.option("--next-action", default=None, help="Optional follow-up note.")
@click.pass_obj
def create(
    app: AppContext,
    body_file: IO[str],
    project: str,
    plan_type: str,
    priority: str,
    source: str,
    next_action: str | None,
) -> None:
    """Create a plan from BODY_FILE (default: stdin) in the inbox."""
    body = body_file.read()
    metadata = {
        "source": source,
        "type": plan_type,
        "project": project,
        "priority": priority,
        "next_action": next_action,
    }
    app.emit(app.manager.create_technical_plan(body, metadata))
