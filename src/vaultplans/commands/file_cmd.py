"""Command: write a document, routing plan-like content to the inbox."""

from __future__ import annotations

from typing import IO, TYPE_CHECKING

import click

from vaultplans.commands._base import PlanCommand

if TYPE_CHECKING:
    from vaultplans.commands._context import AppContext


@click.command(
    "file",
    cls=PlanCommand,
    examples="""\
  vaultplans file Notes/caching.md caching.md
  echo "groceries" | vaultplans file Personal/list.md -""",
)
@click.argument("path")
@click.argument("content_file", type=click.File("r", encoding="utf-8"), default="-")
@click.pass_obj
def file_cmd(app: AppContext, path: str, content_file: IO[str]) -> None:
    """Write CONTENT_FILE to PATH, or file it as a plan if it reads like one."""
    app.emit(app.manager.file_document(path, content_file.read()))
