"""serve — start the MCP server (requires the vaultplans[mcp] extra)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from vaultplans.commands._base import PlanCommand

if TYPE_CHECKING:
    from vaultplans.commands._context import AppContext


@click.command(
    cls=PlanCommand,
    examples="""\
  # stdio transport (default), for MCP clients that spawn the server
  vaultplans serve

  # Streamable HTTP on a custom address
  vaultplans serve --transport streamable-http --host 0.0.0.0 --port 9000""",
)
@click.option(
    "--transport",
    default=None,
    type=click.Choice(["stdio", "sse", "streamable-http"]),
    help="MCP transport protocol (default: [mcp] transport, stdio).",
)
@click.option("--host", default="127.0.0.1", help="Bind address (HTTP transports only).")
@click.option("--port", default=8000, type=int, help="Listen port (HTTP transports only).")
@click.pass_obj
def serve(app: AppContext, transport: str | None, host: str, port: int) -> None:
    """Expose the plan lifecycle as MCP tools."""
    from vaultplans.mcp.server import create_server, mcp_available

    if not mcp_available:
        click.echo("MCP not installed. Install with: pip install vaultplans[mcp]", err=True)
        raise SystemExit(1)

    server = create_server(app.manager, host=host, port=port)
    server.run(transport=transport or app.settings.mcp.transport)
