"""FastMCP server setup.

Optional extra — guarded behind try/except ImportError.
Transport: stdio by default, SSE or streamable HTTP optional.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from vaultplans.services.lifecycle import LifecycleManager

mcp_available = False
_FastMCP: Any = None

try:
    from mcp.server.fastmcp import FastMCP as _FastMCP  # type: ignore[no-redef,import-not-found]

    mcp_available = True
except ImportError:
    pass

__all__ = ["create_server", "mcp_available"]


def create_server(
    manager: LifecycleManager,
    *,
    host: str = "127.0.0.1",
    port: int = 8000,
) -> Any:
    """Create a FastMCP server with every plan tool registered on *manager*.

    Raises RuntimeError if the mcp extra is not installed.
    """
    if not mcp_available or _FastMCP is None:
        msg = "MCP extra not installed. Install with: pip install vaultplans[mcp]"
        raise RuntimeError(msg)

    from vaultplans.mcp.tools import register_tools

    server = _FastMCP(
        "vaultplans",
        instructions="Manage technical plans in an Obsidian vault (Inbox -> Reviewed -> Archive).",
        host=host,
        port=port,
    )
    register_tools(server, manager)
    return server
