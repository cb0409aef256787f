"""MCP tool definitions — plan lifecycle tools plus a connectivity check.

Each tool has a ``<name>_impl`` function testable without the mcp package.
``register_tools()`` wraps them with FastMCP decorators.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Literal

if TYPE_CHECKING:
    from vaultplans.services.lifecycle import LifecycleManager
    from vaultplans.services.result import ServiceResult

FolderName = Literal["inbox", "reviewed", "archive"]
SourceName = Literal["Claude", "Claude Code", "Other LLM"]
TypeName = Literal["Architecture", "Implementation", "Research", "Design"]
PriorityName = Literal["High", "Medium", "Low"]


def _to_mcp_response(result: ServiceResult) -> dict[str, Any]:
    """Convert a ServiceResult to an MCP-friendly dict."""
    response: dict[str, Any] = {
        "ok": result.ok,
        "op": result.op,
        "data": result.data,
    }
    if result.warnings:
        response["warnings"] = result.warnings
    if result.error is not None:
        response["error"] = {
            "code": result.error.code,
            "message": result.error.message,
        }
    return response


# ---------------------------------------------------------------------------
# Vault
# ---------------------------------------------------------------------------


def ping_impl(manager: LifecycleManager) -> dict[str, Any]:
    return _to_mcp_response(manager.status())


def file_document_impl(manager: LifecycleManager, path: str, content: str) -> dict[str, Any]:
    return _to_mcp_response(manager.file_document(path, content))


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------


def initialize_plan_structure_impl(manager: LifecycleManager) -> dict[str, Any]:
    return _to_mcp_response(manager.initialize_structure())


def create_technical_plan_impl(
    manager: LifecycleManager,
    content: str,
    project: str,
    *,
    plan_type: str | None = None,
    priority: str | None = None,
    source: str | None = None,
    next_action: str | None = None,
) -> dict[str, Any]:
    """Create a plan in the inbox; unset fields fall back to the defaults."""
    metadata = {
        "source": source,
        "type": plan_type,
        "project": project,
        "priority": priority,
        "next_action": next_action,
    }
    return _to_mcp_response(manager.create_technical_plan(content, metadata))


def mark_plan_reviewed_impl(manager: LifecycleManager, filename: str) -> dict[str, Any]:
    return _to_mcp_response(manager.mark_reviewed(filename))


def archive_plan_impl(manager: LifecycleManager, filename: str) -> dict[str, Any]:
    return _to_mcp_response(manager.archive_plan(filename))


def move_plan_impl(manager: LifecycleManager, filename: str, target: str) -> dict[str, Any]:
    return _to_mcp_response(manager.move_plan(filename, target))


def archive_old_reviewed_impl(manager: LifecycleManager, days_old: int = 30) -> dict[str, Any]:
    return _to_mcp_response(manager.archive_old_reviewed(days_old))


# ---------------------------------------------------------------------------
# Query
# ---------------------------------------------------------------------------


def list_technical_plans_impl(
    manager: LifecycleManager,
    folder: str | None = None,
) -> dict[str, Any]:
    return _to_mcp_response(manager.list_technical_plans(folder))


def get_plan_metadata_impl(manager: LifecycleManager, filename: str) -> dict[str, Any]:
    return _to_mcp_response(manager.get_plan_metadata(filename))


# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------


def register_tools(server: Any, manager: LifecycleManager) -> None:
    """Register all plan tools on the FastMCP server."""

    @server.tool()  # type: ignore[untyped-decorator]
    def ping() -> dict[str, Any]:
        """Test connectivity to Obsidian."""
        return ping_impl(manager)

    @server.tool()  # type: ignore[untyped-decorator]
    def initialize_plan_structure() -> dict[str, Any]:
        """Create the Technical Plans Inbox/Reviewed/Archive folders if missing."""
        return initialize_plan_structure_impl(manager)

    @server.tool()  # type: ignore[untyped-decorator]
    def create_technical_plan(
        content: str,
        project: str,
        type: TypeName | None = None,
        priority: PriorityName | None = None,
        source: SourceName | None = None,
        next_action: str | None = None,
    ) -> dict[str, Any]:
        """Save a technical plan to Technical Plans/Inbox with frontmatter metadata."""
        return create_technical_plan_impl(
            manager,
            content,
            project,
            plan_type=type,
            priority=priority,
            source=source,
            next_action=next_action,
        )

    @server.tool()  # type: ignore[untyped-decorator]
    def mark_plan_reviewed(filename: str) -> dict[str, Any]:
        """Move a plan from Inbox to Reviewed and record today's review date."""
        return mark_plan_reviewed_impl(manager, filename)

    @server.tool()  # type: ignore[untyped-decorator]
    def archive_plan(filename: str) -> dict[str, Any]:
        """Move a plan from Inbox or Reviewed to Archive."""
        return archive_plan_impl(manager, filename)

    @server.tool()  # type: ignore[untyped-decorator]
    def move_plan(filename: str, target: Literal["reviewed", "archive"]) -> dict[str, Any]:
        """Advance a plan to a later folder; backward moves are rejected."""
        return move_plan_impl(manager, filename, target)

    @server.tool()  # type: ignore[untyped-decorator]
    def list_technical_plans(folder: FolderName | None = None) -> dict[str, Any]:
        """List technical plans, optionally only one folder."""
        return list_technical_plans_impl(manager, folder)

    @server.tool()  # type: ignore[untyped-decorator]
    def get_plan_metadata(filename: str) -> dict[str, Any]:
        """Read a plan's frontmatter from whichever folder holds it."""
        return get_plan_metadata_impl(manager, filename)

    @server.tool()  # type: ignore[untyped-decorator]
    def archive_old_reviewed(days_old: int = 30) -> dict[str, Any]:
        """Archive reviewed plans whose review date is older than days_old days."""
        return archive_old_reviewed_impl(manager, days_old)

    @server.tool()  # type: ignore[untyped-decorator]
    def file_document(path: str, content: str) -> dict[str, Any]:
        """Write a vault file; plan-like content is filed into the plan Inbox instead."""
        return file_document_impl(manager, path, content)
