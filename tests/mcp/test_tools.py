"""Tests for MCP tool _impl functions (no mcp package needed)."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from vaultplans.mcp.tools import (
    archive_old_reviewed_impl,
    archive_plan_impl,
    create_technical_plan_impl,
    file_document_impl,
    get_plan_metadata_impl,
    initialize_plan_structure_impl,
    list_technical_plans_impl,
    mark_plan_reviewed_impl,
    move_plan_impl,
    ping_impl,
    register_tools,
)
from vaultplans.services.lifecycle import LifecycleManager

INBOX = "Technical Plans/Inbox"


class _RecordingServer:
    """Stands in for FastMCP: ``tool()`` records the decorated functions."""

    def __init__(self) -> None:
        self.tools: dict[str, Callable[..., Any]] = {}

    def tool(self) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        def decorator(fn: Callable[..., Any]) -> Callable[..., Any]:
            self.tools[fn.__name__] = fn
            return fn

        return decorator


class TestImplFunctions:
    def test_ping(self, manager: LifecycleManager) -> None:
        response = ping_impl(manager)
        assert response["ok"] is True
        assert response["data"]["obsidian"] == "1.5.3"
        assert "error" not in response

    def test_initialize(self, manager: LifecycleManager) -> None:
        response = initialize_plan_structure_impl(manager)
        assert response["op"] == "initialize_structure"
        assert len(response["data"]["created"]) == 3

    def test_create_defaults(self, manager: LifecycleManager) -> None:
        response = create_technical_plan_impl(manager, "# Body", "Test")
        assert response["ok"] is True
        assert response["data"]["filename"] == "2025-01-08_Test_Design.md"
        assert response["data"]["metadata"]["priority"] == "Medium"

    def test_create_with_fields(self, manager: LifecycleManager, gateway: Any) -> None:
        response = create_technical_plan_impl(
            manager,
            "# Plan\nDetails",
            "Test",
            plan_type="Architecture",
            priority="High",
            source="Claude Code",
        )
        path = response["data"]["path"]
        assert gateway.files[path] == (
            "---\ncreated: 2025-01-08\nsource: Claude Code\ntype: Architecture\n"
            "project: Test\npriority: High\n---\n# Plan\nDetails"
        )

    def test_create_invalid(self, manager: LifecycleManager) -> None:
        response = create_technical_plan_impl(manager, "x", "Test", priority="Urgent")
        assert response["ok"] is False
        assert response["error"]["code"] == "VALIDATION_FAILED"

    def test_create_rejects_multiline_next_action(
        self, manager: LifecycleManager, gateway: Any
    ) -> None:
        response = create_technical_plan_impl(
            manager, "x", "Test", next_action="spike\nreview_date: 2000-01-01"
        )
        assert response["error"]["code"] == "VALIDATION_FAILED"
        assert gateway.files == {}

    def test_lifecycle(self, manager: LifecycleManager, gateway: Any) -> None:
        filename = create_technical_plan_impl(manager, "# Body", "Test")["data"]["filename"]
        reviewed = mark_plan_reviewed_impl(manager, filename)
        assert reviewed["data"]["review_date"] == "2025-01-08"
        archived = archive_plan_impl(manager, filename)
        assert archived["data"]["state"] == "archive"
        listed = list_technical_plans_impl(manager, "archive")
        assert listed["data"]["count"] == 1

    def test_move(self, manager: LifecycleManager, seed: Callable[..., str]) -> None:
        seed("archive", "x.md", project="X")
        response = move_plan_impl(manager, "x.md", "reviewed")
        assert response["error"]["code"] == "INVALID_TRANSITION"

    def test_not_found(self, manager: LifecycleManager) -> None:
        response = archive_plan_impl(manager, "missing.md")
        assert response == {
            "ok": False,
            "op": "archive_plan",
            "data": {},
            "error": {
                "code": "NOT_FOUND",
                "message": "Plan not found in Inbox or Reviewed: missing.md",
            },
        }

    def test_metadata_missing(self, manager: LifecycleManager) -> None:
        response = get_plan_metadata_impl(manager, "missing.md")
        assert response["ok"] is True
        assert response["data"]["metadata"] is None

    def test_archive_old_reviewed_default(
        self, manager: LifecycleManager, seed: Callable[..., str]
    ) -> None:
        seed("reviewed", "old.md", project="X", review_date="2024-11-01")
        seed("reviewed", "new.md", project="X", review_date="2025-01-01")
        response = archive_old_reviewed_impl(manager)
        assert response["data"]["archived"] == ["old.md"]

    def test_warnings_surface(self, manager: LifecycleManager, seed: Callable[..., str]) -> None:
        seed("inbox", "x.md", project="X")
        seed("archive", "x.md", project="X")
        response = list_technical_plans_impl(manager)
        assert response["warnings"] == [f"Duplicate plan x.md shadowed at {INBOX}/x.md"]

    def test_file_document(self, manager: LifecycleManager, gateway: Any) -> None:
        response = file_document_impl(manager, "Notes/todo.md", "milk")
        assert response["data"]["routed"] is False
        assert gateway.files["Notes/todo.md"] == "milk"


class TestRegisterTools:
    def test_all_tools_registered(self, manager: LifecycleManager) -> None:
        server = _RecordingServer()
        register_tools(server, manager)
        assert set(server.tools) == {
            "ping",
            "initialize_plan_structure",
            "create_technical_plan",
            "mark_plan_reviewed",
            "archive_plan",
            "move_plan",
            "list_technical_plans",
            "get_plan_metadata",
            "archive_old_reviewed",
            "file_document",
        }

    def test_tools_delegate_to_manager(self, manager: LifecycleManager, gateway: Any) -> None:
        server = _RecordingServer()
        register_tools(server, manager)
        created = server.tools["create_technical_plan"](
            content="# Plan", project="Test", type="Research", priority="Low"
        )
        assert created["data"]["filename"] == "2025-01-08_Test_Research.md"
        listed = server.tools["list_technical_plans"](folder="inbox")
        assert listed["data"]["count"] == 1
        assert server.tools["archive_old_reviewed"]()["data"]["count"] == 0
