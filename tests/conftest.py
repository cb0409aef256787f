"""Shared pytest fixtures and test helpers for vaultplans tests."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from datetime import date
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from vaultplans.domain.codec import generate_frontmatter
from vaultplans.domain.lifecycle import PlanFolders
from vaultplans.infrastructure.gateway import GatewayError, VaultFileNotFoundError
from vaultplans.services.lifecycle import LifecycleManager

TODAY = date(2025, 1, 8)


class InMemoryGateway:
    """VaultGateway fake backed by a dict, with per-call failure injection.

    Folders exist only as a byproduct of the files inside them, like the
    real vault. ``calls`` records ``(method, path)`` for every call.
    """

    def __init__(self, files: dict[str, str] | None = None) -> None:
        self.files: dict[str, str] = dict(files or {})
        self.calls: list[tuple[str, str]] = []
        self.status: dict[str, Any] = {
            "status": "OK",
            "service": "Obsidian Local REST API",
            "authenticated": True,
            "manifest": {"id": "obsidian-local-rest-api", "name": "Local REST API", "version": "3.0.1"},
            "versions": {"obsidian": "1.5.3", "self": "3.0.1"},
        }
        self._failures: dict[tuple[str, str], GatewayError] = {}

    def fail_on(self, method: str, path: str = "*", exc: GatewayError | None = None) -> None:
        """Make *method* raise for *path* (``"*"`` matches every path)."""
        self._failures[(method, path)] = exc or GatewayError(f"boom: {method} {path}", path=path)

    def _check(self, method: str, path: str) -> None:
        self.calls.append((method, path))
        for key in ((method, path), (method, "*")):
            if key in self._failures:
                raise self._failures[key]

    def writes(self) -> list[str]:
        return [path for method, path in self.calls if method in ("put", "delete")]

    # -- VaultGateway ------------------------------------------------------

    def get_status(self) -> dict[str, Any]:
        self._check("status", "")
        return self.status

    def list_files(self) -> list[str]:
        self._check("list_files", "")
        return sorted(self.files)

    def list_directory(self, path: str) -> list[str]:
        folder = path.rstrip("/")
        self._check("list_directory", folder)
        prefix = f"{folder}/"
        entries: set[str] = set()
        for file_path in self.files:
            if not file_path.startswith(prefix):
                continue
            rest = file_path[len(prefix) :]
            head, sep, _ = rest.partition("/")
            entries.add(f"{head}/" if sep else head)
        if not entries:
            raise VaultFileNotFoundError(f"Not found: {folder}/", path=folder, status=404)
        return sorted(entries)

    def get_file(self, path: str) -> str:
        self._check("get", path)
        if path not in self.files:
            raise VaultFileNotFoundError(f"File not found: {path}", path=path, status=404)
        return self.files[path]

    def create_or_update_file(self, path: str, text: str) -> None:
        self._check("put", path)
        self.files[path] = text

    def delete_file(self, path: str) -> None:
        self._check("delete", path)
        if path not in self.files:
            raise VaultFileNotFoundError(f"File not found: {path}", path=path, status=404)
        del self.files[path]


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def gateway() -> InMemoryGateway:
    return InMemoryGateway()


@pytest.fixture
def folders() -> PlanFolders:
    return PlanFolders()


@pytest.fixture
def manager(gateway: InMemoryGateway, folders: PlanFolders) -> LifecycleManager:
    """Lifecycle manager on the in-memory gateway, pinned to 2025-01-08."""
    return LifecycleManager(gateway, folders=folders, today=lambda: TODAY)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def seed(gateway: InMemoryGateway, folders: PlanFolders) -> Callable[..., str]:
    """Place a plan document directly into a folder, bypassing the manager.

    Returns the vault path written.
    """

    def _seed(state: str, filename: str, body: str = "# Plan\nDetails", **metadata: str) -> str:
        path = folders.path(state, filename)
        gateway.files[path] = generate_frontmatter(metadata) + body
        return path

    return _seed


@pytest.fixture(autouse=True)
def _restore_root_logging() -> Iterator[None]:
    """CLI invocations reconfigure the root logger; undo that after each test."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


@pytest.fixture
def _isolated_cli(
    tmp_path: Path, gateway: InMemoryGateway, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Run CLI commands against the in-memory gateway with no config file.

    Use via ``@pytest.mark.usefixtures("_isolated_cli")`` on command test
    classes.
    """
    monkeypatch.chdir(tmp_path)
    for var in ("VAULTPLANS_CONFIG", "OBSIDIAN_API_URL", "OBSIDIAN_API_KEY"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr(
        "vaultplans.commands._context.create_gateway", lambda settings: gateway
    )
