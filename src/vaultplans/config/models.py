"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, vaultplans.toml only contains
overrides. A local Obsidian instance with no API key needs no file at all.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from vaultplans.domain.lifecycle import PlanFolders

# --- vaultplans.toml sections ---


class ApiConfig(BaseModel):
    """[api] section — Obsidian Local REST API connection."""

    model_config = {"frozen": True}

    url: str = "http://localhost:27123"
    key: str | None = None
    timeout: float | None = None
    verify_ssl: bool = True


class PlansConfig(BaseModel):
    """[plans] section — managed folder layout."""

    model_config = {"frozen": True}

    root: str = "Technical Plans"
    inbox: str = "Inbox"
    reviewed: str = "Reviewed"
    archive: str = "Archive"
    marker: str = ".gitkeep"

    def folders(self) -> PlanFolders:
        return PlanFolders(
            root=self.root.strip("/"),
            inbox_name=self.inbox.strip("/"),
            reviewed_name=self.reviewed.strip("/"),
            archive_name=self.archive.strip("/"),
            marker=self.marker,
        )


class SweepConfig(BaseModel):
    """[sweep] section — age-based archiving of reviewed plans."""

    model_config = {"frozen": True}

    days_old: int = Field(default=30, ge=0)


class McpConfig(BaseModel):
    """[mcp] section."""

    model_config = {"frozen": True}

    transport: str = "stdio"
