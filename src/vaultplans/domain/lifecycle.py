"""Plan lifecycle — folder-derived states and one-directional transitions.

A plan's state is never stored: it is whichever managed folder currently
holds the file.

    inbox ──> reviewed ──> archive
      └──────────────────────^

Archive is terminal.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from pydantic import BaseModel


class PlanState(StrEnum):
    """Managed folder a plan currently sits in."""

    INBOX = "inbox"
    REVIEWED = "reviewed"
    ARCHIVE = "archive"


PLAN_TRANSITIONS: dict[str, list[str]] = {
    "inbox": ["reviewed", "archive"],
    "reviewed": ["archive"],
    "archive": [],
}

# Higher wins when the same filename shows up in several folders.
STATE_PRECEDENCE: dict[str, int] = {
    "inbox": 0,
    "reviewed": 1,
    "archive": 2,
}


def is_valid_transition(
    current: str,
    target: str,
    transitions: dict[str, list[str]] = PLAN_TRANSITIONS,
) -> bool:
    """Check if moving from *current* to *target* is allowed."""
    allowed = transitions.get(current, [])
    return target in allowed


# ---------------------------------------------------------------------------
# Folder layout
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PlanFolders:
    """Vault-relative folder names for one managed plan root.

    Built from configuration and handed to the lifecycle manager, so two
    managers can work on differently named roots side by side.
    """

    root: str = "Technical Plans"
    inbox_name: str = "Inbox"
    reviewed_name: str = "Reviewed"
    archive_name: str = "Archive"
    marker: str = ".gitkeep"

    @property
    def inbox(self) -> str:
        return f"{self.root}/{self.inbox_name}"

    @property
    def reviewed(self) -> str:
        return f"{self.root}/{self.reviewed_name}"

    @property
    def archive(self) -> str:
        return f"{self.root}/{self.archive_name}"

    def folder(self, state: str) -> str:
        """Folder path for *state* (``inbox``/``reviewed``/``archive``)."""
        return {
            PlanState.INBOX: self.inbox,
            PlanState.REVIEWED: self.reviewed,
            PlanState.ARCHIVE: self.archive,
        }[PlanState(state)]

    def path(self, state: str, filename: str) -> str:
        return f"{self.folder(state)}/{filename}"

    def marker_path(self, state: str) -> str:
        return self.path(state, self.marker)

    def all(self) -> list[tuple[PlanState, str]]:
        """``(state, folder)`` pairs in lifecycle order."""
        return [(state, self.folder(state)) for state in PlanState]

    def state_of(self, path: str) -> PlanState | None:
        """Infer the state of a vault path from its folder, if managed."""
        folder, _, _ = path.rpartition("/")
        for state, candidate in self.all():
            if folder == candidate:
                return state
        return None

    def contains(self, path: str) -> bool:
        """Whether *path* lies anywhere under the plans root."""
        return path == self.root or path.startswith(f"{self.root}/")


# ---------------------------------------------------------------------------
# Listing summaries
# ---------------------------------------------------------------------------


class PlanSummary(BaseModel):
    """One plan as surfaced by a listing.

    ``metadata`` is None when the document could not be read or decoded.
    """

    model_config = {"frozen": True}

    path: str
    filename: str
    state: PlanState
    metadata: dict[str, str] | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "path": self.path,
            "filename": self.filename,
            "state": str(self.state),
        }
        if self.metadata is not None:
            data["metadata"] = dict(self.metadata)
        return data


def resolve_duplicates(
    plans: list[PlanSummary],
) -> tuple[list[PlanSummary], list[PlanSummary]]:
    """Collapse copies of the same filename left behind by interrupted moves.

    The most terminal copy wins (archive > reviewed > inbox). Survivors keep
    their original listing order.

    Returns:
        ``(kept, shadowed)``.
    """
    winners: dict[str, PlanSummary] = {}
    for plan in plans:
        current = winners.get(plan.filename)
        if current is None or STATE_PRECEDENCE[plan.state] > STATE_PRECEDENCE[current.state]:
            winners[plan.filename] = plan

    kept: list[PlanSummary] = []
    shadowed: list[PlanSummary] = []
    for plan in plans:
        if winners[plan.filename] is plan:
            kept.append(plan)
        else:
            shadowed.append(plan)
    return kept, shadowed
