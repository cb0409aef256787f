"""Plan metadata schema.

Canonical key order (the order new plans are written in):
  created, source, type, project, priority, review_date, next_action

Metadata is stored on disk as flat strings. :class:`PlanMetadata` is only
used to validate enum fields when a plan is created; documents read back
from the vault are never validated and unknown keys pass through as-is.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ValidationError


class PlanSource(StrEnum):
    """Who produced the plan."""

    CLAUDE = "Claude"
    CLAUDE_CODE = "Claude Code"
    OTHER_LLM = "Other LLM"


class PlanType(StrEnum):
    ARCHITECTURE = "Architecture"
    IMPLEMENTATION = "Implementation"
    RESEARCH = "Research"
    DESIGN = "Design"


class PlanPriority(StrEnum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


CANONICAL_KEY_ORDER: list[str] = [
    "created",
    "source",
    "type",
    "project",
    "priority",
    "review_date",
    "next_action",
]

DEFAULT_PROJECT = "Unnamed Project"


class PlanMetadata(BaseModel):
    """Frontmatter fields of a technical plan."""

    model_config = {"frozen": True, "extra": "allow"}

    created: str
    source: PlanSource = PlanSource.OTHER_LLM
    type: PlanType = PlanType.DESIGN
    project: str = DEFAULT_PROJECT
    priority: PlanPriority = PlanPriority.MEDIUM
    review_date: str | None = None
    next_action: str | None = None


def default_metadata(today: str) -> dict[str, str]:
    """Defaults applied under caller-supplied metadata on creation."""
    return {
        "created": today,
        "source": str(PlanSource.OTHER_LLM),
        "type": str(PlanType.DESIGN),
        "project": DEFAULT_PROJECT,
        "priority": str(PlanPriority.MEDIUM),
    }


def merge_metadata(today: str, partial: dict[str, Any] | None) -> dict[str, str]:
    """Overlay *partial* on the creation defaults.

    Keys keep their default position; new keys are appended in the order
    given. ``None`` values in *partial* never clobber a default.
    """
    merged = default_metadata(today)
    for key, value in (partial or {}).items():
        if value is None:
            continue
        merged[key] = str(value)
    return merged


def _is_single_line(text: str) -> bool:
    return "\n" not in text and "\r" not in text


def validate_metadata(metadata: dict[str, str]) -> list[str]:
    """Check *metadata* can be written as a frontmatter block.

    Keys must be non-empty and free of colons, and every key and value must
    fit on one line. Enum-typed fields must hold one of their members.

    Returns a list of human-readable errors (empty when valid).
    """
    errors: list[str] = []
    for key, value in metadata.items():
        if not key.strip() or ":" in key or not _is_single_line(key):
            errors.append(f"{key!r}: invalid metadata key")
        elif not _is_single_line(value):
            errors.append(f"{key}: value must be a single line")
    try:
        PlanMetadata.model_validate(metadata)
    except ValidationError as exc:
        for err in exc.errors():
            loc = ".".join(str(part) for part in err["loc"])
            errors.append(f"{loc}: {err['msg']}")
    return errors
