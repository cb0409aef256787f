"""Plan filenames and plan detection.

Filename convention: ``{YYYY-MM-DD}_{project}_{type}.md`` where project and
type are sanitized independently (``[^A-Za-z0-9]`` -> ``_``).

INVARIANT: the filename is the plan's identity across folders. Two plans
created on the same day for the same project and type map to the same
filename, and the later write replaces the earlier one.
"""

from __future__ import annotations

import re

PLAN_EXTENSION = ".md"

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9]")

# Lowercase substrings that mark free-form content as a technical plan.
PLAN_KEYWORDS: tuple[str, ...] = (
    "plan",
    "architecture",
    "design",
    "implementation",
    "technical",
    "system",
)


def sanitize_component(value: str) -> str:
    """Replace every non-alphanumeric ASCII character with ``_``.

    Examples:
        >>> sanitize_component("Test Project")
        'Test_Project'
        >>> sanitize_component("api/v2.1")
        'api_v2_1'
    """
    return _UNSAFE_CHARS.sub("_", value)


def plan_filename(day: str, project: str, plan_type: str) -> str:
    """Build the filename for a plan created on *day* (``YYYY-MM-DD``)."""
    return f"{day}_{sanitize_component(project)}_{sanitize_component(plan_type)}{PLAN_EXTENSION}"


def is_plan_document(name: str, *, marker: str) -> bool:
    """Whether a folder entry is a plan document (``*.md``, not the marker)."""
    return name.endswith(PLAN_EXTENSION) and name != marker and not name.endswith("/")


def is_technical_plan(content: str) -> bool:
    """Keyword heuristic deciding whether free-form content is a plan."""
    lowered = content.lower()
    return any(keyword in lowered for keyword in PLAN_KEYWORDS)
