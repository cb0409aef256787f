"""Shared service-layer helper functions."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, date, datetime
from typing import Any

import structlog


def today_utc() -> date:
    """Today's date in UTC."""
    return datetime.now(UTC).date()


def parse_iso_date(value: str | None) -> date | None:
    """Parse ``YYYY-MM-DD`` (or a full ISO timestamp) into a date.

    Returns None for empty or unparseable input.

    Examples:
        >>> parse_iso_date("2025-01-08")
        datetime.date(2025, 1, 8)
        >>> parse_iso_date("2025-01-08T10:30:00Z")
        datetime.date(2025, 1, 8)
        >>> parse_iso_date("next week") is None
        True
    """
    if not value:
        return None
    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None


def basename(path: str) -> str:
    """Last segment of a vault-relative path."""
    return path.rsplit("/", 1)[-1]


@contextmanager
def operation_context(op: str, **fields: Any) -> Iterator[None]:
    """Bind ``op`` and *fields* to every log record emitted inside the block."""
    with structlog.contextvars.bound_contextvars(op=op, **fields):
        yield
