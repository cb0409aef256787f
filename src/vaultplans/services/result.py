"""ServiceResult and ServiceError — the universal service contract.

INVARIANT: All lifecycle operations return ServiceResult; failures are
returned, never raised. The CLI and the MCP adapter both consume this type.

Error codes:
- ``NOT_FOUND``: the plan is absent from the folder(s) the operation reads.
- ``OPERATION_FAILED``: a required remote call failed (``detail.cause``).
- ``VALIDATION_FAILED``: caller input rejected before any remote call.
- ``INIT_FAILED``: folder initialization could not complete.
- ``INVALID_TRANSITION``: a move would go backward or leave the archive.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Return type for every lifecycle operation.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"archive_plan"``).
        data: Operation-specific payload.
        warnings: Non-fatal issues recovered from during the operation.
        error: Structured error if ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None

    @classmethod
    def failure(
        cls,
        op: str,
        code: str,
        message: str,
        *,
        detail: dict[str, Any] | None = None,
        data: dict[str, Any] | None = None,
        warnings: list[str] | None = None,
    ) -> ServiceResult:
        return cls(
            ok=False,
            op=op,
            data=data or {},
            warnings=warnings or [],
            error=ServiceError(code=code, message=message, detail=detail or {}),
        )
