"""ServiceResult and ServiceError — the contract between services and the CLI.

INVARIANT: every catalog operation returns a ServiceResult; nothing raises
to the command layer for expected failures (unknown hook, missing corpus).
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

HOOK_NOT_FOUND = "HOOK_NOT_FOUND"
CORPUS_UNAVAILABLE = "CORPUS_UNAVAILABLE"


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Return type for all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"show_hook"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None


def success(op: str, data: dict[str, Any], warnings: list[str] | None = None) -> ServiceResult:
    return ServiceResult(ok=True, op=op, data=data, warnings=warnings or [])


def failure(op: str, code: str, message: str, **detail: Any) -> ServiceResult:
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code=code, message=message, detail=detail),
    )
