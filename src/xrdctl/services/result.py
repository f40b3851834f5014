"""ServiceResult and ServiceError: the contract between DocumentService and the CLI.

INVARIANT: Every DocumentService operation (``convert``, ``inspect``,
``resolve``) returns a ServiceResult. FormatError, ValidationError,
UnicodeError and OSError are caught and reported as a ServiceError with one
of the :class:`ErrorCode` values; they never escape to the caller.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class ErrorCode(StrEnum):
    """Stable ``ServiceError.code`` values."""

    FORMAT_ERROR = "FORMAT_ERROR"  # malformed or structurally invalid XRD/JRD text
    VALIDATION_ERROR = "VALIDATION_ERROR"  # e.g. a Link with both href and template
    ENCODING_ERROR = "ENCODING_ERROR"  # output text is not valid UTF-8
    IO_ERROR = "IO_ERROR"
    NOT_FOUND = "NOT_FOUND"  # no link with the requested rel
    NO_RESOURCE = "NO_RESOURCE"  # templated link, nothing to substitute for {uri}


class ServiceError(BaseModel):
    """Why an operation failed.

    ``detail`` always carries ``source`` for file errors, and ``rel`` (plus
    ``template`` for NO_RESOURCE) for resolve failures.
    """

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one DocumentService operation.

    Attributes:
        ok: Whether the operation succeeded.
        op: ``"convert"``, ``"inspect"`` or ``"resolve"``.
        data: Operation payload on success, e.g. ``content`` and
            ``target_format`` for convert, or ``href`` for resolve.
        warnings: Lossy-but-legal outcomes, such as a property type that
            repeats and collapses in the JRD map form.
        error: Structured error if ``ok`` is False.
        meta: Telemetry span tree under ``"telemetry"`` when verbose.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None
