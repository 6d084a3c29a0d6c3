"""Dispatch outcome structure."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class DispatchOutcome:
    """Result of one Dispatcher invocation.

    Attributes:
        success: Whether the endpoint accepted the request
        request: Wire body that was attempted (kept for reporting on failure)
        message: Success message from the response body
        error: Human-readable error for failed dispatches
        response: Parsed response body, if any
        status_code: HTTP status of the final attempt (None for network failures)
        attempts: Number of HTTP attempts made, retries included
    """

    success: bool
    request: dict[str, Any]
    message: str | None = None
    error: str | None = None
    response: Any = None
    status_code: int | None = None
    attempts: int = 1

    @classmethod
    def succeeded(
        cls,
        request: dict[str, Any],
        response: Any,
        *,
        status_code: int | None = None,
        attempts: int = 1,
    ) -> DispatchOutcome:
        message = None
        if isinstance(response, dict):
            message = response.get("message")
        return cls(
            success=True,
            request=request,
            message=message or "Request successful",
            response=response,
            status_code=status_code,
            attempts=attempts,
        )

    @classmethod
    def failed(
        cls,
        request: dict[str, Any],
        error: str | None,
        *,
        status_code: int | None = None,
        attempts: int = 1,
    ) -> DispatchOutcome:
        return cls(
            success=False,
            request=request,
            error=error or "Unknown error",
            status_code=status_code,
            attempts=attempts,
        )
