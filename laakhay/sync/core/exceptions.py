"""Custom exception hierarchy."""

from __future__ import annotations

from typing import Any


class SyncError(Exception):
    """Base exception for all library errors."""

    pass


class ValidationError(SyncError):
    """Malformed or missing startup input.

    Always fatal: raised before any dispatch happens and aborts the run.
    """

    pass


class InvalidRangeError(ValidationError):
    """Time range where start is not strictly before end."""

    pass


class MissingCredentialError(ValidationError):
    """No usable credential in the configuration source."""

    pass


class HTTPStatusError(SyncError):
    """Remote endpoint answered with a non-2xx status.

    Raised by the HTTP client, before any retry classification happens.
    """

    def __init__(self, status: int, reason: str = "", body: Any = None) -> None:
        super().__init__(f"HTTP {status}: {reason}")
        self.status = status
        self.reason = reason
        self.body = body


class DispatchError(SyncError):
    """Classified failure of a single dispatch attempt."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        # HTTP attempts made by the dispatch call that raised this error
        self.attempts = 1


class TransientDispatchError(DispatchError):
    """Network failure or retryable HTTP status (5xx, 408, 429)."""

    pass


class TerminalDispatchError(DispatchError):
    """Non-retryable HTTP status, or a failed post-recovery retry."""

    pass


class AuthenticationError(DispatchError):
    """Endpoint rejected the bearer credential (HTTP 401).

    Signals that dispatch must be suspended until the credential is refreshed.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=401)


NeedsCredentialRefresh = AuthenticationError
