"""Retry policy and failure classification for dispatch attempts."""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass, field
from typing import Any

import aiohttp

from ...core.enums import FailureKind
from ...core.exceptions import (
    AuthenticationError,
    DispatchError,
    HTTPStatusError,
    TerminalDispatchError,
    TransientDispatchError,
)

NETWORK_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError)


@dataclass(frozen=True)
class RetryPolicy:
    """Bounded exponential backoff.

    Attributes:
        max_retries: Retries allowed after the first attempt
        base_delay: Delay before the first retry, in seconds
        retryable_statuses: 4xx statuses treated as transient (5xx always are)
    """

    max_retries: int = 3
    base_delay: float = 1.0
    retryable_statuses: frozenset[int] = field(default_factory=lambda: frozenset({408, 429}))

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        if self.base_delay < 0:
            raise ValueError("base_delay must be >= 0")

    def backoff(self, attempt: int) -> float:
        """Delay before retry number ``attempt + 1``: base_delay * 2**attempt."""
        return self.base_delay * 2**attempt

    def classify(self, error: BaseException) -> FailureKind:
        """Classify a failed attempt.

        Network failures (no HTTP status), 5xx and the configured retryable
        statuses are transient. 401 escalates to credential recovery. Every
        other status, and any unrecognized error, is terminal.
        """
        if isinstance(error, HTTPStatusError):
            if error.status == 401:
                return FailureKind.AUTHENTICATION
            if error.status >= 500 or error.status in self.retryable_statuses:
                return FailureKind.TRANSIENT
            return FailureKind.TERMINAL
        if isinstance(error, NETWORK_ERRORS):
            return FailureKind.TRANSIENT
        return FailureKind.TERMINAL

    def to_dispatch_error(self, error: BaseException) -> DispatchError:
        """Wrap a raw transport error in the matching DispatchError subclass."""
        message = describe_error(error)
        status = error.status if isinstance(error, HTTPStatusError) else None
        kind = self.classify(error)
        if kind is FailureKind.AUTHENTICATION:
            return AuthenticationError(message)
        if kind is FailureKind.TRANSIENT:
            return TransientDispatchError(message, status_code=status)
        return TerminalDispatchError(message, status_code=status)


def describe_error(error: BaseException | None) -> str:
    """Render a failure as a human-readable message.

    - Structured response: ``HTTP <status>: <reason> - <body>``
    - Request sent, no response: ``Network error: <message>``
    - Anything else: the error text, or ``Unknown error``
    """
    if isinstance(error, HTTPStatusError):
        message = f"HTTP {error.status}: {error.reason}"
        detail = render_body(error.body)
        return f"{message} - {detail}" if detail else message
    if isinstance(error, NETWORK_ERRORS):
        return f"Network error: {str(error) or type(error).__name__}"
    if error is not None and str(error):
        return str(error)
    return "Unknown error"


def render_body(body: Any) -> str:
    """Render a response body for an error message.

    Decoded JSON is rendered whole as compact JSON; raw text is kept as is.
    """
    if body is None or body == "":
        return ""
    if isinstance(body, str):
        return body
    return json.dumps(body, separators=(",", ":"), default=str)
