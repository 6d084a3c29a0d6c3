"""Single-request dispatch with bounded retry.

Architecture:
    The Dispatcher owns one remote endpoint and the run's shared credential.
    ``send`` performs exactly one HTTP attempt and raises a classified
    DispatchError on failure. ``dispatch`` wraps ``send`` in an explicit
    bounded loop: transient failures are retried with exponential backoff,
    terminal failures return immediately, and an AuthenticationError is
    never retried here. It propagates to the caller, which owns credential
    recovery.

Design Decisions:
    - Explicit loop with an attempt counter: the retry bound is directly
      observable and the call stack does not grow per retry
    - Injected sleep: the backoff schedule can be asserted without waiting
    - Outcomes, not exceptions: exhausted or terminal failures come back as
      a failed DispatchOutcome carrying the attempted request
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from ...core.credential import Credential
from ...core.exceptions import (
    AuthenticationError,
    DispatchError,
    HTTPStatusError,
    TerminalDispatchError,
    TransientDispatchError,
)
from ...models import DispatchOutcome
from ..chunking.telemetry import log_retry_scheduled
from .http_client import HTTPClient
from .retry import NETWORK_ERRORS, RetryPolicy

logger = logging.getLogger(__name__)


class Dispatcher:
    """Sends request bodies to one endpoint under a retry policy."""

    def __init__(
        self,
        http: HTTPClient,
        url: str,
        credential: Credential,
        retry_policy: RetryPolicy | None = None,
        *,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        """Initialize dispatcher.

        Args:
            http: HTTP client used for every attempt
            url: Fixed endpoint URL
            credential: Shared bearer credential (updated in place on recovery)
            retry_policy: Backoff policy (default: 3 retries, 1s base delay)
            sleep: Awaitable used to suspend between attempts
        """
        self._http = http
        self._url = url
        self._credential = credential
        self._policy = retry_policy or RetryPolicy()
        self._sleep = sleep

    @property
    def url(self) -> str:
        return self._url

    @property
    def credential(self) -> Credential:
        return self._credential

    @property
    def retry_policy(self) -> RetryPolicy:
        return self._policy

    def headers(self) -> dict[str, str]:
        return {"Content-Type": "application/json", **self._credential.authorization_header()}

    async def send(self, body: dict[str, Any]) -> Any:
        """Make one attempt and return the decoded response body.

        Raises:
            TransientDispatchError: Network failure or retryable status
            TerminalDispatchError: Non-retryable status
            AuthenticationError: HTTP 401
        """
        logger.debug("Request payload", extra={"url": self._url, "payload": body})
        try:
            return await self._http.post(self._url, json_body=body, headers=self.headers())
        except (HTTPStatusError, *NETWORK_ERRORS) as e:
            raise self._policy.to_dispatch_error(e) from e

    async def dispatch(self, body: dict[str, Any]) -> DispatchOutcome:
        """Send ``body``, retrying transient failures.

        Returns:
            DispatchOutcome for the final attempt

        Raises:
            AuthenticationError: The endpoint rejected the credential
        """
        max_retries = self._policy.max_retries
        last_error: DispatchError | None = None
        attempts = 0

        for attempt in range(max_retries + 1):
            attempts += 1
            try:
                response = await self.send(body)
            except TransientDispatchError as e:
                last_error = e
                logger.warning(f"Attempt {attempts} to {self._url} failed: {e}")
                if attempt < max_retries:
                    delay = self._policy.backoff(attempt)
                    log_retry_scheduled(
                        url=self._url,
                        attempt=attempt + 1,
                        max_retries=max_retries,
                        delay=delay,
                        error=str(e),
                    )
                    await self._sleep(delay)
                continue
            except AuthenticationError as e:
                e.attempts = attempts
                raise
            except TerminalDispatchError as e:
                logger.warning(f"Attempt {attempts} to {self._url} failed terminally: {e}")
                return DispatchOutcome.failed(
                    body, str(e), status_code=e.status_code, attempts=attempts
                )

            return DispatchOutcome.succeeded(body, response, attempts=attempts)

        return DispatchOutcome.failed(
            body,
            str(last_error) if last_error else None,
            status_code=last_error.status_code if last_error else None,
            attempts=attempts,
        )
