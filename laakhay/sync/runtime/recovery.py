"""Credential recovery for expired bearer tokens.

Architecture:
    Recovery is a suspend/resume boundary around the Dispatcher:

        ACTIVE --(HTTP 401)--> SUSPENDED --(confirm + reload)--> ACTIVE

    When a dispatch raises AuthenticationError the handler suspends, awaits
    an external confirmation that the credential source was updated, re-reads
    the credential through a CredentialProvider, updates the shared
    Credential in place, and retries the original request exactly once.
    A second 401 is recorded as a terminal failure for that chunk; the
    handler never starts another cycle for the same dispatch.

Design Decisions:
    - Injected capabilities: the confirmation signal and the credential
      source are passed in, so the core has no console or env coupling
    - Unbounded wait: confirmation is a human signal and is not subject to
      the request timeout
    - Missing credential on reload is fatal (MissingCredentialError)
"""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Protocol

from dotenv import dotenv_values

from ..core.credential import Credential
from ..core.enums import RecoveryState
from ..core.exceptions import AuthenticationError, MissingCredentialError
from ..models import DispatchOutcome
from .chunking.telemetry import log_credential_refresh_requested, log_credential_refreshed
from .rest.dispatcher import Dispatcher

logger = logging.getLogger(__name__)

REFRESH_PROMPT = (
    "Auth token has expired. Please update the {key} in your .env file "
    "and press Enter to continue..."
)


class CredentialProvider(Protocol):
    """Source the recovery handler re-reads the credential from."""

    def load(self) -> str | None:
        """Return the current credential value, or None if absent."""
        ...


class DotenvCredentialProvider:
    """Reads the credential from a ``.env`` file, falling back to the environment."""

    def __init__(self, env_file: str | Path = ".env", key: str = "AUTH_TOKEN") -> None:
        self.env_file = Path(env_file)
        self.key = key

    def load(self) -> str | None:
        values = dotenv_values(self.env_file) if self.env_file.exists() else {}
        token = values.get(self.key) or os.environ.get(self.key)
        return token.strip() if token and token.strip() else None


class ConsoleConfirmation:
    """Blocks until the operator presses Enter."""

    def __init__(self, key: str = "AUTH_TOKEN", input_fn: Callable[[str], str] = input) -> None:
        self.prompt = REFRESH_PROMPT.format(key=key)
        self._input = input_fn

    async def __call__(self) -> None:
        await asyncio.to_thread(self._input, f"\n{self.prompt}\n")


class CredentialRecoveryHandler:
    """Suspends dispatch on HTTP 401 and resumes with a refreshed credential."""

    def __init__(
        self,
        credential: Credential,
        provider: CredentialProvider,
        confirm: Callable[[], Awaitable[None]],
    ) -> None:
        """Initialize recovery handler.

        Args:
            credential: Shared credential, updated in place on recovery
            provider: Source re-read after confirmation
            confirm: Awaitable resolving once the credential source was updated
        """
        self._credential = credential
        self._provider = provider
        self._confirm = confirm
        self.state = RecoveryState.ACTIVE
        self.recovery_cycles = 0

    @property
    def credential(self) -> Credential:
        return self._credential

    async def recover(self, reason: str = "") -> Credential:
        """Run one suspend, refresh, resume cycle.

        Raises:
            MissingCredentialError: If the refreshed source has no credential
        """
        self.state = RecoveryState.SUSPENDED
        log_credential_refresh_requested(reason=reason)

        await self._confirm()

        token = self._provider.load()
        if not token:
            raise MissingCredentialError(
                "Credential not found after refresh. Please ensure it is set in your .env file."
            )

        self._credential.update(token)
        self.recovery_cycles += 1
        self.state = RecoveryState.ACTIVE
        log_credential_refreshed(
            credential_version=self._credential.version,
            recovery_cycles=self.recovery_cycles,
        )
        logger.info("Token updated successfully. Continuing processing...")
        return self._credential

    async def dispatch(self, dispatcher: Dispatcher, body: dict) -> DispatchOutcome:
        """Dispatch ``body``, recovering the credential at most once."""
        try:
            return await dispatcher.dispatch(body)
        except AuthenticationError as e:
            await self.recover(str(e))

        try:
            return await dispatcher.dispatch(body)
        except AuthenticationError as e:
            logger.error(f"Request rejected again after credential refresh: {e}")
            return DispatchOutcome.failed(body, str(e), status_code=401, attempts=e.attempts)
