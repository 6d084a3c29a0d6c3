"""Shared bearer credential."""

from __future__ import annotations

from .config import mask_token
from .exceptions import MissingCredentialError


class Credential:
    """Mutable holder for the run's bearer token.

    Owned by one Dispatcher/recovery handler pair. The token only changes
    through ``update`` during a recovery cycle and is never persisted.
    """

    def __init__(self, token: str) -> None:
        if not token:
            raise MissingCredentialError("Credential token must be a non-empty string")
        self._token = token
        self.version = 0

    @property
    def token(self) -> str:
        return self._token

    def update(self, token: str) -> None:
        """Swap in a refreshed token."""
        if not token:
            raise MissingCredentialError("Refreshed credential token is empty")
        self._token = token
        self.version += 1

    def authorization_header(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self._token}"}

    def __repr__(self) -> str:
        return f"Credential({mask_token(self._token)!r}, version={self.version})"
