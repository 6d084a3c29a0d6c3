"""HTTP client helper."""

from __future__ import annotations

import json
from typing import Any

import aiohttp

from ...core.exceptions import HTTPStatusError


class HTTPClient:
    """Async HTTP client wrapper.

    Non-2xx responses raise HTTPStatusError carrying the status, reason and
    decoded body. Connection failures and timeouts propagate unchanged as
    ``aiohttp.ClientError`` / ``asyncio.TimeoutError``.
    """

    def __init__(self, base_url: str | None = None, timeout: float = 30.0) -> None:
        self.base_url = base_url
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session: aiohttp.ClientSession | None = None

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    def _resolve(self, url: str) -> str:
        # If base_url is set and url is relative, combine them
        if self.base_url and not url.startswith("http"):
            return f"{self.base_url}{url}"
        return url

    async def post(
        self,
        url: str,
        json_body: Any = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """POST a JSON body and return the decoded response body."""
        url = self._resolve(url)
        async with self.session.post(url, json=json_body, headers=headers) as response:
            body = decode_body(await response.text(errors="replace"))
            if response.status >= 400:
                raise HTTPStatusError(response.status, response.reason or "", body)
            return body

    async def close(self) -> None:
        """Close session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> HTTPClient:
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        await self.close()


def decode_body(text: str) -> Any:
    """Decode a response body: JSON when it parses, raw text otherwise, None when empty."""
    if not text:
        return None
    try:
        return json.loads(text)
    except ValueError:
        return text
