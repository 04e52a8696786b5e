"""In-memory cache for OAuth client-credentials access tokens."""
from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable, Optional

import httpx

from tirthyatra.core.results import FetchError, Failure, Result, Success, capture

logger = logging.getLogger(__name__)

EXPIRY_MARGIN_S = 60.0
DEFAULT_TOKEN_TTL_S = 1799


class ClientCredentialsToken:
    """Fetch an access token once and reuse it until shortly before it expires."""

    def __init__(
        self,
        provider: str,
        token_url: str,
        client_id: Optional[str],
        client_secret: Optional[str],
        *,
        client: httpx.AsyncClient,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.provider = provider
        self.token_url = token_url
        self.client_id = client_id
        self.client_secret = client_secret
        self._client = client
        self._clock = clock
        self._token: Optional[str] = None
        self._expires_at: float = 0.0
        self._lock = asyncio.Lock()

    def _is_fresh(self) -> bool:
        return self._token is not None and self._clock() < self._expires_at

    def invalidate(self) -> None:
        self._token = None
        self._expires_at = 0.0

    async def _request(self) -> dict:
        response = await self._client.post(
            self.token_url,
            data={
                "grant_type": "client_credentials",
                "client_id": self.client_id,
                "client_secret": self.client_secret,
            },
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )
        response.raise_for_status()
        return response.json()

    async def get(self) -> Result[str]:
        """Return a cached token or fetch a new one."""

        if self._is_fresh():
            return Success(self._token)
        if not self.client_id or not self.client_secret:
            return Failure(FetchError("unconfigured", "client credentials missing", self.provider))

        async with self._lock:
            if self._is_fresh():
                return Success(self._token)

            result = await capture(self.provider, self._request)
            if isinstance(result, Failure):
                return result

            payload = result.value
            token = payload.get("access_token")
            if not token:
                return Failure(FetchError("malformed", "token response without access_token", self.provider))
            expires_in = float(payload.get("expires_in") or DEFAULT_TOKEN_TTL_S)
            self._token = token
            self._expires_at = self._clock() + max(expires_in - EXPIRY_MARGIN_S, 0.0)
            logger.info(f"Fetched new {self.provider} access token, valid for {int(expires_in)}s")
            return Success(token)
