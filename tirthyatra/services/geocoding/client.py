"""Async wrapper around the OpenCage forward-geocoding endpoint."""
from __future__ import annotations

from typing import Dict, Optional

import httpx

from tirthyatra.core.config import ApiSettings, is_usable_key
from tirthyatra.core.results import Result, capture
from tirthyatra.core.schemas import Coordinates


class OpenCageGeocoder:
    """Resolve a free-text place name to coordinates."""

    provider_id = "opencage"

    def __init__(
        self,
        api_key: Optional[str],
        *,
        base_url: str = "https://api.opencagedata.com/geocode/v1/json",
        timeout_s: float = 10.0,
        country_code: str = "in",
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url
        self.country_code = country_code
        self._client = httpx.AsyncClient(
            headers={"accept": "application/json"},
            timeout=httpx.Timeout(timeout_s),
        )

    @property
    def test_url(self) -> str:
        return f"{self.base_url}?q=Varanasi&limit=1&key={self.api_key or ''}"

    def probe_headers(self) -> Optional[Dict[str, str]]:
        return None

    def is_configured(self) -> bool:
        return is_usable_key(self.api_key)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _lookup(self, query: str) -> Optional[Coordinates]:
        response = await self._client.get(
            self.base_url,
            params={
                "q": query,
                "key": self.api_key,
                "limit": 1,
                "no_annotations": 1,
                "countrycode": self.country_code,
            },
        )
        response.raise_for_status()
        data = response.json()
        results = data.get("results") or []
        if not results:
            return None
        geometry = results[0]["geometry"]
        return Coordinates(lat=float(geometry["lat"]), lng=float(geometry["lng"]))

    async def geocode(self, query: str) -> Result[Optional[Coordinates]]:
        """Return ``Success(None)`` when the provider knows no such place."""

        return await capture(self.provider_id, lambda: self._lookup(query))


def create_geocoder(settings: ApiSettings) -> OpenCageGeocoder:
    """Instantiate the geocoder using project settings."""

    return OpenCageGeocoder(settings.opencage_api_key)
