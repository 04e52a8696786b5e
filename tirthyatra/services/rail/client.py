"""Async client for the Indian Rail trains-between-stations API."""
from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx

from tirthyatra.core.config import ApiSettings, is_usable_key
from tirthyatra.core.interfaces import TrainResult
from tirthyatra.core.results import Result, capture
from tirthyatra.services.oauth import ClientCredentialsToken


class IndianRail:
    """Trains between two station codes, authenticated with a client-credentials token."""

    provider_id = "indian_rail"

    def __init__(
        self,
        client_id: Optional[str],
        client_secret: Optional[str],
        *,
        base_url: str = "https://api.indianrail.gov.in/v1",
        timeout_s: float = 15.0,
    ) -> None:
        self.client_id = client_id
        self.client_secret = client_secret
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"accept": "application/json"},
            timeout=httpx.Timeout(timeout_s, connect=10.0),
        )
        self._token = ClientCredentialsToken(
            self.provider_id,
            f"{self.base_url}/oauth/token",
            client_id,
            client_secret,
            client=self._client,
        )

    @property
    def test_url(self) -> str:
        return f"{self.base_url}/status"

    def probe_headers(self) -> Optional[Dict[str, str]]:
        return None

    def is_configured(self) -> bool:
        return is_usable_key(self.client_id) and is_usable_key(self.client_secret)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def access_token(self) -> Result[str]:
        return await self._token.get()

    @staticmethod
    def _parse_fares(raw: Any) -> Dict[str, int]:
        fares: Dict[str, int] = {}
        if isinstance(raw, dict):
            items = raw.items()
        elif isinstance(raw, list):
            items = ((entry.get("class"), entry.get("fare")) for entry in raw if isinstance(entry, dict))
        else:
            return fares
        for travel_class, fare in items:
            if travel_class and fare:
                fares[str(travel_class)] = int(round(float(fare)))
        return fares

    async def _trains_between(self, from_station: str, to_station: str, token: str) -> List[TrainResult]:
        response = await self._client.get(
            "/trains/between",
            params={"from": from_station, "to": to_station},
            headers={"Authorization": f"Bearer {token}"},
        )
        response.raise_for_status()
        data = response.json()
        trains: List[TrainResult] = []
        for item in data.get("data", []):
            trains.append(
                TrainResult(
                    number=str(item.get("train_number", "")),
                    name=item["train_name"],
                    departure=item.get("from_time", ""),
                    arrival=item.get("to_time", ""),
                    duration=item.get("travel_time", ""),
                    fare_tiers=self._parse_fares(item.get("fares")),
                )
            )
        return trains

    async def trains_between(self, from_station: str, to_station: str, token: str) -> Result[List[TrainResult]]:
        return await capture(self.provider_id, lambda: self._trains_between(from_station, to_station, token))


def create_rail_client(settings: ApiSettings) -> IndianRail:
    """Instantiate the rail client using project settings."""

    return IndianRail(settings.indian_rail_client_id, settings.indian_rail_client_secret)
