"""Thin async wrapper around the OpenTripMap places API."""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

import httpx

from tirthyatra.core.config import ApiSettings, is_usable_key
from tirthyatra.core.interfaces import PlaceResult
from tirthyatra.core.results import Result, capture
from tirthyatra.core.schemas import Coordinates


class OpenTripMap:
    """Search for points of interest around a coordinate."""

    provider_id = "opentripmap"

    def __init__(
        self,
        api_key: Optional[str],
        *,
        base_url: str = "https://api.opentripmap.com/0.1/en/places",
        timeout_s: float = 10.0,
        limit: int = 20,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.limit = limit
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"accept": "application/json"},
            timeout=httpx.Timeout(timeout_s),
        )

    @property
    def test_url(self) -> str:
        return f"{self.base_url}/geoname?name=Varanasi&apikey={self.api_key or ''}"

    def probe_headers(self) -> Optional[Dict[str, str]]:
        return None

    def is_configured(self) -> bool:
        return is_usable_key(self.api_key)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "OpenTripMap":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self._client.aclose()

    async def _aget(self, path: str, params: Dict[str, Any]) -> Any:
        response = await self._client.get(path, params=params)
        response.raise_for_status()
        return response.json()

    @staticmethod
    def _parse_place(item: Dict[str, Any]) -> Optional[PlaceResult]:
        point = item.get("point") or {}
        if "lat" not in point or "lon" not in point:
            return None
        kinds = [kind for kind in (item.get("kinds") or "").split(",") if kind]
        preview = (item.get("preview") or {}).get("source")
        extract = (item.get("wikipedia_extracts") or {}).get("text")
        return PlaceResult(
            name=(item.get("name") or "").strip(),
            coordinates=Coordinates(lat=float(point["lat"]), lng=float(point["lon"])),
            kinds=kinds,
            preview_image=preview,
            extract_text=extract,
            rate=item.get("rate"),
        )

    async def _places_near(self, coordinates: Coordinates, radius_m: int, kinds: Sequence[str]) -> List[PlaceResult]:
        params = {
            "radius": radius_m,
            "lon": coordinates.lng,
            "lat": coordinates.lat,
            "kinds": ",".join(kinds),
            "format": "json",
            "limit": self.limit,
            "apikey": self.api_key,
        }
        data = await self._aget("/radius", params)
        if not isinstance(data, list):
            raise ValueError("expected a JSON list of places")
        places: List[PlaceResult] = []
        for item in data:
            place = self._parse_place(item)
            if place is not None:
                places.append(place)
        return places

    async def places_near(
        self, coordinates: Coordinates, radius_m: int, kinds: Sequence[str]
    ) -> Result[List[PlaceResult]]:
        return await capture(self.provider_id, lambda: self._places_near(coordinates, radius_m, kinds))


def create_places_client(settings: ApiSettings) -> OpenTripMap:
    """Instantiate the places client using project settings."""

    return OpenTripMap(settings.opentripmap_api_key)
