"""Async client for the Booking.com hotel search API hosted on RapidAPI."""
from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional

import httpx

from tirthyatra.core.config import ApiSettings, is_usable_key
from tirthyatra.core.interfaces import HotelResult
from tirthyatra.core.results import Result, capture


class BookingHotels:
    """Destination lookup plus hotel search."""

    provider_id = "booking"

    def __init__(
        self,
        api_key: Optional[str],
        *,
        host: str = "booking-com.p.rapidapi.com",
        timeout_s: float = 15.0,
        currency: str = "INR",
    ) -> None:
        self.api_key = api_key
        self.host = host
        self.currency = currency
        self.base_url = f"https://{host}/v1/hotels"
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"accept": "application/json"},
            timeout=httpx.Timeout(timeout_s, connect=10.0),
        )

    @property
    def test_url(self) -> str:
        return f"{self.base_url}/locations?name=Varanasi&locale=en-gb"

    def probe_headers(self) -> Optional[Dict[str, str]]:
        return {"X-RapidAPI-Key": self.api_key or "", "X-RapidAPI-Host": self.host}

    def is_configured(self) -> bool:
        return is_usable_key(self.api_key)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _aget(self, path: str, params: Dict[str, Any]) -> Any:
        response = await self._client.get(path, params=params, headers=self.probe_headers())
        response.raise_for_status()
        return response.json()

    async def _destination_id(self, name: str) -> Optional[str]:
        data = await self._aget("/locations", {"name": name, "locale": "en-gb"})
        for item in data or []:
            if item.get("dest_type") == "city" and item.get("dest_id"):
                return str(item["dest_id"])
        if data:
            first = data[0]
            return str(first["dest_id"]) if first.get("dest_id") else None
        return None

    async def destination_id(self, name: str) -> Result[Optional[str]]:
        return await capture(self.provider_id, lambda: self._destination_id(name))

    async def _search_hotels(self, dest_id: str, checkin: date, checkout: date, adults: int) -> List[HotelResult]:
        params = {
            "dest_id": dest_id,
            "dest_type": "city",
            "checkin_date": checkin.isoformat(),
            "checkout_date": checkout.isoformat(),
            "adults_number": adults,
            "room_number": 1,
            "units": "metric",
            "order_by": "popularity",
            "filter_by_currency": self.currency,
            "locale": "en-gb",
        }
        data = await self._aget("/search", params)
        hotels: List[HotelResult] = []
        for item in data.get("result", []):
            name = item.get("hotel_name")
            if not name:
                continue
            review_score = item.get("review_score")
            facilities = item.get("hotel_facilities") or ""
            if isinstance(facilities, str):
                facilities = [part.strip() for part in facilities.split(",") if part.strip()]
            hotels.append(
                HotelResult(
                    name=name,
                    # Booking.com reviews are 0-10
                    rating=float(review_score) / 2.0 if review_score is not None else None,
                    price=item.get("min_total_price") or item.get("price_breakdown", {}).get("gross_price"),
                    facilities=[str(facility) for facility in facilities],
                    photo=item.get("max_photo_url") or item.get("main_photo_url"),
                    address=item.get("address") or item.get("city"),
                )
            )
        return hotels

    async def search_hotels(
        self, dest_id: str, checkin: date, checkout: date, adults: int
    ) -> Result[List[HotelResult]]:
        return await capture(self.provider_id, lambda: self._search_hotels(dest_id, checkin, checkout, adults))


def create_hotels_client(settings: ApiSettings) -> BookingHotels:
    """Instantiate the hotel client using project settings."""

    return BookingHotels(settings.rapid_api_key)
