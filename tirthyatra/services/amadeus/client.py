from __future__ import annotations

import json
import logging
import re
from datetime import date
from typing import Any, Dict, List, Optional

import httpx

from tirthyatra.core.config import ApiSettings, is_usable_key
from tirthyatra.core.interfaces import FlightItinerary
from tirthyatra.core.results import FetchError, Failure, Result, Success, capture
from tirthyatra.services.amadeus.schemas import FlightSearchInput
from tirthyatra.services.oauth import ClientCredentialsToken

logger = logging.getLogger(__name__)

_ISO_DURATION = re.compile(r"^PT(?:(\d+)H)?(?:(\d+)M)?$")


def format_iso_duration(value: str) -> str:
    """``PT1H45M`` -> ``1h 45m``; unknown formats are returned unchanged."""

    match = _ISO_DURATION.match(value or "")
    if not match:
        return value or ""
    hours, minutes = (int(part or 0) for part in match.groups())
    return f"{hours}h {minutes:02d}m"


def _format_response_error(response: httpx.Response) -> str:
    """Return a human-friendly message for Amadeus error bodies."""

    status = response.status_code
    details = None
    raw_body = response.text
    if raw_body:
        try:
            parsed = json.loads(raw_body)
        except json.JSONDecodeError:
            details = raw_body.strip()
        else:
            errors = parsed.get("errors") if isinstance(parsed, dict) else None
            if isinstance(errors, list):
                parts = []
                for item in errors:
                    if not isinstance(item, dict):
                        continue
                    section = " ".join(filter(None, [str(item.get("code") or ""), item.get("title")]))
                    detail = item.get("detail")
                    if detail:
                        section = f"{section}: {detail}" if section else detail
                    if section:
                        parts.append(section)
                if parts:
                    details = "; ".join(parts)
            if details is None and isinstance(parsed, dict):
                for key in ("error_description", "message", "error"):
                    if isinstance(parsed.get(key), str):
                        details = parsed[key]
                        break
    prefix = f"HTTP {status}"
    return f"{prefix}: {details}" if details else prefix


class AmadeusFlights:
    """Flight offers search on the Amadeus self-service API."""

    provider_id = "amadeus"

    def __init__(
        self,
        client_id: Optional[str],
        client_secret: Optional[str],
        *,
        hostname: str = "test",
        timeout_s: float = 15.0,
    ) -> None:
        self.client_id = client_id
        self.client_secret = client_secret
        host = "api.amadeus.com" if hostname == "production" else "test.api.amadeus.com"
        self.base_url = f"https://{host}"
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"accept": "application/json"},
            timeout=httpx.Timeout(timeout_s, connect=10.0),
        )
        self._token = ClientCredentialsToken(
            self.provider_id,
            f"{self.base_url}/v1/security/oauth2/token",
            client_id,
            client_secret,
            client=self._client,
        )

    @property
    def test_url(self) -> str:
        return f"{self.base_url}/v1/reference-data/locations?keyword=DEL&subType=AIRPORT"

    def probe_headers(self) -> Optional[Dict[str, str]]:
        return None

    def is_configured(self) -> bool:
        return is_usable_key(self.client_id) and is_usable_key(self.client_secret)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def access_token(self) -> Result[str]:
        return await self._token.get()

    @staticmethod
    def _parse_offer(offer: Dict[str, Any]) -> FlightItinerary:
        itinerary = offer["itineraries"][0]
        segments = itinerary["segments"]
        first, last = segments[0], segments[-1]
        cabin = "ECONOMY"
        pricings = offer.get("travelerPricings") or []
        if pricings:
            fare_details = pricings[0].get("fareDetailsBySegment") or []
            if fare_details:
                cabin = fare_details[0].get("cabin", cabin)
        return FlightItinerary(
            carrier=first["carrierCode"],
            flight_number=f"{first['carrierCode']}-{first['number']}",
            departure=first["departure"]["at"],
            arrival=last["arrival"]["at"],
            duration=format_iso_duration(itinerary.get("duration", "")),
            price=float(offer["price"]["total"]),
            cabin=cabin,
        )

    async def _search(self, payload: FlightSearchInput, token: str) -> List[FlightItinerary]:
        response = await self._client.get(
            "/v2/shopping/flight-offers",
            params=payload.model_dump(mode="json", exclude_none=True),
            headers={"Authorization": f"Bearer {token}"},
        )
        if response.status_code == 401:
            self._token.invalidate()
        if response.is_error:
            logger.warning(f"Amadeus search failed: {_format_response_error(response)}")
        response.raise_for_status()
        return [self._parse_offer(offer) for offer in response.json().get("data", [])]

    async def search_flights(
        self, origin: str, destination: str, departure_date: date, token: str
    ) -> Result[List[FlightItinerary]]:
        try:
            payload = FlightSearchInput(
                originLocationCode=origin,
                destinationLocationCode=destination,
                departureDate=departure_date,
            )
        except ValueError as exc:
            return Failure(FetchError("malformed", str(exc), self.provider_id))
        result = await capture(self.provider_id, lambda: self._search(payload, token))
        if isinstance(result, Success):
            logger.info(f"Amadeus returned {len(result.value)} offers for {origin}->{destination}")
        return result


def create_amadeus_client(settings: ApiSettings, *, hostname: str = "test") -> AmadeusFlights:
    """Instantiate the Amadeus client using project configuration."""

    return AmadeusFlights(settings.amadeus_api_key, settings.amadeus_api_secret, hostname=hostname)
