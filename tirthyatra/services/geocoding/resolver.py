"""Destination name to coordinates, with a static fallback table."""
from __future__ import annotations

import logging
from typing import Dict, Optional

from tirthyatra.core.interfaces import GeocodingProvider
from tirthyatra.core.results import Failure
from tirthyatra.core.schemas import Coordinates
from tirthyatra.core.validation import validate_destination
from tirthyatra.services.health import ApiHealthTracker

logger = logging.getLogger(__name__)

# Geographic centre of India, returned for names the table does not know.
COUNTRY_CENTROID = Coordinates(lat=20.5937, lng=78.9629)

STATIC_COORDINATES: Dict[str, Coordinates] = {
    name: Coordinates(lat=lat, lng=lng)
    for name, (lat, lng) in {
        "varanasi": (25.3176, 82.9739),
        "kashi": (25.3176, 82.9739),
        "tirupati": (13.6288, 79.4192),
        "rishikesh": (30.0869, 78.2676),
        "haridwar": (29.9457, 78.1642),
        "amritsar": (31.6340, 74.8723),
        "puri": (19.8135, 85.8312),
        "madurai": (9.9252, 78.1198),
        "ujjain": (23.1765, 75.7885),
        "shirdi": (19.7645, 74.4769),
        "vrindavan": (27.5650, 77.6593),
        "mathura": (27.4924, 77.6737),
        "ayodhya": (26.7922, 82.1998),
        "kedarnath": (30.7346, 79.0669),
        "badrinath": (30.7433, 79.4938),
        "dwarka": (22.2394, 68.9678),
        "somnath": (20.8880, 70.4012),
        "rameswaram": (9.2876, 79.3129),
        "bodh gaya": (24.6961, 84.9869),
        "pushkar": (26.4899, 74.5511),
        "katra": (32.9916, 74.9318),
        "vaishno devi": (33.0308, 74.9490),
        "kanchipuram": (12.8342, 79.7036),
        "guruvayur": (10.5945, 76.0369),
        "prayagraj": (25.4358, 81.8463),
        "nashik": (19.9975, 73.7898),
        "omkareshwar": (22.2450, 76.1510),
        "delhi": (28.6139, 77.2090),
        "mumbai": (19.0760, 72.8777),
    }.items()
}


def lookup_static(name: str) -> Optional[Coordinates]:
    return STATIC_COORDINATES.get(name.strip().lower())


class CoordinateResolver:
    """Total function from destination name to coordinates; never raises."""

    def __init__(self, geocoder: Optional[GeocodingProvider], tracker: ApiHealthTracker) -> None:
        self.geocoder = geocoder
        self.tracker = tracker

    def _fallback(self, name: str) -> Coordinates:
        return lookup_static(name) or COUNTRY_CENTROID

    async def _live(self, name: str) -> Optional[Coordinates]:
        geocoder = self.geocoder
        if geocoder is None or not geocoder.is_configured():
            return None

        provider = geocoder.provider_id
        if not await self.tracker.ensure_live(provider, geocoder.test_url, geocoder.probe_headers()):
            return None

        result = await geocoder.geocode(name)
        if isinstance(result, Failure):
            self.tracker.record(provider, False, str(result.error))
            return None
        if result.value is None:
            logger.info(f"Geocoder returned no results for '{name}'")
        return result.value

    async def resolve(self, destination: object) -> Coordinates:
        validation = validate_destination(destination)
        name = validation.sanitized
        if not validation.valid:
            return COUNTRY_CENTROID

        known = lookup_static(name)
        try:
            coordinates = await self._live(name)
        except Exception:
            logger.exception(f"Unexpected error while geocoding '{name}'")
            coordinates = None

        if coordinates is not None:
            return coordinates
        return known or COUNTRY_CENTROID
