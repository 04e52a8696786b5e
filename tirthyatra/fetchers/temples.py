from __future__ import annotations

from typing import List

from tirthyatra.core.interfaces import PlaceResult, PlacesProvider
from tirthyatra.core.results import Failure, Result, Success
from tirthyatra.core.schemas import PLACEHOLDER_IMAGE, ContentType, Coordinates, Temple
from tirthyatra.fetchers.base import ContentFetcher, FetchRequest, describe
from tirthyatra.mock_data import display_name

TEMPLE_RADIUS_M = 10_000
TEMPLE_KINDS = ("religion",)
DEFAULT_PUJA_TIMINGS = "5:00 AM - 12:00 PM, 4:00 PM - 9:00 PM"
# OpenTripMap popularity rate at which darshan booking is usually offered online
ONLINE_BOOKING_MIN_RATE = 3


class TempleFetcher(ContentFetcher[Temple]):
    """Temples and shrines around the destination."""

    content_type = ContentType.TEMPLES
    cap = 8
    provider: PlacesProvider

    def to_temple(self, place: PlaceResult, request: FetchRequest) -> Temple:
        return Temple(
            name=place.name,
            location=display_name(request.destination),
            puja_timings=DEFAULT_PUJA_TIMINGS,
            description=describe(place.extract_text, "Ancient temple with rich spiritual heritage"),
            image_url=place.preview_image or PLACEHOLDER_IMAGE,
            online_booking=(place.rate or 0) >= ONLINE_BOOKING_MIN_RATE,
            coordinates=place.coordinates,
        )

    async def fetch_live(self, request: FetchRequest, context: Coordinates) -> Result[List[Temple]]:
        result = await self.provider.places_near(context, TEMPLE_RADIUS_M, TEMPLE_KINDS)
        if isinstance(result, Failure):
            return result
        return Success([self.to_temple(place, request) for place in result.value if place.name])

    def mock_records(self, request: FetchRequest, context: Coordinates) -> List[Temple]:
        return self.mock.temples(request.destination, context)
