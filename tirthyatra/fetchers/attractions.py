from __future__ import annotations

from typing import List

from tirthyatra.core.interfaces import PlaceResult, PlacesProvider
from tirthyatra.core.results import Failure, Result, Success
from tirthyatra.core.schemas import PLACEHOLDER_IMAGE, Attraction, ContentType, Coordinates
from tirthyatra.fetchers.base import ContentFetcher, FetchRequest, describe

ATTRACTION_RADIUS_M = 15_000
ATTRACTION_KINDS = ("historic", "cultural", "natural")
DEFAULT_RATING = 4.0


def place_rating(rate) -> float:
    """Map OpenTripMap's 1-3 popularity rate (7 for heritage sites) onto 3.0-5.0 stars."""

    if not rate:
        return DEFAULT_RATING
    return min(5.0, 3.0 + 0.5 * float(rate))


class AttractionFetcher(ContentFetcher[Attraction]):
    content_type = ContentType.ATTRACTIONS
    cap = 6
    provider: PlacesProvider

    @staticmethod
    def to_attraction(place: PlaceResult) -> Attraction:
        category = place.kinds[0].replace("_", " ").title() if place.kinds else "Sightseeing"
        return Attraction(
            name=place.name,
            type=category,
            description=describe(place.extract_text, "Popular tourist attraction worth visiting"),
            rating=place_rating(place.rate),
            image_url=place.preview_image or PLACEHOLDER_IMAGE,
            coordinates=place.coordinates,
        )

    async def fetch_live(self, request: FetchRequest, context: Coordinates) -> Result[List[Attraction]]:
        result = await self.provider.places_near(context, ATTRACTION_RADIUS_M, ATTRACTION_KINDS)
        if isinstance(result, Failure):
            return result
        return Success([self.to_attraction(place) for place in result.value if place.name])

    def mock_records(self, request: FetchRequest, context: Coordinates) -> List[Attraction]:
        return self.mock.attractions(request.destination, context)
