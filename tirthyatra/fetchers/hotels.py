from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import List, Tuple

from tirthyatra.core.interfaces import HotelProvider, HotelResult
from tirthyatra.core.results import Failure, Result, Success
from tirthyatra.core.schemas import PLACEHOLDER_IMAGE, ContentType, Coordinates, Hotel
from tirthyatra.fetchers.base import ContentFetcher, FetchRequest
from tirthyatra.mock_data import BASE_HOTEL_PRICE, BUDGET_MULTIPLIERS, display_name

logger = logging.getLogger(__name__)

DEFAULT_LEAD_DAYS = 7
DEFAULT_HOTEL_RATING = 3.5


def stay_dates(request: FetchRequest, today: date | None = None) -> Tuple[date, date]:
    """Check-in/check-out for the live search; at least one night."""

    checkin = request.start_date or (today or date.today()) + timedelta(days=DEFAULT_LEAD_DAYS)
    checkout = request.end_date if request.end_date and request.end_date > checkin else checkin + timedelta(days=1)
    return checkin, checkout


class HotelFetcher(ContentFetcher[Hotel]):
    """Hotels at the destination, priced for the requested budget tier."""

    content_type = ContentType.HOTELS
    cap = 6
    provider: HotelProvider

    async def resolve_context(self, request: FetchRequest) -> Coordinates:
        # hotel search is by destination id, coordinates are never needed
        return self.fallback_context(request)

    def to_hotel(self, item: HotelResult, request: FetchRequest) -> Hotel:
        fallback_price = BASE_HOTEL_PRICE * BUDGET_MULTIPLIERS.get(request.budget, BUDGET_MULTIPLIERS["low"])
        rating = item.rating if item.rating is not None else DEFAULT_HOTEL_RATING
        return Hotel(
            name=item.name,
            rating=min(max(rating, 0.0), 5.0),
            price=max(1, round(item.price)) if item.price and item.price > 0 else round(fallback_price),
            location=item.address or display_name(request.destination),
            amenities=item.facilities[:6],
            image_url=item.photo or PLACEHOLDER_IMAGE,
            cancellation="Check with property",
        )

    async def fetch_live(self, request: FetchRequest, context: Coordinates) -> Result[List[Hotel]]:
        dest = await self.provider.destination_id(request.destination)
        if isinstance(dest, Failure):
            return dest
        if dest.value is None:
            logger.info(f"No hotel destination id for '{request.destination}'")
            return Success([])

        checkin, checkout = stay_dates(request)
        result = await self.provider.search_hotels(dest.value, checkin, checkout, max(1, request.travelers))
        if isinstance(result, Failure):
            return result
        return Success([self.to_hotel(item, request) for item in result.value])

    def mock_records(self, request: FetchRequest, context: Coordinates) -> List[Hotel]:
        return self.mock.hotels(request.destination, request.budget)
