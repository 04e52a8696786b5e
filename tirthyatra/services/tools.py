"""LangChain tools exposing the trip data fetchers to agents."""
from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, Any, Dict, List, Literal, Optional

from langchain_core.tools import StructuredTool
from pydantic import BaseModel, Field

from tirthyatra.core.validation import sanitize_text

if TYPE_CHECKING:
    from tirthyatra.trip.service import TripPlannerService


class DestinationSearchInput(BaseModel):
    destination: str = Field(..., description="Pilgrimage destination, e.g. 'Varanasi'")


class HotelSearchInput(BaseModel):
    destination: str = Field(..., description="City to stay in")
    budget: Literal["low", "mid", "high", "luxury"] = Field("mid", description="Budget tier")
    travelers: int = Field(2, ge=1, le=20, description="Number of guests")
    check_in: Optional[date] = Field(None, description="Check-in date (YYYY-MM-DD)")
    check_out: Optional[date] = Field(None, description="Check-out date (YYYY-MM-DD)")


class TransportSearchInput(BaseModel):
    origin: str = Field(..., description="Departure city or station/airport code")
    destination: str = Field(..., description="Arrival city or station/airport code")
    mode: Literal["train", "flight", "bus", "car"] = Field("train", description="Transport mode")
    departure_date: Optional[date] = Field(None, description="Travel date (YYYY-MM-DD)")


def _dump(records) -> List[Dict[str, Any]]:
    return [record.model_dump(mode="json", by_alias=True) for record in records]


def create_trip_data_tools(service: "TripPlannerService") -> List[StructuredTool]:
    """Build the temple, hotel, attraction and transport search tools for ``service``."""

    from tirthyatra.fetchers import FetchRequest

    async def _temples(destination: str) -> List[Dict[str, Any]]:
        return _dump(await service.temples.fetch(FetchRequest(destination=sanitize_text(destination))))

    async def _attractions(destination: str) -> List[Dict[str, Any]]:
        return _dump(await service.attractions.fetch(FetchRequest(destination=sanitize_text(destination))))

    async def _hotels(**kwargs) -> List[Dict[str, Any]]:
        payload = HotelSearchInput(**kwargs)
        request = FetchRequest(
            destination=sanitize_text(payload.destination),
            budget=payload.budget,
            travelers=payload.travelers,
            start_date=payload.check_in,
            end_date=payload.check_out,
        )
        return _dump(await service.hotels.fetch(request))

    async def _transport(**kwargs) -> List[Dict[str, Any]]:
        payload = TransportSearchInput(**kwargs)
        options = await service.transport_options(
            payload.origin, payload.destination, payload.mode, start_date=payload.departure_date
        )
        return _dump(options)

    return [
        StructuredTool.from_function(
            name="search_temples_tool",
            description="Find temples and shrines at a pilgrimage destination with darshan timings.",
            coroutine=_temples,
            args_schema=DestinationSearchInput,
        ),
        StructuredTool.from_function(
            name="search_hotels_tool",
            description="Find hotels at a destination priced for a budget tier (low, mid, high, luxury).",
            coroutine=_hotels,
            args_schema=HotelSearchInput,
        ),
        StructuredTool.from_function(
            name="search_attractions_tool",
            description="Find sightseeing attractions near a destination.",
            coroutine=_attractions,
            args_schema=DestinationSearchInput,
        ),
        StructuredTool.from_function(
            name="search_transport_tool",
            description="Find train, flight or bus options between two cities.",
            coroutine=_transport,
            args_schema=TransportSearchInput,
        ),
    ]
