"""Narrow protocols for every external collaborator of the fetcher pipeline.

Fetchers depend only on these protocols; each real provider has one adapter in
``tirthyatra.services`` and tests substitute in-memory fakes.
"""
from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional, Protocol, Sequence

from pydantic import BaseModel, Field

from tirthyatra.core.results import Result
from tirthyatra.core.schemas import Coordinates, StoreResult


class PlaceResult(BaseModel):
    """Point of interest as returned by a places provider."""

    name: str = ""
    coordinates: Coordinates
    kinds: List[str] = Field(default_factory=list)
    preview_image: Optional[str] = None
    extract_text: Optional[str] = None
    rate: Optional[float] = None


class TrainResult(BaseModel):
    number: str = ""
    name: str
    departure: str
    arrival: str
    duration: str
    fare_tiers: Dict[str, int] = Field(default_factory=dict)


class FlightItinerary(BaseModel):
    carrier: str
    flight_number: str
    departure: str
    arrival: str
    duration: str
    price: float
    cabin: str = "ECONOMY"


class HotelResult(BaseModel):
    name: str
    rating: Optional[float] = None
    price: Optional[float] = None
    facilities: List[str] = Field(default_factory=list)
    photo: Optional[str] = None
    address: Optional[str] = None


class HealthCheckable(Protocol):
    """Providers expose the id and test request used by the health tracker."""

    provider_id: str
    test_url: str

    def probe_headers(self) -> Optional[Dict[str, str]]: ...

    def is_configured(self) -> bool: ...


class GeocodingProvider(HealthCheckable, Protocol):
    async def geocode(self, query: str) -> Result[Optional[Coordinates]]: ...


class PlacesProvider(HealthCheckable, Protocol):
    async def places_near(
        self, coordinates: Coordinates, radius_m: int, kinds: Sequence[str]
    ) -> Result[List[PlaceResult]]: ...


class RailProvider(HealthCheckable, Protocol):
    async def access_token(self) -> Result[str]: ...

    async def trains_between(self, from_station: str, to_station: str, token: str) -> Result[List[TrainResult]]: ...


class FlightProvider(HealthCheckable, Protocol):
    async def access_token(self) -> Result[str]: ...

    async def search_flights(
        self, origin: str, destination: str, departure_date: date, token: str
    ) -> Result[List[FlightItinerary]]: ...


class HotelProvider(HealthCheckable, Protocol):
    async def destination_id(self, name: str) -> Result[Optional[str]]: ...

    async def search_hotels(
        self, dest_id: str, checkin: date, checkout: date, adults: int
    ) -> Result[List[HotelResult]]: ...


class TextGenerator(Protocol):
    async def generate(self, prompt: str) -> Result[str]: ...


class RemoteDocumentStore(Protocol):
    """Per-user namespaced CRUD used by the custom data store."""

    async def add(self, user_id: str, collection: str, data: Dict[str, Any]) -> StoreResult: ...

    async def list(self, user_id: str, collection: str) -> StoreResult: ...

    async def update(self, user_id: str, collection: str, item_id: str, updates: Dict[str, Any]) -> StoreResult: ...

    async def delete(self, user_id: str, collection: str, item_id: str) -> StoreResult: ...

    async def get_preferences(self, user_id: str) -> StoreResult: ...

    async def save_preferences(self, user_id: str, preferences: Dict[str, Any]) -> StoreResult: ...


class LocalBlobStorage(Protocol):
    """Single-key durable storage for the unauthenticated custom data backend."""

    async def read(self, key: str) -> Optional[str]: ...

    async def write(self, key: str, text: str) -> None: ...
