"""Pydantic data models for the pilgrimage trip planner.

This module contains the canonical records that flow between the content
fetchers and their callers, the user-contributed custom variants of those
records, and the request/result envelopes used by the trip service.

Key model categories:
- Coordinates, Temple, Hotel, Attraction, TransportOption: canonical content records
- Custom*: user-owned entries persisted by the custom data store
- ApiHealthStatus / HealthSummary: provider health bookkeeping
- *Validation: structured input-validation results (never raised as errors)
- TripQuery / TripResults / GuideResult: trip-level request and response envelopes
"""
from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Type, Union

from pydantic import BaseModel, ConfigDict, Field, computed_field

from tirthyatra.core.types import (
    BudgetTier,
    Lat,
    Lon,
    NonEmptyStr,
    PositivePrice,
    Rating,
    TransportMode,
    TransportPreference,
)

PLACEHOLDER_IMAGE = "/api/placeholder/300/200"


class RecordModel(BaseModel):
    """Base configuration shared by all canonical records."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class Coordinates(RecordModel):
    """Latitude/longitude pair, always finite and inside geographic ranges."""

    lat: Lat
    lng: Lon


class Temple(RecordModel):
    """Temple or shrine with darshan/puja information."""

    name: NonEmptyStr
    location: str
    puja_timings: str = Field(alias="pujaTimings")
    description: str
    image_url: str = Field(default=PLACEHOLDER_IMAGE, alias="imageUrl")
    online_booking: bool = Field(default=False, alias="onlineBooking")
    coordinates: Coordinates


class Hotel(RecordModel):
    """Accommodation option priced per night."""

    name: NonEmptyStr
    rating: Rating
    price: PositivePrice
    location: str
    amenities: List[str] = Field(default_factory=list)
    image_url: str = Field(default=PLACEHOLDER_IMAGE, alias="imageUrl")
    cancellation: str = ""


class Attraction(RecordModel):
    """Sightseeing place near the destination."""

    name: NonEmptyStr
    type: str
    description: str
    rating: Rating
    image_url: str = Field(default=PLACEHOLDER_IMAGE, alias="imageUrl")
    coordinates: Coordinates


class TransportOption(RecordModel):
    """Single intercity transport option (train, flight or bus)."""

    type: TransportMode
    name: NonEmptyStr
    departure: str
    arrival: str
    duration: str
    price: PositivePrice
    travel_class: str = Field(alias="class")


class ContentType(str, Enum):
    """Content types that accept user-contributed entries.

    Values double as the remote collection names.
    """

    TEMPLES = "temples"
    HOTELS = "hotels"
    ATTRACTIONS = "attractions"
    TRANSPORT = "transport"


class CustomEntryMixin(BaseModel):
    """Ownership metadata carried by every custom entry."""

    id: Optional[str] = None
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")

    def as_record(self) -> RecordModel:
        """Strip the ownership metadata and return the canonical record."""

        record_type = RECORD_TYPES[self.content_type()]
        return record_type.model_validate(
            self.model_dump(include=set(record_type.model_fields), by_alias=False)
        )

    @classmethod
    def content_type(cls) -> ContentType:
        raise NotImplementedError

    def match_text(self) -> str:
        """Free text matched against a destination name."""

        return getattr(self, "location", "") or ""


class CustomTemple(CustomEntryMixin, Temple):
    @classmethod
    def content_type(cls) -> ContentType:
        return ContentType.TEMPLES


class CustomHotel(CustomEntryMixin, Hotel):
    @classmethod
    def content_type(cls) -> ContentType:
        return ContentType.HOTELS


class CustomAttraction(CustomEntryMixin, Attraction):
    location: str = ""

    @classmethod
    def content_type(cls) -> ContentType:
        return ContentType.ATTRACTIONS


class CustomTransport(CustomEntryMixin, TransportOption):
    route: str = ""

    @classmethod
    def content_type(cls) -> ContentType:
        return ContentType.TRANSPORT

    def match_text(self) -> str:
        return self.route


CustomEntry = Union[CustomTemple, CustomHotel, CustomAttraction, CustomTransport]

RECORD_TYPES: Dict[ContentType, Type[RecordModel]] = {
    ContentType.TEMPLES: Temple,
    ContentType.HOTELS: Hotel,
    ContentType.ATTRACTIONS: Attraction,
    ContentType.TRANSPORT: TransportOption,
}

CUSTOM_TYPES: Dict[ContentType, Type[CustomEntryMixin]] = {
    ContentType.TEMPLES: CustomTemple,
    ContentType.HOTELS: CustomHotel,
    ContentType.ATTRACTIONS: CustomAttraction,
    ContentType.TRANSPORT: CustomTransport,
}


class ApiHealthStatus(BaseModel):
    """Outcome of the most recent connectivity check for one provider."""

    provider: str
    working: bool
    last_checked: int = Field(description="Epoch milliseconds of the last check")
    error: Optional[str] = None


class HealthSummary(BaseModel):
    """Aggregate view over every provider the tracker has seen."""

    total: int
    working: int
    failed: int
    providers: Dict[str, bool] = Field(default_factory=dict)


class StoreResult(BaseModel):
    """Envelope returned by remote document store operations."""

    success: bool
    data: Optional[Any] = None
    id: Optional[str] = None
    error: Optional[str] = None


class DestinationValidation(BaseModel):
    """Result of sanitising a free-text destination name."""

    sanitized: str = ""
    valid: bool
    recognized: bool = False
    error: Optional[str] = None


class Preferences(BaseModel):
    """Sanitised trip preferences with every field guaranteed usable."""

    budget: BudgetTier = "mid"
    duration: int = 3
    travelers: int = 2
    transport: TransportPreference = "train"


class PreferenceValidation(BaseModel):
    sanitized: Preferences
    warnings: List[str] = Field(default_factory=list)


class ItineraryParams(BaseModel):
    origin: str = ""
    destination: str = ""
    duration: Optional[int] = None
    budget: Optional[str] = None


class ItineraryValidation(BaseModel):
    """Blocking validation result for the itinerary-guide path."""

    sanitized: ItineraryParams
    errors: List[str] = Field(default_factory=list)

    @computed_field(return_type=bool)
    @property
    def is_valid(self) -> bool:
        return not self.errors


class TripQuery(BaseModel):
    """Parameters collected by the multi-step trip form."""

    origin: str = Field(default="", description="Home location of the traveller")
    destination: str = Field(..., description="Pilgrimage destination")
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    budget: Optional[str] = Field(default="mid", description="Budget tier")
    duration: Optional[Union[int, float, str]] = None
    travelers: Optional[Union[int, float, str]] = 2
    transport: Optional[str] = "train"
    transport_class: Optional[str] = None
    food_preference: Optional[str] = "veg"

    def preference_payload(self) -> Dict[str, Any]:
        """Raw preference values as expected by ``validate_preferences``."""

        duration = self.duration
        if duration is None and self.start_date and self.end_date:
            duration = (self.end_date - self.start_date).days + 1
        return {
            "budget": self.budget,
            "duration": duration,
            "travelers": self.travelers,
            "transport": self.transport,
        }


class TripResults(BaseModel):
    """Ephemeral aggregate returned for one trip query; never persisted."""

    destination: str
    preferences: Preferences
    temples: List[Temple] = Field(default_factory=list)
    hotels: List[Hotel] = Field(default_factory=list)
    attractions: List[Attraction] = Field(default_factory=list)
    transport: List[TransportOption] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)


class GuideResult(BaseModel):
    """Narrative itinerary guide or the validation errors that blocked it."""

    text: Optional[str] = None
    source: Literal["llm", "fallback", "invalid"]
    errors: List[str] = Field(default_factory=list)
