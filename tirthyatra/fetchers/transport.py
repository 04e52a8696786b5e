"""Train, flight and bus options between two places.

Rail and flight providers take station or airport codes. Free-text city names
are mapped through small lookup tables; anything else is treated as a code.
"""
from __future__ import annotations

import logging
import re
from datetime import date, timedelta
from typing import Dict, List, Optional

from tirthyatra.core.interfaces import FlightItinerary, FlightProvider, RailProvider, TrainResult
from tirthyatra.core.results import Failure, Result, Success
from tirthyatra.core.schemas import ContentType, Coordinates, TransportOption
from tirthyatra.fetchers.base import ContentFetcher, FetchRequest

logger = logging.getLogger(__name__)

STATION_CODES: Dict[str, str] = {
    "delhi": "NDLS",
    "new delhi": "NDLS",
    "mumbai": "CSMT",
    "kolkata": "HWH",
    "chennai": "MAS",
    "bengaluru": "SBC",
    "bangalore": "SBC",
    "hyderabad": "SC",
    "pune": "PUNE",
    "ahmedabad": "ADI",
    "jaipur": "JP",
    "lucknow": "LKO",
    "varanasi": "BSB",
    "tirupati": "TPTY",
    "haridwar": "HW",
    "rishikesh": "RKSH",
    "amritsar": "ASR",
    "puri": "PURI",
    "madurai": "MDU",
    "ujjain": "UJN",
    "shirdi": "SNSI",
    "vrindavan": "MTJ",
    "mathura": "MTJ",
    "ayodhya": "AY",
    "dwarka": "DWK",
}

AIRPORT_CODES: Dict[str, str] = {
    "delhi": "DEL",
    "new delhi": "DEL",
    "mumbai": "BOM",
    "kolkata": "CCU",
    "chennai": "MAA",
    "bengaluru": "BLR",
    "bangalore": "BLR",
    "hyderabad": "HYD",
    "pune": "PNQ",
    "ahmedabad": "AMD",
    "jaipur": "JAI",
    "lucknow": "LKO",
    "goa": "GOI",
    "varanasi": "VNS",
    "tirupati": "TIR",
    "haridwar": "DED",
    "rishikesh": "DED",
    "amritsar": "ATQ",
    "puri": "BBI",
    "madurai": "IXM",
    "ujjain": "IDR",
    "shirdi": "SAG",
    "vrindavan": "AGR",
    "mathura": "AGR",
    "ayodhya": "AYJ",
    "dwarka": "JGA",
}

DEFAULT_LEAD_DAYS = 7
_NON_LETTERS = re.compile(r"[^A-Za-z]")


def _lookup_code(name: str, table: Dict[str, str], length: int) -> str:
    key = (name or "").strip().lower()
    if key in table:
        return table[key]
    return _NON_LETTERS.sub("", name or "").upper()[:length]


def station_code(name: str) -> str:
    """Railway station code for a city name; unknown names become a 4-letter code."""

    return _lookup_code(name, STATION_CODES, 4)


def airport_code(name: str) -> str:
    """IATA airport code for a city name; unknown names become a 3-letter code."""

    return _lookup_code(name, AIRPORT_CODES, 3)


def clock_time(timestamp: str) -> str:
    """``HH:MM`` out of an ISO timestamp, or the input unchanged."""

    if "T" in timestamp:
        return timestamp.split("T", 1)[1][:5]
    return timestamp


class TransportFetcher(ContentFetcher[TransportOption]):
    content_type = ContentType.TRANSPORT
    cap = 6
    mode: str = ""

    def can_fetch_live(self, request: FetchRequest) -> bool:
        return bool(request.origin.strip() and request.destination.strip())

    async def resolve_context(self, request: FetchRequest) -> Coordinates:
        return self.fallback_context(request)

    async def custom_records(self, request: FetchRequest) -> List[TransportOption]:
        records = await super().custom_records(request)
        return [record for record in records if record.type == self.mode]


class TrainFetcher(TransportFetcher):
    mode = "train"
    provider: RailProvider

    @staticmethod
    def to_option(train: TrainResult, preferred_class: Optional[str]) -> Optional[TransportOption]:
        if not train.fare_tiers:
            return None
        if preferred_class and preferred_class.upper() in train.fare_tiers:
            travel_class = preferred_class.upper()
        else:
            travel_class = min(train.fare_tiers, key=train.fare_tiers.get)
        name = f"{train.name} ({train.number})" if train.number else train.name
        return TransportOption(
            type="train",
            name=name,
            departure=train.departure,
            arrival=train.arrival,
            duration=train.duration,
            price=max(1, train.fare_tiers[travel_class]),
            travel_class=travel_class,
        )

    async def fetch_live(self, request: FetchRequest, context: Coordinates) -> Result[List[TransportOption]]:
        token = await self.provider.access_token()
        if isinstance(token, Failure):
            return token
        result = await self.provider.trains_between(
            station_code(request.origin), station_code(request.destination), token.value
        )
        if isinstance(result, Failure):
            return result
        options = [self.to_option(train, request.transport_class) for train in result.value]
        return Success([option for option in options if option is not None])

    def mock_records(self, request: FetchRequest, context: Coordinates) -> List[TransportOption]:
        return self.mock.trains(request.origin, request.destination)


class FlightFetcher(TransportFetcher):
    mode = "flight"
    provider: FlightProvider

    @staticmethod
    def to_option(flight: FlightItinerary) -> TransportOption:
        return TransportOption(
            type="flight",
            name=flight.flight_number,
            departure=clock_time(flight.departure),
            arrival=clock_time(flight.arrival),
            duration=flight.duration,
            price=max(1, round(flight.price)),
            travel_class=flight.cabin.replace("_", " ").title(),
        )

    async def fetch_live(self, request: FetchRequest, context: Coordinates) -> Result[List[TransportOption]]:
        token = await self.provider.access_token()
        if isinstance(token, Failure):
            return token
        departure = request.start_date or date.today() + timedelta(days=DEFAULT_LEAD_DAYS)
        result = await self.provider.search_flights(
            airport_code(request.origin), airport_code(request.destination), departure, token.value
        )
        if isinstance(result, Failure):
            return result
        return Success([self.to_option(flight) for flight in result.value])

    def mock_records(self, request: FetchRequest, context: Coordinates) -> List[TransportOption]:
        return self.mock.flights(request.origin, request.destination)


class BusFetcher(TransportFetcher):
    """Buses have no live provider; only custom and mock entries are returned."""

    mode = "bus"

    async def fetch_live(self, request: FetchRequest, context: Coordinates) -> Result[List[TransportOption]]:
        return Success([])

    def mock_records(self, request: FetchRequest, context: Coordinates) -> List[TransportOption]:
        return self.mock.buses(request.origin, request.destination)
