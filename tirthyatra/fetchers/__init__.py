"""Content fetchers combining custom, live and mock data.

Public API:
    - FetchRequest: per-query parameters shared by every fetcher
    - ContentFetcher: the custom + live + mock template
    - TempleFetcher, AttractionFetcher, HotelFetcher
    - TrainFetcher, FlightFetcher, BusFetcher
    - station_code / airport_code: city-name lookups for transport providers
"""
from tirthyatra.fetchers.attractions import AttractionFetcher
from tirthyatra.fetchers.base import ContentFetcher, FetchRequest
from tirthyatra.fetchers.hotels import HotelFetcher
from tirthyatra.fetchers.temples import TempleFetcher
from tirthyatra.fetchers.transport import BusFetcher, FlightFetcher, TrainFetcher, airport_code, station_code

__all__ = [
    "FetchRequest",
    "ContentFetcher",
    "TempleFetcher",
    "AttractionFetcher",
    "HotelFetcher",
    "TrainFetcher",
    "FlightFetcher",
    "BusFetcher",
    "station_code",
    "airport_code",
]
