"""Amadeus flight search API integration.

Public API:
    - AmadeusFlights: async flight offers client with a cached OAuth token
    - create_amadeus_client: factory building the client from settings
    - FlightSearchInput: pydantic schema for flight search parameters
"""
from tirthyatra.services.amadeus.client import AmadeusFlights, create_amadeus_client, format_iso_duration
from tirthyatra.services.amadeus.schemas import FlightSearchInput

__all__ = [
    "AmadeusFlights",
    "create_amadeus_client",
    "format_iso_duration",
    "FlightSearchInput",
]
