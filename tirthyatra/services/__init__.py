"""External service integrations for pilgrimage trip planning.

This package provides async clients for the data providers used by the
content fetchers, the health tracker that gates them, and LangChain tool
factories over the fetchers:

- OpenCage: destination geocoding (plus the static coordinate resolver)
- OpenTripMap: temples and attractions near a point
- Booking.com (RapidAPI): hotels
- Indian Rail: trains between stations
- Amadeus: flight offers
- xAI via LangChain: narrative itinerary guides

Each service module exports:
    - create_*_client: Factory to create the API client from ``ApiSettings``
    - The client class implementing the matching protocol in ``tirthyatra.core.interfaces``

Example Usage:
    >>> from tirthyatra.services.places import create_places_client
    >>> from tirthyatra.core.config import ApiSettings
    >>>
    >>> settings = ApiSettings.from_env()
    >>> client = create_places_client(settings)
"""

from tirthyatra.services.amadeus import AmadeusFlights, FlightSearchInput, create_amadeus_client
from tirthyatra.services.geocoding import CoordinateResolver, OpenCageGeocoder, create_geocoder
from tirthyatra.services.health import ApiHealthTracker
from tirthyatra.services.hotels import BookingHotels, create_hotels_client
from tirthyatra.services.llm import ChatTextGenerator, create_text_generator
from tirthyatra.services.oauth import ClientCredentialsToken
from tirthyatra.services.places import OpenTripMap, create_places_client
from tirthyatra.services.rail import IndianRail, create_rail_client
from tirthyatra.services.tools import create_trip_data_tools

__all__ = [
    # Amadeus
    "AmadeusFlights",
    "create_amadeus_client",
    "FlightSearchInput",
    # Geocoding
    "OpenCageGeocoder",
    "create_geocoder",
    "CoordinateResolver",
    # Health
    "ApiHealthTracker",
    "ClientCredentialsToken",
    # Booking.com
    "BookingHotels",
    "create_hotels_client",
    # OpenTripMap
    "OpenTripMap",
    "create_places_client",
    # Indian Rail
    "IndianRail",
    "create_rail_client",
    # Language model
    "ChatTextGenerator",
    "create_text_generator",
    # Agent tools
    "create_trip_data_tools",
]
