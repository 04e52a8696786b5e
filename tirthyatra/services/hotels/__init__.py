"""Booking.com hotel search integration.

Public API:
    - BookingHotels: async hotel search client
    - create_hotels_client: factory building the client from settings
"""
from tirthyatra.services.hotels.client import BookingHotels, create_hotels_client

__all__ = [
    "BookingHotels",
    "create_hotels_client",
]
