"""OpenTripMap points-of-interest integration.

Public API:
    - OpenTripMap: async places client
    - create_places_client: factory building the client from settings
"""
from tirthyatra.services.places.client import OpenTripMap, create_places_client

__all__ = [
    "OpenTripMap",
    "create_places_client",
]
