"""Geocoding and coordinate resolution.

Public API:
    - OpenCageGeocoder: async OpenCage client
    - create_geocoder: factory building the client from settings
    - CoordinateResolver: total destination → coordinates resolver with static fallback
"""
from tirthyatra.services.geocoding.client import OpenCageGeocoder, create_geocoder
from tirthyatra.services.geocoding.resolver import (
    COUNTRY_CENTROID,
    STATIC_COORDINATES,
    CoordinateResolver,
    lookup_static,
)

__all__ = [
    "OpenCageGeocoder",
    "create_geocoder",
    "CoordinateResolver",
    "COUNTRY_CENTROID",
    "STATIC_COORDINATES",
    "lookup_static",
]
