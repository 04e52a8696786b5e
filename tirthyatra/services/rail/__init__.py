"""Indian Rail integration.

Public API:
    - IndianRail: async trains-between-stations client
    - create_rail_client: factory building the client from settings
"""
from tirthyatra.services.rail.client import IndianRail, create_rail_client

__all__ = [
    "IndianRail",
    "create_rail_client",
]
