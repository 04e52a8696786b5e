from contextlib import asynccontextmanager
from functools import lru_cache
from typing import AsyncGenerator

from fastapi import FastAPI

from tirthyatra.core.config import ApiSettings
from tirthyatra.trip.service import TripPlannerService


@lru_cache(maxsize=1)
def get_trip_service() -> TripPlannerService:
    settings = ApiSettings.from_env()
    return TripPlannerService.from_settings(settings)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    try:
        yield
    finally:
        # only close a service that was actually built during this process
        if get_trip_service.cache_info().currsize:
            await get_trip_service().close()
            get_trip_service.cache_clear()
