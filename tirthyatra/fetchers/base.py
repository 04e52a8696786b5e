"""Shared custom + live + mock pipeline behind every content fetcher.

Each fetcher loads matching custom entries, optionally calls its live
provider (gated by the API health tracker), generates mock records, and
merges the three sources by name. A fetcher never raises: unexpected errors
are logged and the caller still receives custom and mock data.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict

from tirthyatra.core.interfaces import HealthCheckable
from tirthyatra.core.merging import merge_by_name
from tirthyatra.core.results import Failure, Result
from tirthyatra.core.schemas import ContentType, Coordinates, RecordModel
from tirthyatra.mock_data import MockDataGenerator
from tirthyatra.services.geocoding.resolver import COUNTRY_CENTROID, CoordinateResolver, lookup_static
from tirthyatra.services.health import ApiHealthTracker
from tirthyatra.storage.custom_store import CustomDataStore

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=RecordModel)


class FetchRequest(BaseModel):
    """Everything a fetcher may need from one trip query."""

    model_config = ConfigDict(frozen=True)

    destination: str
    origin: str = ""
    budget: str = "mid"
    travelers: int = 2
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    transport_class: Optional[str] = None
    user_id: Optional[str] = None


class ContentFetcher(Generic[R]):
    """Template for one content type; subclasses supply the live and mock steps."""

    content_type: ContentType
    cap: int = 6

    def __init__(
        self,
        *,
        store: CustomDataStore,
        tracker: ApiHealthTracker,
        mock: MockDataGenerator,
        resolver: Optional[CoordinateResolver] = None,
        provider: Optional[HealthCheckable] = None,
    ) -> None:
        self.store = store
        self.tracker = tracker
        self.mock = mock
        self.resolver = resolver
        self.provider = provider

    @property
    def label(self) -> str:
        return type(self).__name__

    async def custom_records(self, request: FetchRequest) -> List[R]:
        if not request.destination.strip():
            return []
        try:
            entries = await self.store.list(self.content_type, request.destination, user_id=request.user_id)
        except Exception:
            logger.exception(f"{self.label}: loading custom {self.content_type.value} failed")
            return []
        return [entry.as_record() for entry in entries]

    async def resolve_context(self, request: FetchRequest) -> Coordinates:
        """Coordinates used for live lookups and mock jitter."""

        if self.resolver is None:
            return self.fallback_context(request)
        return await self.resolver.resolve(request.destination)

    def fallback_context(self, request: FetchRequest) -> Coordinates:
        return lookup_static(request.destination or "") or COUNTRY_CENTROID

    def can_fetch_live(self, request: FetchRequest) -> bool:
        return True

    async def fetch_live(self, request: FetchRequest, context: Coordinates) -> Result[List[R]]:
        raise NotImplementedError

    def mock_records(self, request: FetchRequest, context: Coordinates) -> List[R]:
        raise NotImplementedError

    async def live_records(self, request: FetchRequest, context: Coordinates) -> List[R]:
        provider = self.provider
        if provider is None or not provider.is_configured() or not self.can_fetch_live(request):
            return []
        if not await self.tracker.ensure_live(provider.provider_id, provider.test_url, provider.probe_headers()):
            return []

        result = await self.fetch_live(request, context)
        if isinstance(result, Failure):
            logger.warning(f"{self.label}: live data unavailable ({result.error}); using fallback data")
            self.tracker.record(provider.provider_id, False, str(result.error))
            return []
        logger.debug(f"{self.label}: {len(result.value)} live records")
        return list(result.value)

    async def fetch(self, request: FetchRequest) -> List[R]:
        custom = await self.custom_records(request)
        try:
            context = await self.resolve_context(request)
            live = await self.live_records(request, context)
            mock = self.mock_records(request, context)
        except Exception:
            logger.exception(f"{self.label}: pipeline failed for '{request.destination}'; returning fallback data")
            try:
                mock = self.mock_records(request, self.fallback_context(request))
            except Exception:
                logger.exception(f"{self.label}: fallback data generation failed")
                mock = []
            return merge_by_name([custom, mock], self.cap)

        merged = merge_by_name([custom, live, mock], self.cap)
        logger.info(
            f"{self.label}: {len(merged)} records for '{request.destination}' "
            f"(custom={len(custom)}, live={len(live)}, mock={len(mock)})"
        )
        return merged


def describe(value: Any, default: str) -> str:
    text = (value or "").strip() if isinstance(value, str) else ""
    return text or default
