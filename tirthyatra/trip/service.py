from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional, Sequence

from tirthyatra.core.config import ApiSettings
from tirthyatra.core.interfaces import (
    FlightProvider,
    GeocodingProvider,
    HotelProvider,
    PlacesProvider,
    RailProvider,
    TextGenerator,
)
from tirthyatra.core.results import Failure
from tirthyatra.core.schemas import (
    ApiHealthStatus,
    GuideResult,
    HealthSummary,
    TransportOption,
    TripQuery,
    TripResults,
)
from tirthyatra.core.validation import sanitize_text, validate_destination, validate_itinerary_params, validate_preferences
from tirthyatra.fetchers import (
    AttractionFetcher,
    BusFetcher,
    FetchRequest,
    FlightFetcher,
    HotelFetcher,
    TempleFetcher,
    TrainFetcher,
)
from tirthyatra.mock_data import MockDataGenerator
from tirthyatra.services.amadeus import create_amadeus_client
from tirthyatra.services.geocoding import CoordinateResolver, create_geocoder
from tirthyatra.services.health import ApiHealthTracker
from tirthyatra.services.hotels import create_hotels_client
from tirthyatra.services.llm import build_guide_prompt, create_text_generator, fallback_guide
from tirthyatra.services.places import create_places_client
from tirthyatra.services.rail import create_rail_client
from tirthyatra.storage import CustomDataStore, FileBlobStorage, LocalCustomBackend, create_firestore_store

logger = logging.getLogger(__name__)


class TripPlannerService:
    """Container for the fetchers and every collaborator they share.

    One instance lives for the whole process: the health tracker, custom data
    store and provider clients are shared by every trip query. Construct it
    with ``from_settings`` in production and with fakes in tests.

    Attributes:
        tracker: provider health cache gating live calls
        resolver: destination name to coordinates
        store: custom entries (remote per user, local otherwise)
        mock: fallback data generator
        generator: language model for narrative guides, ``None`` when unconfigured
    """

    def __init__(
        self,
        *,
        store: CustomDataStore,
        tracker: Optional[ApiHealthTracker] = None,
        mock: Optional[MockDataGenerator] = None,
        geocoder: Optional[GeocodingProvider] = None,
        places: Optional[PlacesProvider] = None,
        hotels: Optional[HotelProvider] = None,
        rail: Optional[RailProvider] = None,
        flights: Optional[FlightProvider] = None,
        generator: Optional[TextGenerator] = None,
    ) -> None:
        self.store = store
        self.tracker = tracker or ApiHealthTracker()
        self.mock = mock or MockDataGenerator()
        self.generator = generator
        self.providers = [provider for provider in (geocoder, places, hotels, rail, flights) if provider is not None]
        self.resolver = CoordinateResolver(geocoder, self.tracker)

        shared = {"store": self.store, "tracker": self.tracker, "mock": self.mock}
        self.temples = TempleFetcher(resolver=self.resolver, provider=places, **shared)
        self.attractions = AttractionFetcher(resolver=self.resolver, provider=places, **shared)
        self.hotels = HotelFetcher(provider=hotels, **shared)
        self.transport = {
            "train": TrainFetcher(provider=rail, **shared),
            "flight": FlightFetcher(provider=flights, **shared),
            "bus": BusFetcher(**shared),
        }

    @classmethod
    def from_settings(cls, settings: ApiSettings) -> "TripPlannerService":
        """Wire real provider clients and storage from configuration."""

        local = LocalCustomBackend(FileBlobStorage(settings.resolved_data_dir()))
        store = CustomDataStore(local, create_firestore_store(settings))
        return cls(
            store=store,
            geocoder=create_geocoder(settings),
            places=create_places_client(settings),
            hotels=create_hotels_client(settings),
            rail=create_rail_client(settings),
            flights=create_amadeus_client(settings),
            generator=create_text_generator(settings),
        )

    def __repr__(self) -> str:
        configured = [provider.provider_id for provider in self.providers if provider.is_configured()]
        return f"TripPlannerService(configured={configured}, generator={type(self.generator).__name__})"

    async def trip_results(self, query: TripQuery, user_id: Optional[str] = None) -> TripResults:
        """Temples, hotels, attractions and transport for one trip query.

        Invalid preferences are replaced with defaults and reported as
        warnings; the call only fails on programming errors.
        """

        destination = validate_destination(query.destination)
        preferences = validate_preferences(query.preference_payload())
        warnings = list(preferences.warnings)
        if destination.error:
            warnings.append(destination.error)

        prefs = preferences.sanitized
        request = FetchRequest(
            destination=destination.sanitized,
            origin=sanitize_text(query.origin or ""),
            budget=prefs.budget,
            travelers=prefs.travelers,
            start_date=query.start_date,
            end_date=query.end_date,
            transport_class=query.transport_class,
            user_id=user_id,
        )
        logger.info(f"Trip results for '{request.destination}' ({prefs.budget}, {prefs.transport})")

        temples, hotels, attractions, transport = await asyncio.gather(
            self.temples.fetch(request),
            self.hotels.fetch(request),
            self.attractions.fetch(request),
            self._transport_for(request, prefs.transport),
        )
        return TripResults(
            destination=request.destination,
            preferences=prefs,
            temples=temples,
            hotels=hotels,
            attractions=attractions,
            transport=transport,
            warnings=warnings,
        )

    async def _transport_for(self, request: FetchRequest, mode: str) -> List[TransportOption]:
        fetcher = self.transport.get(mode)
        if fetcher is None:
            logger.info(f"No transport options for mode '{mode}'")
            return []
        return await fetcher.fetch(request)

    async def transport_options(
        self,
        origin: str,
        destination: str,
        mode: str,
        user_id: Optional[str] = None,
        **extra: Any,
    ) -> List[TransportOption]:
        """Options for one transport mode; ``car`` and unknown modes yield nothing."""

        request = FetchRequest(
            origin=sanitize_text(origin or ""),
            destination=sanitize_text(destination or ""),
            user_id=user_id,
            **extra,
        )
        return await self._transport_for(request, (mode or "").strip().lower())

    async def generate_guide(
        self,
        origin: Any,
        destination: Any,
        duration: Any,
        budget: Any,
        highlights: Sequence[str] = (),
    ) -> GuideResult:
        validation = validate_itinerary_params(origin, destination, duration, budget)
        if not validation.is_valid:
            logger.info(f"Guide request rejected: {validation.errors}")
            return GuideResult(source="invalid", errors=validation.errors)

        params = validation.sanitized
        if self.generator is None:
            return GuideResult(text=fallback_guide(params, highlights), source="fallback")

        result = await self.generator.generate(build_guide_prompt(params, highlights))
        if isinstance(result, Failure):
            logger.warning(f"Guide generation failed ({result.error}); using template")
            return GuideResult(text=fallback_guide(params, highlights), source="fallback")
        return GuideResult(text=result.value, source="llm")

    async def test_providers(self) -> Dict[str, ApiHealthStatus]:
        """Probe every configured provider now, ignoring cached statuses."""

        targets = [
            (provider.provider_id, provider.test_url, provider.probe_headers())
            for provider in self.providers
            if provider.is_configured()
        ]
        if not targets:
            logger.info("No configured providers to test")
            return {}
        return await self.tracker.probe_all(targets)

    def provider_summary(self) -> HealthSummary:
        return self.tracker.summary()

    def reset_providers(self) -> None:
        self.tracker.reset()

    async def close(self) -> None:
        """Release HTTP clients held by providers and the health tracker."""

        for provider in self.providers:
            aclose = getattr(provider, "aclose", None)
            if aclose is not None:
                await aclose()
        await self.tracker.aclose()
