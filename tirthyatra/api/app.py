"""FastAPI surface for the pilgrimage trip planner."""
from __future__ import annotations

import os
# Load environment variables from .env file
from dotenv import load_dotenv

# Load .env file before any other imports that might need environment variables
load_dotenv()


import logging
from typing import Any, Dict, List, Optional

from fastapi import Body, FastAPI, Header, HTTPException, Query, status
from fastapi.middleware.cors import CORSMiddleware

from tirthyatra.api.dependencies import get_trip_service, lifespan
from tirthyatra.api.schemas import DeleteResponse, GuideRequest, ProviderStatusResponse, TripResultsRequest
from tirthyatra.core.config import ApiSettings
from tirthyatra.core.schemas import ApiHealthStatus, ContentType, GuideResult, HealthSummary, TripResults

logger = logging.getLogger(__name__)

try:  # pragma: no cover - exercised through import side effects
    import sentry_sdk
except ImportError:  # pragma: no cover - only triggers in lean environments
    sentry_sdk = None  # type: ignore[assignment]
else:  # pragma: no cover - runtime configuration
    if os.getenv("SENTRY_DSN"):
        sentry_sdk.init(
            dsn=os.getenv("SENTRY_DSN"),
            enable_logs=True,
            traces_sample_rate=1.0,
        )

app = FastAPI(title="Tirth Yatra Planner API", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=ApiSettings.from_env().allowed_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _entry_json(entry) -> Dict[str, Any]:
    return entry.model_dump(mode="json", by_alias=True)


@app.post("/trip/results", response_model=TripResults)
async def trip_results(
    payload: TripResultsRequest,
    x_user_id: Optional[str] = Header(default=None),
) -> TripResults:
    """Collect temples, hotels, attractions and transport for a destination.

    Every section is always populated: custom entries first, live provider
    data when available, curated or generated fallback data otherwise.
    Invalid preferences are replaced with defaults and listed in ``warnings``.

    Example JSON payload:
        ```json
        {
            "origin": "Delhi",
            "destination": "Varanasi",
            "budget": "mid",
            "duration": 3,
            "travelers": 2,
            "transport": "train"
        }
        ```
    """

    logger.info(f"Trip results request: {payload.origin or '?'} -> {payload.destination}")
    service = get_trip_service()
    try:
        return await service.trip_results(payload, user_id=x_user_id)
    except ValueError as exc:
        logger.error(f"Value error during trip results: {str(exc)}")
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except Exception as exc:
        logger.error(f"Unexpected error during trip results: {str(exc)}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(exc)) from exc


@app.post("/itinerary/guide", response_model=GuideResult)
async def itinerary_guide(payload: GuideRequest) -> GuideResult:
    """Generate a narrative guide; 400 with the validation errors when input is invalid."""

    service = get_trip_service()
    try:
        result = await service.generate_guide(
            payload.origin,
            payload.destination,
            payload.duration,
            payload.budget,
            highlights=payload.highlights,
        )
    except Exception as exc:
        logger.error(f"Unexpected error during guide generation: {str(exc)}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(exc)) from exc

    if result.source == "invalid":
        raise HTTPException(status_code=400, detail=result.errors)
    return result


@app.get("/custom/{content_type}")
async def list_custom(
    content_type: ContentType,
    destination: Optional[str] = Query(default=None),
    x_user_id: Optional[str] = Header(default=None),
) -> List[Dict[str, Any]]:
    service = get_trip_service()
    try:
        entries = await service.store.list(content_type, destination, user_id=x_user_id)
    except Exception as exc:
        logger.error(f"Unexpected error listing custom {content_type.value}: {str(exc)}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    return [_entry_json(entry) for entry in entries]


@app.post("/custom/{content_type}", status_code=status.HTTP_201_CREATED)
async def add_custom(
    content_type: ContentType,
    payload: Dict[str, Any] = Body(...),
    x_user_id: Optional[str] = Header(default=None),
) -> Dict[str, Any]:
    logger.info(f"Adding custom {content_type.value} entry")
    service = get_trip_service()
    try:
        entry = await service.store.add(content_type, payload, user_id=x_user_id)
    except ValueError as exc:
        logger.error(f"Invalid custom {content_type.value} entry: {str(exc)}")
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except Exception as exc:
        logger.error(f"Unexpected error adding custom {content_type.value}: {str(exc)}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    return _entry_json(entry)


@app.patch("/custom/{content_type}/{item_id}")
async def update_custom(
    content_type: ContentType,
    item_id: str,
    payload: Dict[str, Any] = Body(...),
    x_user_id: Optional[str] = Header(default=None),
) -> Dict[str, Any]:
    service = get_trip_service()
    try:
        entry = await service.store.update(content_type, item_id, payload, user_id=x_user_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=f"No custom {content_type.value} entry '{item_id}'") from exc
    except ValueError as exc:
        logger.error(f"Invalid update for {content_type.value}/{item_id}: {str(exc)}")
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except Exception as exc:
        logger.error(f"Unexpected error updating {content_type.value}/{item_id}: {str(exc)}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    return _entry_json(entry)


@app.delete("/custom/{content_type}/{item_id}", response_model=DeleteResponse)
async def delete_custom(
    content_type: ContentType,
    item_id: str,
    x_user_id: Optional[str] = Header(default=None),
) -> DeleteResponse:
    service = get_trip_service()
    try:
        await service.store.delete(content_type, item_id, user_id=x_user_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=f"No custom {content_type.value} entry '{item_id}'") from exc
    except Exception as exc:
        logger.error(f"Unexpected error deleting {content_type.value}/{item_id}: {str(exc)}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    return DeleteResponse(deleted=item_id, type=content_type.value, user_id=x_user_id)


@app.get("/preferences")
async def get_preferences(x_user_id: Optional[str] = Header(default=None)) -> Dict[str, Any]:
    service = get_trip_service()
    try:
        return await service.store.get_preferences(user_id=x_user_id)
    except Exception as exc:
        logger.error(f"Unexpected error loading preferences: {str(exc)}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(exc)) from exc


@app.put("/preferences")
async def save_preferences(
    payload: Dict[str, Any] = Body(...),
    x_user_id: Optional[str] = Header(default=None),
) -> Dict[str, Any]:
    service = get_trip_service()
    try:
        return await service.store.save_preferences(payload, user_id=x_user_id)
    except Exception as exc:
        logger.error(f"Unexpected error saving preferences: {str(exc)}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(exc)) from exc


@app.get("/providers/status", response_model=ProviderStatusResponse)
async def provider_status() -> ProviderStatusResponse:
    """Cached health of every provider seen so far; never triggers probes."""

    service = get_trip_service()
    return ProviderStatusResponse(summary=service.provider_summary(), statuses=service.tracker.statuses())


@app.post("/providers/test", response_model=Dict[str, ApiHealthStatus])
async def test_providers() -> Dict[str, ApiHealthStatus]:
    logger.info("Provider connectivity test requested")
    service = get_trip_service()
    try:
        return await service.test_providers()
    except Exception as exc:
        logger.error(f"Unexpected error testing providers: {str(exc)}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(exc)) from exc


@app.post("/providers/reset", response_model=HealthSummary)
async def reset_providers() -> HealthSummary:
    service = get_trip_service()
    service.reset_providers()
    return service.provider_summary()


@app.get("/health")
async def health_check() -> Dict[str, str]:
    """Simple health endpoint used for readiness probes."""

    return {"status": "healthy", "service": "tirthyatra-planner-api"}
