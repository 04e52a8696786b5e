from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from tirthyatra.core.schemas import ApiHealthStatus, HealthSummary, TripQuery


class TripResultsRequest(TripQuery):
    """Request payload collected by the multi-step trip form."""
    pass


class GuideRequest(BaseModel):
    """Request payload for a narrative itinerary guide.

    Values are validated by the service rather than by the schema so that
    invalid input comes back as a list of readable errors.
    """

    origin: Any = Field(default="", description="Starting city")
    destination: Any = Field(default="", description="Pilgrimage destination")
    duration: Any = Field(default=None, description="Trip length in days (1-30)")
    budget: Any = Field(default=None, description="Budget tier: low, mid, high or luxury")
    highlights: List[str] = Field(default_factory=list, description="Places the guide should mention")


class ProviderStatusResponse(BaseModel):
    summary: HealthSummary
    statuses: Dict[str, ApiHealthStatus] = Field(default_factory=dict)


class DeleteResponse(BaseModel):
    deleted: str
    type: str
    user_id: Optional[str] = None
