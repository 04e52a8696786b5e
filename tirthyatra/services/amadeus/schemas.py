from datetime import date
from typing import Optional, Literal
from pydantic import BaseModel, Field, field_serializer


class FlightSearchInput(BaseModel):
    """Input schema mirroring the Amadeus flight offers endpoint."""

    originLocationCode: str = Field(..., description="Origin airport/city IATA code")
    destinationLocationCode: str = Field(..., description="Destination airport/city IATA code")
    departureDate: date = Field(..., description="Outbound date (YYYY-MM-DD)")
    adults: int = Field(1, ge=1, le=9, description="Number of adults")
    travelClass: Optional[Literal["ECONOMY", "PREMIUM_ECONOMY", "BUSINESS", "FIRST"]] = Field(
        None,
        description="Cabin class: ECONOMY, PREMIUM_ECONOMY, BUSINESS, FIRST",
    )
    nonStop: Optional[bool] = Field(None, description="Only direct flights")
    currencyCode: str = Field("INR", pattern=r"^[A-Z]{3}$", description="Currency code")
    max: int = Field(10, ge=1, le=50, description="Number of flight offers to return")

    @field_serializer("departureDate", when_used="json")
    def _serialize_dates(self, value: date, _info) -> str:
        return value.strftime("%Y-%m-%d")
