"""Shared type aliases used across the data model."""
from __future__ import annotations

from typing import Annotated, Literal

from pydantic import Field, StringConstraints

Lat = Annotated[float, Field(ge=-90, le=90, allow_inf_nan=False)]
Lon = Annotated[float, Field(ge=-180, le=180, allow_inf_nan=False)]
Rating = Annotated[float, Field(ge=0, le=5)]
PositivePrice = Annotated[int, Field(gt=0)]
NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

BudgetTier = Literal["low", "mid", "high", "luxury"]
TransportMode = Literal["train", "flight", "bus"]
TransportPreference = Literal["train", "flight", "bus", "car"]
