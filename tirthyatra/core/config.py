"""Configuration helpers for API keys and environment variables."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

PLACEHOLDER_MARKERS = ("demo", "your_", "placeholder")
MIN_KEY_LENGTH = 10

DEFAULT_DATA_DIR = Path.home() / ".tirthyatra"
DEFAULT_CORS_ORIGINS = ["http://localhost:3000", "http://localhost:5173"]


def is_usable_key(value: Optional[str]) -> bool:
    """Return ``False`` for missing keys and the placeholders shipped in sample env files."""

    if not value:
        return False
    lowered = value.strip().lower()
    if len(lowered) < MIN_KEY_LENGTH:
        return False
    return not any(marker in lowered for marker in PLACEHOLDER_MARKERS)


@dataclass(slots=True)
class ApiSettings:
    """Centralised container for the external service credentials."""

    opencage_api_key: Optional[str] = None
    opentripmap_api_key: Optional[str] = None
    rapid_api_key: Optional[str] = None
    indian_rail_client_id: Optional[str] = None
    indian_rail_client_secret: Optional[str] = None
    amadeus_api_key: Optional[str] = None
    amadeus_api_secret: Optional[str] = None
    xai_api_key: Optional[str] = None
    firebase_credentials: Optional[str] = None
    data_dir: Optional[str] = None
    cors_origins: Optional[str] = None

    @classmethod
    def from_env(cls) -> "ApiSettings":
        """Load settings from the process environment."""

        return cls(
            opencage_api_key=os.getenv("OPENCAGE_API_KEY"),
            opentripmap_api_key=os.getenv("OPENTRIPMAP_API_KEY"),
            rapid_api_key=os.getenv("RAPID_API_KEY"),
            indian_rail_client_id=os.getenv("INDIAN_RAIL_CLIENT_ID"),
            indian_rail_client_secret=os.getenv("INDIAN_RAIL_CLIENT_SECRET"),
            amadeus_api_key=os.getenv("AMADEUS_API"),
            amadeus_api_secret=os.getenv("AMADEUS_SECRET"),
            xai_api_key=os.getenv("XAI_API_KEY"),
            firebase_credentials=os.getenv("FIREBASE_CREDENTIALS"),
            data_dir=os.getenv("TIRTHYATRA_DATA_DIR"),
            cors_origins=os.getenv("CORS_ORIGINS"),
        )

    def ensure(self, field: str) -> str:
        """Return the requested field and fail fast if it is missing."""

        value = getattr(self, field)
        if not value:
            raise RuntimeError(f"Missing configuration value: {field}")
        return value

    def has_usable_key(self, *fields: str) -> bool:
        """True when every named credential is present and not a placeholder."""

        return all(is_usable_key(getattr(self, field)) for field in fields)

    def resolved_data_dir(self) -> Path:
        """Directory used by the local custom-data backend."""

        if self.data_dir:
            return Path(self.data_dir).expanduser()
        return DEFAULT_DATA_DIR

    def allowed_origins(self) -> List[str]:
        """CORS origins for the HTTP API, comma separated in the environment."""

        if not self.cors_origins:
            return list(DEFAULT_CORS_ORIGINS)
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]
