"""Input sanitising and validation for destinations, preferences and itinerary parameters.

All functions are pure and never raise. Destination checks are advisory because
the allowlist can never be complete; itinerary checks block because duration and
budget change the structure and cost of what gets generated.
"""
from __future__ import annotations

import math
import re
from typing import Any, List, Mapping, Optional, Tuple

from tirthyatra.core.schemas import (
    DestinationValidation,
    ItineraryParams,
    ItineraryValidation,
    Preferences,
    PreferenceValidation,
)

MIN_DESTINATION_LENGTH = 2
MAX_DESTINATION_LENGTH = 100

BUDGET_TIERS = ("low", "mid", "high", "luxury")
TRANSPORT_MODES = ("train", "flight", "bus", "car")

DURATION_RANGE = (1, 30)
TRAVELERS_RANGE = (1, 20)
DEFAULT_BUDGET = "mid"
DEFAULT_DURATION = 3
DEFAULT_TRAVELERS = 2
DEFAULT_TRANSPORT = "train"

_STRIP_PATTERN = re.compile(r"[<>{}\[\]\\]")

KNOWN_DESTINATIONS = (
    "varanasi", "tirupati", "rishikesh", "haridwar", "amritsar", "puri", "madurai",
    "ujjain", "shirdi", "vrindavan", "mathura", "ayodhya", "kedarnath", "badrinath",
    "dwarka", "somnath", "rameswaram", "bodh gaya", "pushkar", "vaishno devi",
    "kanchipuram", "guruvayur", "sabarimala", "nashik", "prayagraj", "allahabad",
    "kashi", "gangotri", "yamunotri", "omkareshwar", "shirdi sai", "jagannath puri",
    "delhi", "new delhi", "mumbai", "kolkata", "chennai", "bangalore", "bengaluru",
    "hyderabad", "pune", "ahmedabad", "jaipur", "lucknow", "bhopal", "patna", "goa",
    "kochi", "trivandrum", "thiruvananthapuram", "mysore", "mysuru", "agra", "indore",
    "nagpur", "surat", "chandigarh", "dehradun", "guwahati", "bhubaneswar",
)


def sanitize_text(raw: str) -> str:
    """Trim, drop markup-ish characters and collapse internal whitespace."""

    cleaned = _STRIP_PATTERN.sub("", raw.strip())
    return re.sub(r"\s+", " ", cleaned).strip()


def _is_known_destination(name: str) -> bool:
    lowered = name.lower()
    return any(known in lowered or lowered in known for known in KNOWN_DESTINATIONS)


def validate_destination(raw: Any) -> DestinationValidation:
    """Sanitise a destination string and flag whether it looks like a real place."""

    if not isinstance(raw, str) or not raw.strip():
        return DestinationValidation(valid=False, error="Destination is required")

    sanitized = sanitize_text(raw)
    if len(sanitized) > MAX_DESTINATION_LENGTH:
        sanitized = sanitized[:MAX_DESTINATION_LENGTH].rstrip()

    if len(sanitized) < MIN_DESTINATION_LENGTH:
        return DestinationValidation(
            sanitized=sanitized,
            valid=False,
            error=f"Destination must be at least {MIN_DESTINATION_LENGTH} characters",
        )

    if _is_known_destination(sanitized):
        return DestinationValidation(sanitized=sanitized, valid=True, recognized=True)

    return DestinationValidation(
        sanitized=sanitized,
        valid=True,
        recognized=False,
        error=f"'{sanitized}' is not a known destination; results may be generic",
    )


def _coerce_int(value: Any) -> Optional[int]:
    """Parse ints, floats and numeric strings; ``None`` for anything else."""

    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    return int(round(number))


def _in_range(value: Optional[int], bounds: Tuple[int, int]) -> bool:
    return value is not None and bounds[0] <= value <= bounds[1]


def _normalise_choice(value: Any) -> str:
    return value.strip().lower() if isinstance(value, str) else ""


def validate_preferences(raw: Optional[Mapping[str, Any]]) -> PreferenceValidation:
    """Return usable preferences plus human-readable warnings for every default applied."""

    raw = raw or {}
    warnings: List[str] = []

    budget = _normalise_choice(raw.get("budget"))
    if budget not in BUDGET_TIERS:
        warnings.append(f"Invalid budget '{raw.get('budget')}', defaulting to '{DEFAULT_BUDGET}'")
        budget = DEFAULT_BUDGET

    duration = _coerce_int(raw.get("duration"))
    if not _in_range(duration, DURATION_RANGE):
        warnings.append(
            f"Duration must be between {DURATION_RANGE[0]} and {DURATION_RANGE[1]} days, "
            f"defaulting to {DEFAULT_DURATION}"
        )
        duration = DEFAULT_DURATION

    travelers = _coerce_int(raw.get("travelers"))
    if not _in_range(travelers, TRAVELERS_RANGE):
        warnings.append(
            f"Travelers must be between {TRAVELERS_RANGE[0]} and {TRAVELERS_RANGE[1]}, "
            f"defaulting to {DEFAULT_TRAVELERS}"
        )
        travelers = DEFAULT_TRAVELERS

    transport = _normalise_choice(raw.get("transport"))
    if transport not in TRANSPORT_MODES:
        warnings.append(f"Invalid transport '{raw.get('transport')}', defaulting to '{DEFAULT_TRANSPORT}'")
        transport = DEFAULT_TRANSPORT

    return PreferenceValidation(
        sanitized=Preferences(budget=budget, duration=duration, travelers=travelers, transport=transport),
        warnings=warnings,
    )


def validate_itinerary_params(origin: Any, destination: Any, duration: Any, budget: Any) -> ItineraryValidation:
    """Validate the inputs of the AI itinerary path; errors block generation."""

    errors: List[str] = []

    origin_result = validate_destination(origin)
    if not origin_result.valid:
        errors.append(f"Origin: {origin_result.error}")

    destination_result = validate_destination(destination)
    if not destination_result.valid:
        errors.append(f"Destination: {destination_result.error}")

    parsed_duration = _coerce_int(duration)
    if not _in_range(parsed_duration, DURATION_RANGE):
        errors.append(f"Duration must be between {DURATION_RANGE[0]} and {DURATION_RANGE[1]} days")
        parsed_duration = None

    parsed_budget: Optional[str] = _normalise_choice(budget)
    if parsed_budget not in BUDGET_TIERS:
        errors.append(f"Budget must be one of: {', '.join(BUDGET_TIERS)}")
        parsed_budget = None

    return ItineraryValidation(
        sanitized=ItineraryParams(
            origin=origin_result.sanitized,
            destination=destination_result.sanitized,
            duration=parsed_duration,
            budget=parsed_budget,
        ),
        errors=errors,
    )
