from typing import Iterable, List, Sequence, TypeVar
import logging

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _name_key(item) -> str:
    return (getattr(item, "name", "") or "").strip().lower()


def merge_by_name(sources: Sequence[Iterable[T]], cap: int) -> List[T]:
    """Concatenate sources in priority order, drop repeated names, truncate to ``cap``.

    The first occurrence of a name wins, so callers pass custom entries first,
    live results second and mock data last.
    """

    seen = set()
    merged: List[T] = []
    skipped = 0
    for source in sources:
        for item in source:
            key = _name_key(item)
            if not key or key in seen:
                skipped += 1
                continue
            seen.add(key)
            merged.append(item)

    logger.debug(f"Merge: kept {len(merged)} unique items, skipped {skipped}, cap {cap}")
    return merged[:cap]


def matches_destination(text: str, destination: str) -> bool:
    """Case-insensitive substring match of a destination inside free location text."""

    needle = (destination or "").strip().lower()
    if not needle:
        return False
    return needle in (text or "").lower()
