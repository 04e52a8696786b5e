"""User-contributed entries with a per-user remote backend and a local fallback."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import ValidationError

from tirthyatra.core.interfaces import RemoteDocumentStore
from tirthyatra.core.merging import matches_destination
from tirthyatra.core.schemas import CUSTOM_TYPES, ContentType, CustomEntry, StoreResult
from tirthyatra.storage.local import LocalCustomBackend

logger = logging.getLogger(__name__)

METADATA_FIELDS = {"id", "created_at", "updated_at"}

EntryInput = Union[CustomEntry, Mapping[str, Any]]


def _entry_payload(entry: CustomEntry) -> Dict[str, Any]:
    return entry.model_dump(mode="json", by_alias=True, exclude=METADATA_FIELDS)


def _alias_for(content_type: ContentType, key: str) -> str:
    model = CUSTOM_TYPES[content_type]
    for name, field in model.model_fields.items():
        if key in (name, field.alias):
            if name in METADATA_FIELDS:
                raise ValueError(f"Field '{key}' cannot be changed")
            return field.alias or name
    raise ValueError(f"Unknown field '{key}' for {content_type.value}")


class CustomDataStore:
    """CRUD over custom temples, hotels, attractions and transport.

    Calls carrying a ``user_id`` go to the remote document store when one is
    configured; everything else, and every remote failure, is served by the
    local JSON blob.
    """

    def __init__(self, local: LocalCustomBackend, remote: Optional[RemoteDocumentStore] = None) -> None:
        self.local = local
        self.remote = remote

    def _use_remote(self, user_id: Optional[str]) -> bool:
        return bool(user_id) and self.remote is not None

    async def _remote_call(self, operation: str, *args: Any) -> Optional[StoreResult]:
        """Run a remote operation; ``None`` means fall through to local storage."""

        try:
            result = await getattr(self.remote, operation)(*args)
        except Exception as exc:
            logger.warning(f"Remote custom store {operation} raised: {exc}; using local storage", exc_info=True)
            return None
        if not result.success:
            logger.warning(f"Remote custom store {operation} failed: {result.error}; using local storage")
            return None
        return result

    def _parse(self, content_type: ContentType, item: Mapping[str, Any]) -> Optional[CustomEntry]:
        try:
            return CUSTOM_TYPES[content_type].model_validate(item)
        except ValidationError as exc:
            logger.warning(f"Skipping malformed custom {content_type.value} entry {item.get('id')}: {exc}")
            return None

    async def add(
        self, content_type: Union[ContentType, str], entry: EntryInput, user_id: Optional[str] = None
    ) -> CustomEntry:
        content_type = ContentType(content_type)
        model = CUSTOM_TYPES[content_type]
        validated = entry if isinstance(entry, model) else model.model_validate(entry)
        payload = _entry_payload(validated)

        if self._use_remote(user_id):
            result = await self._remote_call("add", user_id, content_type.value, payload)
            if result is not None:
                now = datetime.now(timezone.utc)
                return validated.model_copy(update={"id": result.id, "created_at": now, "updated_at": now})

        stored = await self.local.add(content_type, payload)
        return model.model_validate(stored)

    async def _list_raw(self, content_type: ContentType, user_id: Optional[str]) -> List[Dict[str, Any]]:
        if self._use_remote(user_id):
            result = await self._remote_call("list", user_id, content_type.value)
            if result is not None:
                return list(result.data or [])
        return await self.local.list(content_type)

    async def list(
        self,
        content_type: Union[ContentType, str],
        destination: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> List[CustomEntry]:
        """Entries of one type, newest first, optionally filtered by destination."""

        content_type = ContentType(content_type)
        entries = []
        for item in await self._list_raw(content_type, user_id):
            entry = self._parse(content_type, item)
            if entry is None:
                continue
            if destination is not None and not matches_destination(entry.match_text(), destination):
                continue
            entries.append(entry)
        return entries

    async def update(
        self,
        content_type: Union[ContentType, str],
        item_id: str,
        patch: Mapping[str, Any],
        user_id: Optional[str] = None,
    ) -> CustomEntry:
        content_type = ContentType(content_type)
        model = CUSTOM_TYPES[content_type]
        keys = [_alias_for(content_type, key) for key in patch]
        raw_patch = {_alias_for(content_type, key): value for key, value in patch.items()}

        def merged_updates(existing: Mapping[str, Any]) -> tuple:
            candidate = model.model_validate({**existing, **raw_patch})
            dumped = candidate.model_dump(mode="json", by_alias=True)
            return candidate, {key: dumped[key] for key in keys}

        if self._use_remote(user_id):
            listed = await self._remote_call("list", user_id, content_type.value)
            if listed is not None:
                existing = next((item for item in listed.data or [] if item.get("id") == item_id), None)
                if existing is None:
                    raise KeyError(item_id)
                candidate, updates = merged_updates(existing)
                result = await self._remote_call("update", user_id, content_type.value, item_id, updates)
                if result is not None:
                    return candidate.model_copy(update={"updated_at": datetime.now(timezone.utc)})

        local_items = await self.local.list(content_type)
        existing = next((item for item in local_items if item.get("id") == item_id), None)
        if existing is None:
            raise KeyError(item_id)
        _, updates = merged_updates(existing)
        stored = await self.local.update(content_type, item_id, updates)
        return model.model_validate(stored)

    async def delete(
        self, content_type: Union[ContentType, str], item_id: str, user_id: Optional[str] = None
    ) -> None:
        content_type = ContentType(content_type)
        if self._use_remote(user_id):
            result = await self._remote_call("delete", user_id, content_type.value, item_id)
            if result is not None:
                return
        await self.local.delete(content_type, item_id)

    async def get_preferences(self, user_id: Optional[str] = None) -> Dict[str, Any]:
        if self._use_remote(user_id):
            result = await self._remote_call("get_preferences", user_id)
            if result is not None:
                return dict(result.data or {})
        return await self.local.get_preferences()

    async def save_preferences(self, preferences: Mapping[str, Any], user_id: Optional[str] = None) -> Dict[str, Any]:
        if self._use_remote(user_id):
            result = await self._remote_call("save_preferences", user_id, dict(preferences))
            if result is not None:
                return dict(preferences)
        return await self.local.save_preferences(dict(preferences))
