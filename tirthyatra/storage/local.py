"""Local durable storage: one JSON blob holding every custom-entry list."""
from __future__ import annotations

import asyncio
import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional
from uuid import uuid4

from tirthyatra.core.interfaces import LocalBlobStorage
from tirthyatra.core.schemas import ContentType

logger = logging.getLogger(__name__)

STORAGE_KEY = "tirthyatra_custom_data"


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def empty_blob() -> Dict[str, Any]:
    blob: Dict[str, Any] = {content_type.value: [] for content_type in ContentType}
    blob["preferences"] = {}
    return blob


class FileBlobStorage:
    """Key-value text storage backed by one file per key inside ``directory``."""

    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def _read(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def _write(self, key: str, text: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        tmp_path = path.with_suffix(".tmp")
        tmp_path.write_text(text, encoding="utf-8")
        os.replace(tmp_path, path)

    async def read(self, key: str) -> Optional[str]:
        return await asyncio.to_thread(self._read, key)

    async def write(self, key: str, text: str) -> None:
        await asyncio.to_thread(self._write, key, text)


class MemoryBlobStorage:
    """Process-local storage, used when no data directory should be touched."""

    def __init__(self) -> None:
        self._values: Dict[str, str] = {}

    async def read(self, key: str) -> Optional[str]:
        return self._values.get(key)

    async def write(self, key: str, text: str) -> None:
        self._values[key] = text


class LocalCustomBackend:
    """Read-modify-write access to the custom data blob under a fixed key."""

    def __init__(self, storage: LocalBlobStorage, *, key: str = STORAGE_KEY) -> None:
        self.storage = storage
        self.key = key
        self._lock = asyncio.Lock()

    async def _load(self) -> Dict[str, Any]:
        blob = empty_blob()
        try:
            raw = await self.storage.read(self.key)
            if not raw:
                return blob
            stored = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError):
            logger.error(f"Local custom data under '{self.key}' is corrupt; starting from an empty blob")
            return blob
        if isinstance(stored, dict):
            for name, value in stored.items():
                if name not in blob or not isinstance(value, type(blob[name])):
                    continue
                if isinstance(value, list):
                    # entries are always JSON objects
                    value = [item for item in value if isinstance(item, dict)]
                blob[name] = value
        return blob

    async def _save(self, blob: Dict[str, Any]) -> None:
        await self.storage.write(self.key, json.dumps(blob, ensure_ascii=False))

    async def add(self, content_type: ContentType, data: Dict[str, Any]) -> Dict[str, Any]:
        async with self._lock:
            blob = await self._load()
            now = _utc_now()
            item = {**data, "id": uuid4().hex, "createdAt": now, "updatedAt": now}
            blob[content_type.value].append(item)
            await self._save(blob)
        return item

    async def list(self, content_type: ContentType) -> List[Dict[str, Any]]:
        blob = await self._load()
        items = list(blob[content_type.value])
        items.sort(key=lambda item: item.get("createdAt") or "", reverse=True)
        return items

    async def update(self, content_type: ContentType, item_id: str, updates: Dict[str, Any]) -> Dict[str, Any]:
        async with self._lock:
            blob = await self._load()
            for index, item in enumerate(blob[content_type.value]):
                if item.get("id") == item_id:
                    merged = {**item, **updates, "id": item_id, "updatedAt": _utc_now()}
                    blob[content_type.value][index] = merged
                    await self._save(blob)
                    return merged
        raise KeyError(item_id)

    async def delete(self, content_type: ContentType, item_id: str) -> None:
        async with self._lock:
            blob = await self._load()
            items = blob[content_type.value]
            remaining = [item for item in items if item.get("id") != item_id]
            if len(remaining) == len(items):
                raise KeyError(item_id)
            blob[content_type.value] = remaining
            await self._save(blob)

    async def get_preferences(self) -> Dict[str, Any]:
        blob = await self._load()
        return dict(blob["preferences"])

    async def save_preferences(self, preferences: Dict[str, Any]) -> Dict[str, Any]:
        async with self._lock:
            blob = await self._load()
            blob["preferences"] = {**blob["preferences"], **preferences}
            await self._save(blob)
            return dict(blob["preferences"])
