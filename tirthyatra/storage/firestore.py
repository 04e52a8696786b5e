"""Per-user custom entries stored in Cloud Firestore through firebase-admin."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import firebase_admin
from firebase_admin import credentials, firestore_async
from google.cloud import firestore

from tirthyatra.core.config import ApiSettings
from tirthyatra.core.schemas import StoreResult

logger = logging.getLogger(__name__)


class FirestoreDocumentStore:
    """CRUD over ``users/{uid}/{collection}`` returning ``StoreResult`` envelopes.

    Errors are reported in the envelope, never raised, so the custom data store
    can fall through to its local backend.
    """

    def __init__(self, client: Any) -> None:
        self._db = client

    def _collection(self, user_id: str, collection: str):
        return self._db.collection("users").document(user_id).collection(collection)

    async def add(self, user_id: str, collection: str, data: Dict[str, Any]) -> StoreResult:
        try:
            _, ref = await self._collection(user_id, collection).add(
                {**data, "createdAt": firestore.SERVER_TIMESTAMP, "updatedAt": firestore.SERVER_TIMESTAMP}
            )
            return StoreResult(success=True, id=ref.id)
        except Exception as exc:
            logger.error(f"Firestore add to {collection} failed: {exc}")
            return StoreResult(success=False, error=str(exc))

    async def list(self, user_id: str, collection: str) -> StoreResult:
        try:
            query = self._collection(user_id, collection).order_by(
                "createdAt", direction=firestore.Query.DESCENDING
            )
            items = []
            async for snapshot in query.stream():
                items.append({**snapshot.to_dict(), "id": snapshot.id})
            return StoreResult(success=True, data=items)
        except Exception as exc:
            logger.error(f"Firestore list of {collection} failed: {exc}")
            return StoreResult(success=False, error=str(exc))

    async def update(self, user_id: str, collection: str, item_id: str, updates: Dict[str, Any]) -> StoreResult:
        try:
            ref = self._collection(user_id, collection).document(item_id)
            await ref.update({**updates, "updatedAt": firestore.SERVER_TIMESTAMP})
            return StoreResult(success=True, id=item_id)
        except Exception as exc:
            logger.error(f"Firestore update of {collection}/{item_id} failed: {exc}")
            return StoreResult(success=False, error=str(exc))

    async def delete(self, user_id: str, collection: str, item_id: str) -> StoreResult:
        try:
            await self._collection(user_id, collection).document(item_id).delete()
            return StoreResult(success=True, id=item_id)
        except Exception as exc:
            logger.error(f"Firestore delete of {collection}/{item_id} failed: {exc}")
            return StoreResult(success=False, error=str(exc))

    async def get_preferences(self, user_id: str) -> StoreResult:
        try:
            snapshot = await self._db.collection("users").document(user_id).get()
            data = snapshot.to_dict() if snapshot.exists else {}
            return StoreResult(success=True, data=(data or {}).get("preferences", {}))
        except Exception as exc:
            logger.error(f"Firestore preferences read failed: {exc}")
            return StoreResult(success=False, error=str(exc))

    async def save_preferences(self, user_id: str, preferences: Dict[str, Any]) -> StoreResult:
        try:
            await self._db.collection("users").document(user_id).set(
                {"preferences": preferences, "updatedAt": firestore.SERVER_TIMESTAMP}, merge=True
            )
            return StoreResult(success=True, data=preferences)
        except Exception as exc:
            logger.error(f"Firestore preferences write failed: {exc}")
            return StoreResult(success=False, error=str(exc))


def create_firestore_store(settings: ApiSettings) -> Optional[FirestoreDocumentStore]:
    """Initialise firebase-admin from a service-account file; ``None`` when not configured."""

    if not settings.firebase_credentials:
        logger.info("FIREBASE_CREDENTIALS not set; custom data will be stored locally only")
        return None

    try:
        app = firebase_admin.get_app()
    except ValueError:
        app = firebase_admin.initialize_app(credentials.Certificate(settings.ensure("firebase_credentials")))
    return FirestoreDocumentStore(firestore_async.client(app))
