"""Persistence for user-contributed custom entries.

Public API:
    - CustomDataStore: remote-first store with local fall-through
    - LocalCustomBackend: JSON blob backend under ``tirthyatra_custom_data``
    - FileBlobStorage / MemoryBlobStorage: local durable storage implementations
    - FirestoreDocumentStore / create_firestore_store: per-user remote backend
"""
from tirthyatra.storage.custom_store import CustomDataStore
from tirthyatra.storage.firestore import FirestoreDocumentStore, create_firestore_store
from tirthyatra.storage.local import STORAGE_KEY, FileBlobStorage, LocalCustomBackend, MemoryBlobStorage

__all__ = [
    "CustomDataStore",
    "LocalCustomBackend",
    "FileBlobStorage",
    "MemoryBlobStorage",
    "FirestoreDocumentStore",
    "create_firestore_store",
    "STORAGE_KEY",
]
