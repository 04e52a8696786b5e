"""Tests for the custom data store and its local/remote backends."""
from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from fakes import FakeRemoteStore, make_store, temple_entry
from tirthyatra.core.schemas import ContentType, CustomTemple, Temple
from tirthyatra.storage import STORAGE_KEY, FileBlobStorage, LocalCustomBackend, MemoryBlobStorage
from tirthyatra.storage.custom_store import CustomDataStore


class TestLocalBackend:
    async def test_add_assigns_id_and_timestamps(self):
        store = make_store()
        entry = await store.add("temples", temple_entry())

        assert isinstance(entry, CustomTemple)
        assert entry.id
        assert entry.created_at is not None
        assert entry.updated_at == entry.created_at

    async def test_blob_layout(self):
        storage = MemoryBlobStorage()
        store = CustomDataStore(LocalCustomBackend(storage))
        await store.add(ContentType.TEMPLES, temple_entry())
        await store.save_preferences({"budget": "high"})

        blob = json.loads(await storage.read(STORAGE_KEY))
        assert set(blob) == {"temples", "hotels", "attractions", "transport", "preferences"}
        assert blob["temples"][0]["pujaTimings"] == "6:00 AM - 8:00 PM"
        assert blob["preferences"] == {"budget": "high"}

    async def test_list_filters_by_destination(self):
        store = make_store()
        await store.add("temples", temple_entry("Home Shrine", "Varanasi, Uttar Pradesh"))
        await store.add("temples", temple_entry("Ghat Shrine", "Haridwar"))

        names = [entry.name for entry in await store.list("temples", "varanasi")]
        assert names == ["Home Shrine"]
        assert len(await store.list("temples")) == 2
        assert await store.list("temples", "") == []

    async def test_transport_matches_on_route(self):
        store = make_store()
        await store.add(
            "transport",
            {
                "type": "bus",
                "name": "Night Coach",
                "departure": "21:00",
                "arrival": "07:00",
                "duration": "10h",
                "price": 900,
                "class": "AC Sleeper",
                "route": "Delhi to Varanasi",
            },
        )
        assert len(await store.list("transport", "Varanasi")) == 1
        assert await store.list("transport", "Puri") == []

    async def test_update_validates_and_persists(self):
        store = make_store()
        entry = await store.add("temples", temple_entry())

        updated = await store.update("temples", entry.id, {"pujaTimings": "5:00 AM - 9:00 PM"})

        assert updated.puja_timings == "5:00 AM - 9:00 PM"
        assert updated.name == entry.name
        listed = await store.list("temples")
        assert listed[0].puja_timings == "5:00 AM - 9:00 PM"

    async def test_update_rejects_invalid_values(self):
        store = make_store()
        entry = await store.add("temples", temple_entry())

        with pytest.raises(ValidationError):
            await store.update("temples", entry.id, {"coordinates": {"lat": 123, "lng": 0}})
        with pytest.raises(ValueError, match="Unknown field"):
            await store.update("temples", entry.id, {"altitude": 80})

    async def test_unknown_id_raises_key_error(self):
        store = make_store()
        with pytest.raises(KeyError):
            await store.update("hotels", "missing", {"price": 10})
        with pytest.raises(KeyError):
            await store.delete("hotels", "missing")

    async def test_delete_removes_entry(self):
        store = make_store()
        entry = await store.add("temples", temple_entry())
        await store.delete("temples", entry.id)
        assert await store.list("temples") == []

    async def test_invalid_entry_is_rejected(self):
        store = make_store()
        with pytest.raises(ValidationError):
            await store.add("hotels", {"name": "Free Stay", "rating": 9, "price": 0, "location": "Puri"})

    async def test_as_record_strips_metadata(self):
        store = make_store()
        entry = await store.add("temples", temple_entry())
        record = entry.as_record()
        assert type(record) is Temple
        assert not hasattr(record, "id")

    async def test_corrupt_blob_starts_empty(self):
        storage = MemoryBlobStorage()
        await storage.write(STORAGE_KEY, "{not json")
        store = CustomDataStore(LocalCustomBackend(storage))
        assert await store.list("temples") == []

    async def test_non_object_items_are_dropped(self):
        storage = MemoryBlobStorage()
        await storage.write(STORAGE_KEY, json.dumps({"temples": ["oops", 7, {**temple_entry(), "id": "t1"}]}))
        store = CustomDataStore(LocalCustomBackend(storage))

        assert [entry.id for entry in await store.list("temples")] == ["t1"]
        await store.delete("temples", "t1")
        assert await store.list("temples") == []


class TestRemoteBackend:
    async def test_authenticated_calls_use_remote(self):
        remote = FakeRemoteStore()
        store = make_store(remote)

        entry = await store.add("temples", temple_entry(), user_id="user-1")

        assert entry.id == "doc-1"
        assert ("user-1", "temples") in remote.collections
        assert await store.list("temples") == []
        assert [e.name for e in await store.list("temples", user_id="user-1")] == ["Home Shrine"]

    async def test_remote_list_is_newest_first(self):
        store = make_store(FakeRemoteStore())
        await store.add("temples", temple_entry("First Shrine"), user_id="u")
        await store.add("temples", temple_entry("Second Shrine"), user_id="u")

        names = [entry.name for entry in await store.list("temples", user_id="u")]
        assert names == ["Second Shrine", "First Shrine"]

    async def test_remote_failure_falls_through_to_local(self):
        store = make_store(FakeRemoteStore(fail=True))

        entry = await store.add("temples", temple_entry(), user_id="user-1")

        assert entry.id and not entry.id.startswith("doc-")
        assert [e.name for e in await store.list("temples")] == ["Home Shrine"]
        assert [e.name for e in await store.list("temples", user_id="user-1")] == ["Home Shrine"]

    async def test_remote_exception_falls_through_to_local(self):
        remote = FakeRemoteStore()

        async def _boom(*args):
            raise ConnectionError("firestore down")

        remote.add = _boom
        store = make_store(remote)

        entry = await store.add("temples", temple_entry(), user_id="user-1")
        assert [e.id for e in await store.list("temples")] == [entry.id]

    async def test_remote_update_and_delete(self):
        remote = FakeRemoteStore()
        store = make_store(remote)
        entry = await store.add("temples", temple_entry(), user_id="u")

        updated = await store.update("temples", entry.id, {"description": "Rooftop shrine"}, user_id="u")
        assert updated.description == "Rooftop shrine"
        assert remote.collections[("u", "temples")][entry.id]["description"] == "Rooftop shrine"

        await store.delete("temples", entry.id, user_id="u")
        assert await store.list("temples", user_id="u") == []

    async def test_preferences_round_trip(self):
        store = make_store(FakeRemoteStore())
        await store.save_preferences({"budget": "luxury"}, user_id="u")
        assert await store.get_preferences(user_id="u") == {"budget": "luxury"}
        assert await store.get_preferences() == {}


async def test_file_blob_storage(tmp_path):
    storage = FileBlobStorage(tmp_path / "data")
    assert await storage.read(STORAGE_KEY) is None

    store = CustomDataStore(LocalCustomBackend(storage))
    await store.add("attractions", {
        "name": "Sarnath",
        "type": "Heritage",
        "description": "Where the Buddha first taught",
        "rating": 4.8,
        "coordinates": {"lat": 25.38, "lng": 83.02},
        "location": "Varanasi",
    })

    reopened = CustomDataStore(LocalCustomBackend(FileBlobStorage(tmp_path / "data")))
    assert [entry.name for entry in await reopened.list("attractions", "Varanasi")] == ["Sarnath"]


async def test_undecodable_file_starts_empty(tmp_path):
    directory = tmp_path / "data"
    directory.mkdir()
    (directory / f"{STORAGE_KEY}.json").write_bytes(b"\xff\xfe{")
    store = CustomDataStore(LocalCustomBackend(FileBlobStorage(directory)))

    assert await store.list("temples") == []
    entry = await store.add("temples", temple_entry())
    assert [item.id for item in await store.list("temples")] == [entry.id]
