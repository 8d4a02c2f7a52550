from unittest.mock import MagicMock

import pytest

from wordle_game.config import TestingConfig
from wordle_game.services.storage import JsonFileStore, MemoryStore, MongoStore, create_store


def test_memory_store():
    store = MemoryStore()
    assert store.get("missing") is None

    store.set("key", {"a": [1, 2]})
    assert store.get("key") == {"a": [1, 2]}
    assert "key" in store

    assert store.delete("key")
    assert not store.delete("key")


def test_memory_store_returns_copies():
    store = MemoryStore()
    value = {"a": 1}
    store.set("key", value)
    value["a"] = 2
    assert store.get("key") == {"a": 1}


def test_json_file_store(tmp_path):
    store = JsonFileStore(str(tmp_path / "snapshots"))
    key = "wordle-game-storage:player-1"

    store.set(key, {"version": 2})
    assert store.get(key) == {"version": 2}
    assert JsonFileStore(str(tmp_path / "snapshots")).get(key) == {"version": 2}
    assert [p.name for p in (tmp_path / "snapshots").iterdir()] == ["wordle-game-storage_player-1.json"]

    assert store.delete(key)
    assert store.get(key) is None


def test_json_file_store_treats_corrupt_file_as_missing(tmp_path):
    store = JsonFileStore(str(tmp_path))
    (tmp_path / "broken.json").write_text("{not json", encoding="utf-8")
    assert store.get("broken") is None


def test_mongo_store_uses_one_document_per_key():
    client = MagicMock()
    collection = client.__getitem__.return_value.__getitem__.return_value
    collection.find_one.return_value = {"_id": "key", "value": {"version": 2}}
    collection.delete_one.return_value.deleted_count = 1

    store = MongoStore("mongodb://unused", client=client)

    assert store.get("key") == {"version": 2}
    collection.find_one.assert_called_once_with({"_id": "key"})

    store.set("key", {"version": 3})
    collection.replace_one.assert_called_once_with(
        {"_id": "key"}, {"_id": "key", "value": {"version": 3}}, upsert=True
    )

    assert store.delete("key")


def test_mongo_store_missing_key():
    client = MagicMock()
    client.__getitem__.return_value.__getitem__.return_value.find_one.return_value = None
    assert MongoStore("mongodb://unused", client=client).get("key") is None


def test_create_store(tmp_path):
    assert isinstance(create_store(TestingConfig), MemoryStore)

    class FileConfig:
        STORAGE_BACKEND = "file"
        STORAGE_DIR = str(tmp_path)

    assert isinstance(create_store(FileConfig), JsonFileStore)

    class MongoWithoutUri:
        STORAGE_BACKEND = "mongo"
        MONGO_URI = None

    with pytest.raises(ValueError):
        create_store(MongoWithoutUri)

    class Unknown:
        STORAGE_BACKEND = "redis"

    with pytest.raises(ValueError):
        create_store(Unknown)
