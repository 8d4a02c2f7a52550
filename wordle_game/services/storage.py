"""
Storage Service

Key-value stores holding serialized session snapshots.
"""

import json
import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional

from pymongo.mongo_client import MongoClient
from pymongo.server_api import ServerApi

logger = logging.getLogger(__name__)


class KeyValueStore:
    """Minimal key-value interface. Values are JSON-compatible structures."""

    def get(self, key: str) -> Optional[Any]:
        raise NotImplementedError

    def set(self, key: str, value: Any) -> None:
        raise NotImplementedError

    def delete(self, key: str) -> bool:
        raise NotImplementedError


class MemoryStore(KeyValueStore):
    """In-process store. Values are round-tripped through JSON like the other stores."""

    def __init__(self):
        self._data: Dict[str, str] = {}

    def get(self, key: str) -> Optional[Any]:
        raw = self._data.get(key)
        return json.loads(raw) if raw is not None else None

    def set(self, key: str, value: Any) -> None:
        self._data[key] = json.dumps(value)

    def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None

    def __contains__(self, key: str) -> bool:
        return key in self._data


class JsonFileStore(KeyValueStore):
    """One JSON file per key under a directory. Writes replace the file atomically."""

    _UNSAFE_CHARS = re.compile(r'[^A-Za-z0-9._-]')

    def __init__(self, directory: str):
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def _path_for(self, key: str) -> Path:
        return self.directory / f"{self._UNSAFE_CHARS.sub('_', key)}.json"

    def get(self, key: str) -> Optional[Any]:
        path = self._path_for(key)
        if not path.exists():
            return None
        try:
            with open(path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            # Unreadable data is treated as absent; restore falls back to defaults
            logger.warning("Could not read stored value for %s: %s", key, e)
            return None

    def set(self, key: str, value: Any) -> None:
        path = self._path_for(key)
        fd, tmp_path = tempfile.mkstemp(dir=self.directory, suffix='.tmp')
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(value, f, ensure_ascii=False)
            os.replace(tmp_path, path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    def delete(self, key: str) -> bool:
        path = self._path_for(key)
        if path.exists():
            path.unlink()
            return True
        return False


class MongoStore(KeyValueStore):
    """Stores each key as one document `{_id: key, value: ...}`."""

    def __init__(self, mongo_uri: str, database: str = 'wordle_game', collection: str = 'snapshots',
                 client: Optional[MongoClient] = None):
        self.client = client or MongoClient(mongo_uri, server_api=ServerApi('1'))
        self.collection = self.client[database][collection]

    def get(self, key: str) -> Optional[Any]:
        document = self.collection.find_one({'_id': key})
        return document.get('value') if document else None

    def set(self, key: str, value: Any) -> None:
        self.collection.replace_one({'_id': key}, {'_id': key, 'value': value}, upsert=True)

    def delete(self, key: str) -> bool:
        return self.collection.delete_one({'_id': key}).deleted_count > 0


def create_store(config_class) -> KeyValueStore:
    """Builds the store selected by `STORAGE_BACKEND`."""
    backend = getattr(config_class, 'STORAGE_BACKEND', 'memory')

    if backend == 'memory':
        return MemoryStore()
    if backend == 'file':
        return JsonFileStore(config_class.STORAGE_DIR)
    if backend == 'mongo':
        if not config_class.MONGO_URI:
            raise ValueError("STORAGE_BACKEND is 'mongo' but MONGO_URI is not configured")
        return MongoStore(config_class.MONGO_URI)

    raise ValueError(f"Unknown storage backend: {backend}")
