"""
In-Memory Storage Backend.

Default backend: keeps every collection in process memory. State lives on
the instance, so two instances never share entries.
"""

from __future__ import annotations

from copy import deepcopy
from typing import Any

from arianee_sdk.storage.base import StorageBackend, register_storage_backend


class InMemoryStorage(StorageBackend):
    """
    In-memory storage backend.

    Stores all data in Python dicts. Data is lost when the process ends.
    Safe under a single event loop; not meant for threads.
    """

    def __init__(self) -> None:
        self._data: dict[str, dict[str, dict[str, Any]]] = {}

    def _collection(self, collection: str) -> dict[str, dict[str, Any]]:
        return self._data.setdefault(collection, {})

    async def save(self, collection: str, key: str, data: dict[str, Any]) -> None:
        self._collection(collection)[key] = deepcopy(data)

    async def get(self, collection: str, key: str) -> dict[str, Any] | None:
        data = self._collection(collection).get(key)
        return deepcopy(data) if data is not None else None

    async def delete(self, collection: str, key: str) -> bool:
        coll = self._collection(collection)
        if key in coll:
            del coll[key]
            return True
        return False

    async def clear(self, collection: str) -> int:
        coll = self._collection(collection)
        count = len(coll)
        coll.clear()
        return count


register_storage_backend("memory", InMemoryStorage)
