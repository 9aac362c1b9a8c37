"""In-memory store: one dict per category, keyed by id.

Objects are deep-copied on the way in and out so callers can never
mutate stored state through a returned reference.
"""

from __future__ import annotations

import copy
from collections.abc import Iterable, Mapping
from typing import Any

from blogctl.infrastructure.store import BlogStore, StoreError, matches


class MemoryStore(BlogStore):
    """Process-local backend. State lives only as long as the instance."""

    def __init__(self, categories: Iterable[str]) -> None:
        self._data: dict[str, dict[str, dict[str, Any]]] = {c: {} for c in categories}

    def _collection(self, category: str) -> dict[str, dict[str, Any]]:
        try:
            return self._data[category]
        except KeyError:
            raise StoreError(f"No collection for category {category!r}") from None

    def get(self, category: str, object_id: str) -> dict[str, Any] | None:
        obj = self._collection(category).get(object_id)
        return copy.deepcopy(obj) if obj is not None else None

    def insert(self, category: str, obj: Mapping[str, Any]) -> None:
        collection = self._collection(category)
        object_id = obj["id"]
        if object_id in collection:
            raise StoreError(f"Duplicate id {object_id!r} in {category}")
        collection[object_id] = copy.deepcopy(dict(obj))

    def replace(self, category: str, obj: Mapping[str, Any]) -> None:
        collection = self._collection(category)
        object_id = obj["id"]
        if object_id not in collection:
            raise StoreError(f"No object with id {object_id!r} in {category}")
        collection[object_id] = copy.deepcopy(dict(obj))

    def delete(self, category: str, object_id: str) -> None:
        self._collection(category).pop(object_id, None)

    def find(
        self,
        category: str,
        filters: Mapping[str, Any] | None = None,
        *,
        index: int = 0,
        count: int | None = None,
    ) -> list[dict[str, Any]]:
        filters = filters or {}
        collection = self._collection(category)
        hits = [collection[k] for k in sorted(collection) if matches(collection[k], filters)]
        end = None if count is None else index + count
        return [copy.deepcopy(obj) for obj in hits[index:end]]

    def clear(self) -> None:
        for collection in self._data.values():
            collection.clear()
