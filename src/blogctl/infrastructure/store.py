"""BlogStore: storage contract shared by every backend.

A store holds plain-dict objects grouped by category and keyed by their
``id`` field. It knows nothing about schemas or referential integrity;
the service layer owns both. Backends raise :class:`StoreError` for any
failure of the underlying engine.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any


class StoreError(Exception):
    """A storage backend failed to complete an operation."""


def matches(obj: Mapping[str, Any], filters: Mapping[str, Any]) -> bool:
    """Return True when *obj* satisfies every equality filter.

    List-valued fields match when they contain every requested item, so
    ``{"roles": ["author"]}`` finds users whose roles include ``author``.
    """
    for key, wanted in filters.items():
        if key not in obj:
            return False
        stored = obj[key]
        if isinstance(stored, list):
            items = wanted if isinstance(wanted, list) else [wanted]
            if not all(item in stored for item in items):
                return False
        elif stored != wanted:
            return False
    return True


class BlogStore(ABC):
    """Abstract storage backend for blog categories."""

    @abstractmethod
    def get(self, category: str, object_id: str) -> dict[str, Any] | None:
        """Return a copy of the object with *object_id*, or None."""

    @abstractmethod
    def insert(self, category: str, obj: Mapping[str, Any]) -> None:
        """Store a new object. Its ``id`` must not already exist."""

    @abstractmethod
    def replace(self, category: str, obj: Mapping[str, Any]) -> None:
        """Overwrite the stored object that has the same ``id``."""

    @abstractmethod
    def delete(self, category: str, object_id: str) -> None:
        """Delete the object with *object_id* (no-op when absent)."""

    @abstractmethod
    def find(
        self,
        category: str,
        filters: Mapping[str, Any] | None = None,
        *,
        index: int = 0,
        count: int | None = None,
    ) -> list[dict[str, Any]]:
        """Return copies of matching objects in ascending ``id`` order.

        The first *index* matches are skipped and at most *count* are
        returned (all remaining when *count* is None).
        """

    @abstractmethod
    def clear(self) -> None:
        """Delete every object of every category."""

    def close(self) -> None:  # noqa: B027
        """Release backend resources. Default: nothing to release."""

    def referencing(self, category: str, field: str, object_id: str) -> list[dict[str, Any]]:
        """All objects of *category* whose *field* equals *object_id*."""
        return self.find(category, {field: object_id})
