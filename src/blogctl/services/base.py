"""BaseService: foundation for blogctl services.

Every service receives a :class:`BlogStore` at construction time and
never touches a particular backend directly, so the same rules run over
the in-memory and the SQLite stores.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from blogctl.infrastructure.store import BlogStore

logger = logging.getLogger(__name__)


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class BlogService(BaseService):
            def create(self, category: str, fields: dict) -> ServiceResult:
                ...
                self._store.insert(category, obj)
    """

    def __init__(self, store: BlogStore) -> None:
        self._store = store

    @property
    def store(self) -> BlogStore:
        return self._store

    def close(self) -> None:
        """Release the store's resources."""
        logger.debug("Closing store %s", type(self._store).__name__)
        self._store.close()
