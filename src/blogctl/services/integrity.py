"""Referential-integrity rules between blog categories.

Each :class:`Reference` says that a field of one category holds the id
of an object in another. Two checks follow from that table:

- existence (create): every reference of a new object must resolve.
- dependents (remove): an object cannot be deleted while anything
  still references it.

Both checks report *every* violation found, never just the first.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from blogctl.domain.errors import BAD_ID, EXISTS, BlogError
from blogctl.domain.meta import ARTICLES, COMMENTS, USERS

if TYPE_CHECKING:
    from blogctl.infrastructure.store import BlogStore

SINGULAR: dict[str, str] = {
    USERS: "user",
    ARTICLES: "article",
    COMMENTS: "comment",
}


@dataclass(frozen=True)
class Reference:
    """*source*.*field* holds the id of a *target* object."""

    source: str
    field: str
    target: str


REFERENCES: tuple[Reference, ...] = (
    Reference(source=ARTICLES, field="authorId", target=USERS),
    Reference(source=COMMENTS, field="commenterId", target=USERS),
    Reference(source=COMMENTS, field="articleId", target=ARTICLES),
)


def referenced_categories(category: str) -> set[str]:
    """Categories that objects of *category* point at."""
    return {ref.target for ref in REFERENCES if ref.source == category}


def dependent_categories(category: str) -> set[str]:
    """Categories whose objects may point at objects of *category*."""
    return {ref.source for ref in REFERENCES if ref.target == category}


class IntegrityChecker:
    """Runs the reference table against a store."""

    def __init__(self, store: BlogStore, references: tuple[Reference, ...] = REFERENCES) -> None:
        self._store = store
        self._references = references

    def missing_references(self, category: str, obj: Mapping[str, Any]) -> list[BlogError]:
        """One EXISTS error per reference of *obj* with no target object."""
        errors: list[BlogError] = []
        for ref in self._references:
            if ref.source != category or ref.field not in obj:
                continue
            target_id = obj[ref.field]
            if self._store.get(ref.target, target_id) is None:
                errors.append(
                    BlogError(
                        code=EXISTS,
                        message=(
                            f"{SINGULAR[ref.target]} with id {target_id} referenced by "
                            f"{ref.field} does not exist for {SINGULAR[category]} {obj.get('id')}"
                        ),
                    )
                )
        return errors

    def dependents(self, category: str, object_id: str) -> list[BlogError]:
        """One BAD_ID error per stored object that references *object_id*."""
        errors: list[BlogError] = []
        for ref in self._references:
            if ref.target != category:
                continue
            for dependent in self._store.referencing(ref.source, ref.field, object_id):
                errors.append(
                    BlogError(
                        code=BAD_ID,
                        message=(
                            f"{SINGULAR[category]} {object_id} referenced by {ref.field} "
                            f"for {SINGULAR[ref.source]} {dependent['id']}"
                        ),
                    )
                )
        return errors
