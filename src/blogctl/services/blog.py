"""BlogService: create / find / update / remove over any BlogStore.

Pipeline per write: VALIDATE → LOCK → INTEGRITY → PERSIST → RESPOND.

INVARIANT: A write either fully applies or leaves the store untouched.
Validation and integrity errors are collected and returned together;
storage failures become a single ``DB`` error.

INVARIANT: Check-then-write sequences run while holding the lock of
every category they read or write. Locks are always taken in sorted
category order.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterator, Mapping, Sequence
from contextlib import ExitStack, contextmanager
from typing import TYPE_CHECKING, Any

import structlog

from blogctl.domain.errors import (
    BAD_FIELD,
    BAD_FIELD_VALUE,
    DB,
    EXISTS,
    NOT_FOUND,
    BlogError,
    BlogErrors,
)
from blogctl.domain.fields import IDENTITY_ALIAS
from blogctl.domain.ids import IdRegistry
from blogctl.domain.meta import BLOG_META
from blogctl.domain.validator import SchemaValidator
from blogctl.infrastructure.store import StoreError
from blogctl.services.base import BaseService
from blogctl.services.integrity import (
    SINGULAR,
    IntegrityChecker,
    dependent_categories,
    referenced_categories,
)
from blogctl.services.result import ServiceError, ServiceResult
from blogctl.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from blogctl.infrastructure.store import BlogStore

logger = logging.getLogger(__name__)

DEFAULT_COUNT = 5


def _paging_value(spec: dict[str, Any], key: str, default: int, errors: list[BlogError]) -> int:
    """Pop a non-negative integer paging control from *spec*."""
    raw = spec.pop(key, None)
    if raw is None:
        return default
    try:
        value = int(raw)
    except (TypeError, ValueError):
        value = -1
    if value < 0 or isinstance(raw, bool):
        errors.append(
            BlogError(
                code=BAD_FIELD_VALUE,
                message=f"bad value: {raw}; {key} must be an integer >= 0",
            )
        )
        return default
    return value


class BlogService(BaseService):
    """Storage-agnostic users / articles / comments service."""

    def __init__(
        self,
        store: BlogStore,
        *,
        validator: SchemaValidator | None = None,
        registry: IdRegistry | None = None,
        default_count: int = DEFAULT_COUNT,
    ) -> None:
        super().__init__(store)
        self._validator = validator or SchemaValidator(BLOG_META)
        self._registry = registry or IdRegistry()
        self._integrity = IntegrityChecker(store)
        self._default_count = default_count
        self._locks = {c: threading.Lock() for c in self._validator.categories}

    @property
    def validator(self) -> SchemaValidator:
        return self._validator

    @property
    def registry(self) -> IdRegistry:
        return self._registry

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @traced
    def create(self, category: str, fields: Mapping[str, Any]) -> ServiceResult:
        """Create an object; ``data["id"]`` is the caller's or the generated id."""
        return self._execute(f"create_{category}", lambda: {"id": self._create(category, fields)})

    @traced
    def find(self, category: str, spec: Mapping[str, Any] | None = None) -> ServiceResult:
        """Find objects by ``id`` or field equality, paged by ``_index`` / ``_count``.

        An unknown category is not an error: it simply has no objects.
        """
        op = f"find_{category}"
        if category not in self._locks:
            return ServiceResult(ok=True, op=op, data={"items": [], "count": 0})
        return self._execute(op, lambda: self._find(category, dict(spec or {})))

    @traced
    def update(self, category: str, spec: Mapping[str, Any]) -> ServiceResult:
        """Overwrite the fields present in *spec* on the object ``spec["id"]``."""
        return self._execute(f"update_{category}", lambda: self._update(category, spec))

    @traced
    def remove(self, category: str, spec: Mapping[str, Any]) -> ServiceResult:
        """Delete ``spec["id"]`` unless other objects still reference it."""
        return self._execute(f"remove_{category}", lambda: self._remove(category, spec))

    @traced
    def clear(self) -> ServiceResult:
        """Delete every object and forget every generated id."""

        def _clear() -> dict[str, Any]:
            with self._locked(*self._locks):
                self._store.clear()
                self._registry.clear()
            return {"cleared": list(self._locks)}

        return self._execute("clear", _clear)

    @traced
    def load(
        self,
        category: str,
        items: Sequence[Mapping[str, Any]],
        *,
        partial: bool = False,
    ) -> ServiceResult:
        """Create many objects. Stops at the first failure unless *partial* is True."""
        op = f"load_{category}"
        created: list[str] = []
        failed: list[dict[str, Any]] = []
        errors: list[BlogError] = []

        for i, item in enumerate(items):
            try:
                with structlog.contextvars.bound_contextvars(op=op):
                    created.append(self._create(category, item))
            except BlogErrors as exc:
                failed.append({"index": i, "codes": exc.codes})
                errors.extend(
                    BlogError(code=e.code, message=f"item {i}: {e.message}") for e in exc.errors
                )
                if not partial:
                    break
            except StoreError as exc:
                return self._storage_failure(op, exc, data={"created": created})

        data = {"created": created, "failed": failed}
        if errors:
            return ServiceResult.failure(op, errors, data=data)
        return ServiceResult(ok=True, op=op, data=data)

    def describe(self) -> ServiceResult:
        """Field table of every category, per action."""
        categories: dict[str, list[dict[str, Any]]] = {}
        for category in self._validator.categories:
            schema = self._validator.schema(category)
            categories[category] = [
                {
                    "name": spec.name,
                    "label": spec.friendly_name,
                    "required": list(spec.required),
                    "forbidden": list(spec.forbidden),
                    "default": spec.default is not None,
                    "immutable": spec.immutable,
                }
                for spec in schema.fields.values()
            ]
        return ServiceResult(ok=True, op="meta", data={"categories": categories})

    # ------------------------------------------------------------------
    # Operations (private)
    # ------------------------------------------------------------------

    def _create(self, category: str, fields: Mapping[str, Any]) -> str:
        with trace_span("validate"):
            obj = self._validator.validate(category, "create", fields)
        obj.pop(IDENTITY_ALIAS, None)

        with self._locked(category, *referenced_categories(category)):
            if "id" in obj:
                if self._store.get(category, obj["id"]) is not None:
                    raise BlogErrors.single(
                        EXISTS, f"object with id {obj['id']} already exists for {category}"
                    )
            else:
                obj = {"id": self._fresh_id(category), **obj}

            with trace_span("integrity"):
                errors = self._integrity.missing_references(category, obj)
            if errors:
                raise BlogErrors(errors)

            with trace_span("persist"):
                self._store.insert(category, obj)

        logger.debug("Created %s %s", category, obj["id"])
        return obj["id"]

    def _find(self, category: str, spec: dict[str, Any]) -> dict[str, Any]:
        paging_errors: list[BlogError] = []
        index = _paging_value(spec, "_index", 0, paging_errors)
        count = _paging_value(spec, "_count", self._default_count, paging_errors)

        with trace_span("validate"):
            try:
                obj = self._validator.validate(category, "find", spec)
            except BlogErrors as exc:
                raise BlogErrors([*paging_errors, *exc.errors]) from None
        if paging_errors:
            raise BlogErrors(paging_errors)

        # Defaults are not filters: only match on what the caller asked for.
        filters = {k: obj[k] for k in spec if k in obj and k != IDENTITY_ALIAS}
        with self._locked(category), trace_span("query"):
            items = self._store.find(category, filters, index=index, count=count)
        return {"items": items, "count": len(items), "index": index}

    def _update(self, category: str, spec: Mapping[str, Any]) -> dict[str, Any]:
        with trace_span("validate"):
            obj = self._validator.validate(category, "update", spec)
        object_id = obj["id"]
        # Defaults are not changes: only write what the caller sent.
        changes = {k: obj[k] for k in spec if k in obj and k not in ("id", IDENTITY_ALIAS)}

        with self._locked(category):
            current = self._store.get(category, object_id)
            if current is None:
                label = SINGULAR.get(category, category)
                raise BlogErrors.single(NOT_FOUND, f"{label} with id {object_id} does not exist")
            errors = self._immutable_changes(category, current, changes)
            if errors:
                raise BlogErrors(errors)
            with trace_span("persist"):
                self._store.replace(category, {**current, **changes, "id": object_id})

        logger.debug("Updated %s %s fields=%s", category, object_id, sorted(changes))
        return {"id": object_id, "updated": sorted(changes)}

    def _remove(self, category: str, spec: Mapping[str, Any]) -> dict[str, Any]:
        with trace_span("validate"):
            obj = self._validator.validate(category, "remove", spec)
        object_id = obj["id"]

        with self._locked(category, *dependent_categories(category)):
            if self._store.get(category, object_id) is None:
                raise BlogErrors.single(
                    NOT_FOUND, f"object with id {object_id} does not exist for {category}"
                )
            with trace_span("integrity"):
                errors = self._integrity.dependents(category, object_id)
            if errors:
                raise BlogErrors(errors)
            with trace_span("persist"):
                self._store.delete(category, object_id)

        logger.debug("Removed %s %s", category, object_id)
        return {"id": object_id}

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _execute(self, op: str, action: Callable[[], dict[str, Any]]) -> ServiceResult:
        with structlog.contextvars.bound_contextvars(op=op):
            try:
                data = action()
            except BlogErrors as exc:
                return ServiceResult.failure(op, exc.errors)
            except StoreError as exc:
                return self._storage_failure(op, exc)
        return ServiceResult(ok=True, op=op, data=data)

    def _storage_failure(self, op: str, exc: StoreError, **kwargs: Any) -> ServiceResult:
        logger.warning("Storage failure during %s: %s", op, exc)
        return ServiceResult(
            ok=False, op=op, errors=[ServiceError(code=DB, message=str(exc))], **kwargs
        )

    def _immutable_changes(
        self, category: str, current: Mapping[str, Any], changes: Mapping[str, Any]
    ) -> list[BlogError]:
        """BAD_FIELD for every immutable field whose value differs from *current*."""
        fields = self._validator.schema(category).fields
        errors: list[BlogError] = []
        for name, value in changes.items():
            spec = fields[name]
            if spec.immutable and value != current.get(name):
                errors.append(
                    BlogError(
                        code=BAD_FIELD,
                        message=f"the {spec.friendly_name} field cannot be changed "
                        f"for {category} update",
                    )
                )
        return errors

    def _fresh_id(self, category: str) -> str:
        # The registry only knows ids issued by this process; a persistent
        # store may already hold ids from earlier runs.
        while True:
            candidate = self._registry.generate(category)
            if self._store.get(category, candidate) is None:
                return candidate

    @contextmanager
    def _locked(self, *categories: str) -> Iterator[None]:
        with ExitStack() as stack:
            for category in sorted(set(categories)):
                lock = self._locks.get(category)
                if lock is not None:
                    stack.enter_context(lock)
            yield
