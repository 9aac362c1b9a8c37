"""ServiceResult and ServiceError: the universal service contract.

INVARIANT: All service-layer methods return ServiceResult.
A failed result carries the complete ordered error list, never just
the first error.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from blogctl.domain.errors import BlogError


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str


class ServiceResult(BaseModel):
    """Universal return type for all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"create_users"``).
        data: Operation-specific payload on success.
        errors: Every error found if ``ok`` is False, in detection order.
        meta: Optional metadata (timing, counts, etc.).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    errors: list[ServiceError] = Field(default_factory=list)
    meta: dict[str, Any] | None = None

    @property
    def error(self) -> ServiceError | None:
        """The first error, or None on success."""
        return self.errors[0] if self.errors else None

    @property
    def codes(self) -> list[str]:
        return [e.code for e in self.errors]

    @classmethod
    def failure(cls, op: str, errors: Iterable[BlogError], **kwargs: Any) -> ServiceResult:
        """Build a failed result from domain errors."""
        return cls(
            ok=False,
            op=op,
            errors=[ServiceError(code=e.code, message=e.message) for e in errors],
            **kwargs,
        )
