"""Blog error codes and the multi-error exception.

INVARIANT: Validation and integrity failures always surface as a
non-empty, ordered list of :class:`BlogError`, never a single error,
never truncated to the first problem found.
"""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel

# ── Error codes (flat taxonomy) ──────────────────────────────────────

BAD_CATEGORY = "BAD_CATEGORY"
BAD_FIELD = "BAD_FIELD"
BAD_FIELD_VALUE = "BAD_FIELD_VALUE"
MISSING_FIELD = "MISSING_FIELD"
BAD_ID = "BAD_ID"
EXISTS = "EXISTS"
NOT_FOUND = "NOT_FOUND"
DB = "DB"

ERROR_CODES: frozenset[str] = frozenset(
    {BAD_CATEGORY, BAD_FIELD, BAD_FIELD_VALUE, MISSING_FIELD, BAD_ID, EXISTS, NOT_FOUND, DB}
)


class BlogError(BaseModel):
    """One (code, message) pair."""

    model_config = {"frozen": True}

    code: str
    message: str

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


class BlogErrors(Exception):
    """Raised with the complete ordered list of errors for one request."""

    def __init__(self, errors: Iterable[BlogError]) -> None:
        self.errors: list[BlogError] = list(errors)
        if not self.errors:
            raise ValueError("BlogErrors requires at least one error")
        super().__init__("; ".join(str(e) for e in self.errors))

    @classmethod
    def single(cls, code: str, message: str) -> BlogErrors:
        return cls([BlogError(code=code, message=message)])

    @property
    def codes(self) -> list[str]:
        return [e.code for e in self.errors]
