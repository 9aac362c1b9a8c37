"""Static field metadata for the blog categories.

BLOG_META maps each category to its ordered FieldSpec list. It is the
only schema configuration the service uses; it is compiled once by
:class:`~blogctl.domain.validator.SchemaValidator`.

Foreign-key fields (``authorId``, ``commenterId``, ``articleId``) and
``creationTime`` are immutable: an update may repeat their stored value
but never change it, so a stored reference can never be redirected.
"""

from __future__ import annotations

import re
from datetime import UTC, datetime
from typing import Any

from blogctl.domain.fields import FieldSpec

USERS = "users"
ARTICLES = "articles"
COMMENTS = "comments"

ROLES: frozenset[str] = frozenset({"admin", "author", "commenter"})

_ID_RE = re.compile(r"^\w+$")
_NAME_RE = re.compile(r"^[a-zA-Z\-' ]+$")
_EMAIL_RE = re.compile(r"^[^@]+@[^.]+(\.[^.]+)+$")
_ISO_RE = re.compile(r"^\d{4}-\d\d-\d\d(T[012]\d:[0-5]\d(:[0-6]\d(\.\d+)?)?(Z|[+-]\d\d:\d\d)?)?$")
_WORD_RE = re.compile(r"^[\w\-]+$")
_GENERATED_ID_RE = re.compile(r"^\d+\.\d+$")


# ── Checks ───────────────────────────────────────────────────────────


def _matches(pattern: re.Pattern[str]):
    def check(value: Any) -> bool:
        return isinstance(value, str) and pattern.fullmatch(value) is not None

    return check


def _non_empty(value: Any) -> bool:
    return isinstance(value, str) and value.strip() != ""


def _split_list(value: Any) -> list[str]:
    """Accept ``"a,b"`` or ``["a", "b"]``; always return a list of stripped strings."""
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    return [str(part).strip() for part in value]


def _is_list_of(pattern: re.Pattern[str] | None = None, choices: frozenset[str] | None = None):
    def check(value: Any) -> bool:
        if not isinstance(value, (str, list, tuple)):
            return False
        items = _split_list(value)
        if choices is not None and not items:
            return False
        for item in items:
            if pattern is not None and not pattern.fullmatch(item):
                return False
            if choices is not None and item not in choices:
                return False
        return True

    return check


def now_iso() -> str:
    """Current UTC time as ISO 8601 with a ``Z`` suffix."""
    return datetime.now(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")


# ── Shared fields ────────────────────────────────────────────────────

_NOT_ON_REMOVE = ("remove",)


def _timestamps(label: str) -> list[FieldSpec]:
    return [
        FieldSpec(
            name="creationTime",
            friendly_name=f"{label} creation time",
            forbidden=_NOT_ON_REMOVE,
            immutable=True,
            check=_matches(_ISO_RE),
            check_error=f"the {label} creation time must be a valid ISO-8601 date-time",
            default=now_iso,
        ),
        FieldSpec(
            name="updateTime",
            friendly_name=f"{label} update time",
            forbidden=_NOT_ON_REMOVE,
            check=_matches(_ISO_RE),
            check_error=f"the {label} update time must be a valid ISO-8601 date-time",
            default=now_iso,
        ),
    ]


# ── Categories ───────────────────────────────────────────────────────

USER_FIELDS: list[FieldSpec] = [
    FieldSpec(
        name="id",
        friendly_name="user ID",
        required=("create", "update", "remove"),
        check=_matches(_ID_RE),
        check_error="user ID can only contain alphanumerics or _",
    ),
    FieldSpec(
        name="email",
        friendly_name="user email",
        required=("create",),
        forbidden=_NOT_ON_REMOVE,
        check=_matches(_EMAIL_RE),
        check_error='user email must be of the form "user@domain.tld"',
    ),
    FieldSpec(
        name="firstName",
        friendly_name="user first name",
        required=("create",),
        forbidden=_NOT_ON_REMOVE,
        check=_matches(_NAME_RE),
        check_error="user first name can only contain alphabetics, -, ' or space",
    ),
    FieldSpec(
        name="lastName",
        friendly_name="user last name",
        required=("create",),
        forbidden=_NOT_ON_REMOVE,
        check=_matches(_NAME_RE),
        check_error="user last name can only contain alphabetics, -, ' or space",
    ),
    FieldSpec(
        name="roles",
        friendly_name="user roles",
        required=("create",),
        forbidden=_NOT_ON_REMOVE,
        check=_is_list_of(choices=ROLES),
        check_error=f"user roles must be a non-empty list drawn from {', '.join(sorted(ROLES))}",
        data=_split_list,
    ),
    *_timestamps("user"),
]

ARTICLE_FIELDS: list[FieldSpec] = [
    FieldSpec(
        name="id",
        friendly_name="article ID",
        required=("update", "remove"),
        forbidden=("create",),
        check=_matches(_GENERATED_ID_RE),
        check_error="article ID must have the form NN.NNNNN",
    ),
    FieldSpec(
        name="title",
        friendly_name="article title",
        required=("create",),
        forbidden=_NOT_ON_REMOVE,
        check=_non_empty,
        check_error="article title must not be empty",
    ),
    FieldSpec(
        name="content",
        friendly_name="article content",
        required=("create",),
        forbidden=_NOT_ON_REMOVE,
        check=lambda value: isinstance(value, str),
        check_error="article content must be text",
    ),
    FieldSpec(
        name="authorId",
        friendly_name="article author ID",
        required=("create",),
        forbidden=_NOT_ON_REMOVE,
        immutable=True,
        check=_matches(_ID_RE),
        check_error="article author ID can only contain alphanumerics or _",
    ),
    FieldSpec(
        name="keywords",
        friendly_name="article keywords",
        forbidden=_NOT_ON_REMOVE,
        check=_is_list_of(pattern=_WORD_RE),
        check_error="article keywords must be a list of words",
        data=_split_list,
    ),
    *_timestamps("article"),
]

COMMENT_FIELDS: list[FieldSpec] = [
    FieldSpec(
        name="id",
        friendly_name="comment ID",
        required=("update", "remove"),
        forbidden=("create",),
        check=_matches(_GENERATED_ID_RE),
        check_error="comment ID must have the form NNN.NNNNN",
    ),
    FieldSpec(
        name="commenterId",
        friendly_name="commenter user ID",
        required=("create",),
        forbidden=_NOT_ON_REMOVE,
        immutable=True,
        check=_matches(_ID_RE),
        check_error="commenter user ID can only contain alphanumerics or _",
    ),
    FieldSpec(
        name="articleId",
        friendly_name="commented article ID",
        required=("create",),
        forbidden=_NOT_ON_REMOVE,
        immutable=True,
        check=_matches(_GENERATED_ID_RE),
        check_error="commented article ID must have the form NN.NNNNN",
    ),
    FieldSpec(
        name="content",
        friendly_name="comment content",
        required=("create",),
        forbidden=_NOT_ON_REMOVE,
        check=_non_empty,
        check_error="comment content must not be empty",
    ),
    *_timestamps("comment"),
]

BLOG_META: dict[str, list[FieldSpec]] = {
    USERS: USER_FIELDS,
    ARTICLES: ARTICLE_FIELDS,
    COMMENTS: COMMENT_FIELDS,
}
