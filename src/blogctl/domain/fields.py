"""Field specifications and per-action field profiles.

A :class:`FieldSpec` describes one field of one category. Its
``required`` and ``forbidden`` tuples name the actions for which the
field must, or must not, be present; every other action treats it as
optional. An ``immutable`` field may be re-supplied on update but never
changed. :func:`compile_profiles` derives one :class:`ActionProfile`
per action from a category's field list.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

ACTIONS: tuple[str, ...] = ("create", "find", "update", "remove")

INTERNAL_PREFIX = "_"
IDENTITY_ALIAS = "_id"

CheckFn = Callable[[Any], bool]
DataFn = Callable[[Any], Any]
DefaultFn = Callable[[], Any]


@dataclass(frozen=True)
class FieldSpec:
    """Rule set for a single field."""

    name: str
    friendly_name: str
    required: tuple[str, ...] = ()
    forbidden: tuple[str, ...] = ()
    check: CheckFn | None = None
    check_error: str = ""
    data: DataFn | None = None
    default: DefaultFn | None = None
    immutable: bool = False

    def __post_init__(self) -> None:
        unknown = (set(self.required) | set(self.forbidden)) - set(ACTIONS)
        if unknown:
            msg = f"Field {self.name!r} names unknown actions: {sorted(unknown)}"
            raise ValueError(msg)
        overlap = set(self.required) & set(self.forbidden)
        if overlap:
            msg = f"Field {self.name!r} is both required and forbidden for {sorted(overlap)}"
            raise ValueError(msg)


@dataclass(frozen=True)
class ActionProfile:
    """Derived field-name sets for one (category, action) pair."""

    required: frozenset[str]
    forbidden: frozenset[str]
    optional: frozenset[str]


def compile_profiles(specs: Iterable[FieldSpec]) -> dict[str, ActionProfile]:
    """Build the ActionProfile of every action from *specs*."""
    specs = list(specs)
    required: dict[str, set[str]] = {a: set() for a in ACTIONS}
    forbidden: dict[str, set[str]] = {a: set() for a in ACTIONS}
    for spec in specs:
        for action in spec.required:
            required[action].add(spec.name)
        for action in spec.forbidden:
            forbidden[action].add(spec.name)

    names = [spec.name for spec in specs]
    return {
        action: ActionProfile(
            required=frozenset(required[action]),
            forbidden=frozenset(forbidden[action]),
            optional=frozenset(
                n for n in names if n not in required[action] and n not in forbidden[action]
            ),
        )
        for action in ACTIONS
    }
