"""SchemaValidator: shape checks and normalization for blog objects.

Pipeline per request: CLASSIFY each input field → CHECK → TRANSFORM →
MISSING check → DEFAULTS. Errors from every stage are collected and
raised together as :class:`BlogErrors`; the output object is only
returned when no error was recorded.

INVARIANT: validate() is pure. It performs no I/O, never mutates its
input, and keeps no reference to the objects it builds.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from blogctl.domain.errors import (
    BAD_CATEGORY,
    BAD_FIELD,
    BAD_FIELD_VALUE,
    MISSING_FIELD,
    BlogError,
    BlogErrors,
)
from blogctl.domain.fields import (
    ACTIONS,
    IDENTITY_ALIAS,
    INTERNAL_PREFIX,
    ActionProfile,
    FieldSpec,
    compile_profiles,
)


@dataclass(frozen=True)
class CategorySchema:
    """Field specs of one category plus their compiled action profiles."""

    name: str
    fields: Mapping[str, FieldSpec]
    profiles: Mapping[str, ActionProfile]

    @classmethod
    def compile(cls, name: str, specs: Sequence[FieldSpec]) -> CategorySchema:
        fields = {spec.name: spec for spec in specs}
        if len(fields) != len(specs):
            msg = f"Duplicate field names in category {name!r}"
            raise ValueError(msg)
        return cls(name=name, fields=fields, profiles=compile_profiles(specs))

    def profile(self, action: str) -> ActionProfile:
        try:
            return self.profiles[action]
        except KeyError:
            msg = f"Unknown action {action!r}. Expected one of {list(ACTIONS)}"
            raise ValueError(msg) from None


class SchemaValidator:
    """Validates input objects against per-category, per-action field rules.

    Construct once from the static blog metadata; the compiled schemas are
    read-only afterwards and may be shared between threads.
    """

    def __init__(self, meta: Mapping[str, Sequence[FieldSpec]]) -> None:
        self._schemas: dict[str, CategorySchema] = {
            category: CategorySchema.compile(category, specs) for category, specs in meta.items()
        }

    @property
    def categories(self) -> list[str]:
        return list(self._schemas)

    def schema(self, category: str) -> CategorySchema:
        schema = self._schemas.get(category)
        if schema is None:
            raise BlogErrors.single(BAD_CATEGORY, f"unknown category {category}")
        return schema

    def validate(self, category: str, action: str, obj: Mapping[str, Any]) -> dict[str, Any]:
        """Return a normalized copy of *obj* or raise BlogErrors.

        Raises:
            BlogErrors: On an unknown category, or with every field error
                found in *obj*, in input order, followed by at most one
                MISSING_FIELD error.
            ValueError: If *action* is not one of :data:`ACTIONS`.
        """
        schema = self.schema(category)
        profile = schema.profile(action)
        suffix = f"for {category} {action}"

        out: dict[str, Any] = {}
        errors: list[BlogError] = []
        missing = set(profile.required)

        for name, value in obj.items():
            spec = schema.fields.get(name)
            if name in profile.forbidden:
                label = spec.friendly_name if spec else name
                errors.append(
                    BlogError(code=BAD_FIELD, message=f"the {label} field is forbidden {suffix}")
                )
            elif name.startswith(INTERNAL_PREFIX):
                if name == IDENTITY_ALIAS:
                    out[name] = value
                else:
                    errors.append(
                        BlogError(
                            code=BAD_FIELD,
                            message=f"the internal field {name} is forbidden {suffix}",
                        )
                    )
            elif spec is None:
                errors.append(
                    BlogError(code=BAD_FIELD, message=f"unknown {category} field {name} {suffix}")
                )
            elif spec.check is not None and not spec.check(value):
                errors.append(
                    BlogError(
                        code=BAD_FIELD_VALUE,
                        message=f"bad value: {value}; {spec.check_error} {suffix}",
                    )
                )
            else:
                out[name] = spec.data(value) if spec.data is not None else value
                missing.discard(name)

        if missing:
            # Report in declaration order so messages are stable.
            labels = ", ".join(
                spec.friendly_name for spec in schema.fields.values() if spec.name in missing
            )
            errors.append(
                BlogError(code=MISSING_FIELD, message=f"missing {labels} fields {suffix}")
            )

        if errors:
            raise BlogErrors(errors)

        for name in profile.optional:
            spec = schema.fields[name]
            if name not in out and spec.default is not None:
                out[name] = spec.default()
        return out
