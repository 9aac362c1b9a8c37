"""Generated-id patterns and the issued-id registry.

Articles and comments get system-generated ids of the form ``W.F``:

- ``W``: random integer with a fixed digit width per category and no
  leading zero (2 digits for articles, 3 for comments).
- ``F``: random 5-digit integer, also without a leading zero.

Users supply their own ids.

INVARIANT: An IdRegistry never hands out the same id twice until
:meth:`IdRegistry.clear` is called. The collision check and the
insertion into the issued set happen under one lock.
"""

from __future__ import annotations

import random
import re
import threading

ID_PATTERNS: dict[str, re.Pattern[str]] = {
    "articles": re.compile(r"^\d{2}\.\d{5}$"),
    "comments": re.compile(r"^\d{3}\.\d{5}$"),
}

WHOLE_WIDTHS: dict[str, int] = {
    "articles": 2,
    "comments": 3,
}

FRACTION_WIDTH = 5


def validate_id(object_id: str, category: str) -> bool:
    """Check whether *object_id* matches the generated-id pattern for *category*."""
    pattern = ID_PATTERNS.get(category)
    if pattern is None:
        return False
    return pattern.fullmatch(object_id) is not None


def _random_digits(rng: random.Random, width: int) -> int:
    return rng.randint(10 ** (width - 1), 10**width - 1)


class IdRegistry:
    """Append-only set of every id generated during the registry's lifetime.

    One registry is owned by each BlogService; tests construct their own
    (optionally with a seeded ``random.Random``) to get isolation.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()
        self._issued: set[str] = set()
        self._lock = threading.Lock()

    def __contains__(self, object_id: object) -> bool:
        with self._lock:
            return object_id in self._issued

    def __len__(self) -> int:
        with self._lock:
            return len(self._issued)

    def generate(self, category: str) -> str:
        """Claim a fresh id for *category*.

        Raises:
            ValueError: If *category* has no generated ids.
        """
        width = WHOLE_WIDTHS.get(category)
        if width is None:
            msg = (
                f"Category {category!r} has no generated ids. "
                f"Expected one of {sorted(WHOLE_WIDTHS)}"
            )
            raise ValueError(msg)

        with self._lock:
            while True:
                whole = _random_digits(self._rng, width)
                fraction = _random_digits(self._rng, FRACTION_WIDTH)
                candidate = f"{whole}.{fraction}"
                if candidate not in self._issued:
                    self._issued.add(candidate)
                    return candidate

    def clear(self) -> None:
        """Forget every issued id (used when all blog state is cleared)."""
        with self._lock:
            self._issued.clear()
