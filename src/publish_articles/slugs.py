"""Article slugs: title slug plus a high-resolution timestamp suffix."""

from __future__ import annotations

import re
import time
from typing import Callable

MAX_BASE_LENGTH = 100

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")


def slugify(title: str, max_length: int = MAX_BASE_LENGTH) -> str:
    """Lower-case, collapse non-alphanumeric runs to '-', trim, truncate."""
    base = _NON_ALNUM_RE.sub("-", (title or "").lower()).strip("-")
    base = base[:max_length].rstrip("-")
    return base or "article"


class SlugGenerator:
    """Produce slugs whose suffixes strictly increase for this generator.

    The suffix is a microsecond timestamp. If the clock has not advanced since
    the previous slug (coarse clocks, identical titles in one run), the last
    suffix is bumped by one, so two slugs from one generator never collide.
    """

    def __init__(self, clock: Callable[[], int] = time.time_ns):
        self._clock = clock
        self._last_suffix = 0

    def next_suffix(self) -> int:
        suffix = self._clock() // 1_000
        if suffix <= self._last_suffix:
            suffix = self._last_suffix + 1
        self._last_suffix = suffix
        return suffix

    def make(self, title: str) -> str:
        return f"{slugify(title)}-{self.next_suffix()}"
