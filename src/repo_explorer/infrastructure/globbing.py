"""Shell-style name patterns: ``*`` and ``?`` only, case-insensitive, anchored to the whole name."""

from __future__ import annotations

import re
from typing import Callable


def glob_to_regex(pattern: str) -> "re.Pattern[str]":
    parts = []
    for ch in pattern or "*":
        if ch == "*":
            parts.append(".*")
        elif ch == "?":
            parts.append(".")
        else:
            parts.append(re.escape(ch))
    return re.compile("".join(parts), re.IGNORECASE | re.DOTALL)


def compile_glob(pattern: str) -> Callable[[str], bool]:
    """Return a predicate testing a file or directory *name* (not a path) against ``pattern``."""
    regex = glob_to_regex(pattern)

    def matches(name: str) -> bool:
        return regex.fullmatch(name) is not None

    return matches
