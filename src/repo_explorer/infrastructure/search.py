"""Native content search: per-line regex matching with context windows.

Reproduces ``grep -rn -C N`` output semantics without spawning a process:
each true match is reported once, neighbouring lines within the context
window are reported as context lines, overlapping windows are merged, and
everything stays in file order. Only regular files are scanned; symlinks met
during recursion are skipped, as ``grep -r`` does.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import List, Optional, Tuple

from repo_explorer.config.constants import BINARY_SNIFF_BYTES, MAX_SEARCH_MATCHES, SEARCH_IGNORE_NAMES
from repo_explorer.domain.errors import InvalidPatternError
from repo_explorer.domain.models import ENTRY_FILE, SearchMatch, SearchResult

from .globbing import compile_glob
from .sandbox import PathLike, relative_to_root
from .walker import WalkFilter, iter_files

logger = logging.getLogger(__name__)

SEARCH_WALK_FILTER = WalkFilter(ignore_names=frozenset(SEARCH_IGNORE_NAMES), skip_hidden=False)


def compile_search_pattern(pattern: str, case_insensitive: bool = False) -> "re.Pattern[str]":
    flags = re.IGNORECASE if case_insensitive else 0
    try:
        return re.compile(pattern, flags)
    except re.error as exc:
        raise InvalidPatternError(pattern, str(exc)) from exc


def split_lines(text: str) -> List[str]:
    """Split on ``\\n``; a trailing newline does not start another line."""
    if not text:
        return []
    lines = text.split("\n")
    if text.endswith("\n"):
        lines.pop()
    return lines


def read_text_lines(path: Path) -> Optional[List[str]]:
    """Lines of a text file, or ``None`` for binary or unreadable files."""
    try:
        data = path.read_bytes()
    except OSError as exc:
        logger.debug("skipping unreadable file %s: %s", path, exc)
        return None
    if b"\0" in data[:BINARY_SNIFF_BYTES]:
        logger.debug("skipping binary file %s", path)
        return None
    return split_lines(data.decode("utf-8", errors="replace"))


def search_lines(
    lines: List[str],
    regex: "re.Pattern[str]",
    rel_path: str,
    context_lines: int = 0,
    limit: Optional[int] = None,
) -> Tuple[List[SearchMatch], bool]:
    """Matches and context lines for one file.

    At most ``limit`` true matches are kept; the second element is True when
    more matches existed beyond it.
    """
    hits = [i for i, line in enumerate(lines) if regex.search(line)]
    truncated = False
    if limit is not None and len(hits) > limit:
        hits = hits[:limit]
        truncated = True
    if not hits:
        return [], truncated

    hit_set = set(hits)
    shown = set()
    for i in hits:
        lo = max(0, i - context_lines)
        hi = min(len(lines) - 1, i + context_lines)
        shown.update(range(lo, hi + 1))

    return [
        SearchMatch(file=rel_path, line_number=i + 1, content=lines[i], is_context=i not in hit_set)
        for i in sorted(shown)
    ], truncated


def search(
    target: Path,
    pattern: str,
    root: PathLike,
    file_pattern: str = "*",
    case_insensitive: bool = False,
    context_lines: int = 0,
    max_matches: int = MAX_SEARCH_MATCHES,
    walk_filter: WalkFilter = SEARCH_WALK_FILTER,
) -> SearchResult:
    """Search ``target`` (a directory, scanned recursively, or a single file) for ``pattern``.

    Raises ``InvalidPatternError`` for a malformed regex. Finding nothing is
    an empty result, not an error.
    """
    regex = compile_search_pattern(pattern, case_insensitive)
    name_matches = compile_glob(file_pattern)
    context_lines = max(0, context_lines)

    if target.is_file():
        candidates = [target] if name_matches(target.name) else []
    else:
        candidates = (
            entry.path
            for entry in iter_files(target, walk_filter)
            if entry.kind == ENTRY_FILE and name_matches(entry.name)
        )

    result = SearchResult()
    found = 0
    for path in candidates:
        lines = read_text_lines(path)
        if not lines:
            continue
        # Once the ceiling is reached the limit is 0: later files are only
        # checked for a hit that would have been cut off.
        file_matches, cut = search_lines(
            lines, regex, relative_to_root(root, path), context_lines, limit=max_matches - found,
        )
        result.matches.extend(file_matches)
        found += sum(1 for m in file_matches if not m.is_context)
        if cut:
            result.truncated = True
            logger.info("search for %r stopped at %d matches", pattern, found)
            break
    return result

