"""Directory scanning shared by tree, findFiles and grep.

One ``os.scandir`` pass per directory, filtered by a ``WalkFilter`` and
ordered directories first, then by name. A directory that cannot be read
yields no entries and reports the error to the caller instead of aborting
the surrounding traversal.

Entry kinds are taken without following symlinks, so a symlinked directory is
never descended into and link cycles cannot make a walk run forever.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import FrozenSet, Iterator, List, Optional, Tuple

from repo_explorer.config.constants import DEFAULT_IGNORE_NAMES
from repo_explorer.domain.models import (
    ENTRY_DIRECTORY,
    ENTRY_FILE,
    ENTRY_OTHER,
    ENTRY_SYMLINK,
    DirEntry,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WalkFilter:
    """Which entries a walk skips."""
    ignore_names: FrozenSet[str] = frozenset(DEFAULT_IGNORE_NAMES)
    skip_hidden: bool = True

    def excludes(self, name: str) -> bool:
        if self.skip_hidden and name.startswith("."):
            return True
        return name in self.ignore_names


DEFAULT_WALK_FILTER = WalkFilter()


def entry_sort_key(entry: DirEntry) -> Tuple[bool, str, str]:
    """Directories first, then case-folded name, raw name as tie-break."""
    return (not entry.is_dir, entry.name.casefold(), entry.name)


def _entry_kind(child: os.DirEntry) -> str:
    try:
        if child.is_dir(follow_symlinks=False):
            return ENTRY_DIRECTORY
        if child.is_file(follow_symlinks=False):
            return ENTRY_FILE
        if child.is_symlink():
            return ENTRY_SYMLINK
    except OSError:
        pass
    return ENTRY_OTHER


def scan_directory(directory: Path) -> List[DirEntry]:
    """Every entry of ``directory``, unfiltered and unsorted. Raises ``OSError`` on read failure."""
    entries: List[DirEntry] = []
    with os.scandir(directory) as it:
        for child in it:
            kind = _entry_kind(child)
            size: Optional[int] = None
            if kind == ENTRY_FILE:
                try:
                    size = int(child.stat(follow_symlinks=False).st_size)
                except OSError:
                    size = None
            entries.append(DirEntry(name=child.name, path=Path(child.path), kind=kind, size_bytes=size))
    return entries


def read_entries(
    directory: Path,
    walk_filter: WalkFilter = DEFAULT_WALK_FILTER,
) -> Tuple[List[DirEntry], Optional[OSError]]:
    """Filtered, ordered entries of ``directory``.

    Returns ``(entries, scan_error)``. ``scan_error`` is set (and ``entries``
    empty) when the directory cannot be read.
    """
    try:
        entries = scan_directory(directory)
    except OSError as exc:
        logger.debug("cannot read directory %s: %s", directory, exc)
        return [], exc
    visible = [e for e in entries if not walk_filter.excludes(e.name)]
    visible.sort(key=entry_sort_key)
    return visible, None


def iter_files(
    directory: Path,
    walk_filter: WalkFilter = DEFAULT_WALK_FILTER,
) -> Iterator[DirEntry]:
    """Depth-first, in walker order: every non-directory entry below ``directory``.

    Unreadable directories are skipped. Stopping the generator early stops the
    walk, so callers cap results by simply breaking out.
    """
    entries, _ = read_entries(directory, walk_filter)
    for entry in entries:
        if entry.is_dir:
            yield from iter_files(entry.path, walk_filter)
        else:
            yield entry
