"""Recursive file search by name predicate."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, List

from repo_explorer.config.constants import MAX_FIND_RESULTS

from .sandbox import PathLike, relative_to_root
from .walker import DEFAULT_WALK_FILTER, WalkFilter, iter_files


def find_files(
    directory: Path,
    matches: Callable[[str], bool],
    root: PathLike,
    max_results: int = MAX_FIND_RESULTS,
    walk_filter: WalkFilter = DEFAULT_WALK_FILTER,
) -> List[str]:
    """Paths (relative to ``root``) of files below ``directory`` whose base name satisfies ``matches``.

    Collected in one depth-first walk (directories first, then by name at each
    level) and cut off as soon as ``max_results`` paths are found. That is the
    first N in walk order, not the first N of a global sort.
    """
    results: List[str] = []
    if max_results <= 0:
        return results
    for entry in iter_files(directory, walk_filter):
        if matches(entry.name):
            results.append(relative_to_root(root, entry.path))
            if len(results) >= max_results:
                break
    return results
