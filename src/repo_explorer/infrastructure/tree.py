"""ASCII tree rendering of a directory subtree."""

from __future__ import annotations

from pathlib import Path
from typing import List

from repo_explorer.config.constants import PERMISSION_DENIED_PLACEHOLDER

from .walker import DEFAULT_WALK_FILTER, WalkFilter, read_entries

BRANCH = "├── "
LAST_BRANCH = "└── "
PIPE_INDENT = "│   "
SPACE_INDENT = "    "


def build_tree(
    directory: Path,
    max_depth: int,
    walk_filter: WalkFilter = DEFAULT_WALK_FILTER,
    *,
    depth: int = 1,
    prefix: str = "",
) -> List[str]:
    """Lines for the children of ``directory``, down to ``max_depth`` levels.

    ``depth`` is the level of ``directory``'s immediate children (1 at the
    top). Directories carry a trailing ``/``. An unreadable directory renders
    as a single placeholder line at its position.
    """
    if depth > max_depth:
        return []

    entries, error = read_entries(directory, walk_filter)
    if error is not None:
        return [f"{prefix}{PERMISSION_DENIED_PLACEHOLDER}"]

    lines: List[str] = []
    for index, entry in enumerate(entries):
        is_last = index == len(entries) - 1
        connector = LAST_BRANCH if is_last else BRANCH
        if entry.is_dir:
            lines.append(f"{prefix}{connector}{entry.name}/")
            if depth < max_depth:
                child_prefix = prefix + (SPACE_INDENT if is_last else PIPE_INDENT)
                lines.extend(
                    build_tree(entry.path, max_depth, walk_filter, depth=depth + 1, prefix=child_prefix)
                )
        else:
            lines.append(f"{prefix}{connector}{entry.name}")
    return lines


def render_tree(root_name: str, lines: List[str]) -> List[str]:
    """Prepend the root line (``root_name/``) to the lines from ``build_tree``."""
    return [f"{root_name.rstrip('/')}/"] + list(lines)
