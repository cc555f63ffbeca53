"""Application layer: the six exploration operations and their dispatch.

Each operation takes an already-validated root and returns either its success
record or a ``NotFoundResult``. ``explore()`` is the entry point used by the
CLI, the HTTP API and the agent tool: it validates the root, reads the
camelCase parameters agents send, and returns the record as a dict.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from repo_explorer.config import ExplorerConfig, load_config
from repo_explorer.domain.errors import (
    ExplorerError,
    InvalidParameterError,
    MissingRequiredParameterError,
)
from repo_explorer.domain.models import (
    ExploreOutcome,
    FileInfoOutcome,
    FileInfoResult,
    FindFilesOutcome,
    FindFilesResult,
    GrepOutcome,
    GrepResult,
    ListDirectoryOutcome,
    ListDirectoryResult,
    ListEntry,
    NotFoundResult,
    ReadFileOutcome,
    ReadFileResult,
    TreeOutcome,
    TreeResult,
)
from repo_explorer.infrastructure.finder import find_files as find_matching_files
from repo_explorer.infrastructure.formatting import birth_time, format_size, iso_timestamp, octal_mode
from repo_explorer.infrastructure.globbing import compile_glob
from repo_explorer.infrastructure.sandbox import resolve_path, validate_root
from repo_explorer.infrastructure.search import compile_search_pattern, search
from repo_explorer.infrastructure.tree import build_tree, render_tree
from repo_explorer.infrastructure.walker import entry_sort_key, scan_directory

logger = logging.getLogger(__name__)

OPERATIONS = ("listDirectory", "readFile", "grep", "findFiles", "fileInfo", "tree")


def _stat(path: Path) -> Optional[os.stat_result]:
    try:
        return path.stat()
    except (OSError, ValueError):
        # ValueError: an embedded NUL byte in an agent-supplied path.
        return None


def _display(path: str) -> str:
    return path or "."


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------

def list_directory(root: Path, path: str = "") -> ListDirectoryOutcome:
    """Every entry of one directory (hidden ones included), directories first, then by name."""
    shown = _display(path)
    full = resolve_path(root, shown)
    st = _stat(full)
    if st is None:
        return NotFoundResult("listDirectory", shown, f"Directory not found: {shown}")
    if not full.is_dir():
        return NotFoundResult(
            "listDirectory", shown, f"Path exists but is not a directory: {path}", is_file=full.is_file(),
        )
    try:
        entries = sorted(scan_directory(full), key=entry_sort_key)
    except OSError as exc:
        logger.debug("listDirectory cannot read %s: %s", full, exc)
        return NotFoundResult("listDirectory", shown, f"Permission denied: {shown}")

    listed = [
        ListEntry(
            name=e.name,
            type=e.kind,
            size=format_size(e.size_bytes) if e.size_bytes is not None else None,
            size_bytes=e.size_bytes,
        )
        for e in entries
    ]
    return ListDirectoryResult(path=shown, entries=listed)


def read_file(root: Path, path: str, max_lines: int = 0, line_offset: int = 0) -> ReadFileOutcome:
    """Contents of one file, optionally windowed.

    ``line_offset`` skips that many lines (0-based); ``max_lines`` of 0 means
    no limit. Returned line numbers are 1-based positions in the whole file.
    """
    if not path:
        return NotFoundResult("readFile", "", "Path is required for readFile operation")
    full = resolve_path(root, path)
    st = _stat(full)
    if st is None:
        return NotFoundResult("readFile", path, f"File not found: {path}")
    if not full.is_file():
        return NotFoundResult(
            "readFile", path, f"Path exists but is not a file: {path}", is_directory=full.is_dir(),
        )
    try:
        content = full.read_bytes().decode("utf-8", errors="replace")
    except OSError as exc:
        logger.debug("readFile cannot read %s: %s", full, exc)
        return NotFoundResult("readFile", path, f"Permission denied: {path}")

    lines = content.split("\n")
    total = len(lines)
    if line_offset > 0:
        lines = lines[line_offset:]
    if max_lines > 0:
        lines = lines[:max_lines]
    return ReadFileResult(
        path=path,
        total_lines=total,
        line_offset=line_offset,
        size=format_size(st.st_size),
        size_bytes=st.st_size,
        lines=lines,
    )


def grep(
    root: Path,
    search_pattern: str,
    path: str = "",
    file_pattern: str = "*",
    case_insensitive: bool = False,
    context_lines: int = 0,
    config: Optional[ExplorerConfig] = None,
) -> GrepOutcome:
    """Regex search over file contents below ``path`` (or in ``path`` itself when it is a file)."""
    if not search_pattern:
        raise MissingRequiredParameterError("searchPattern is required for grep operation")
    config = config or load_config()
    compile_search_pattern(search_pattern, case_insensitive)
    shown = _display(path)
    full = resolve_path(root, shown)
    if _stat(full) is None:
        return NotFoundResult("grep", shown, f"Path not found: {shown}")

    result = search(
        full,
        search_pattern,
        root,
        file_pattern=file_pattern or "*",
        case_insensitive=case_insensitive,
        context_lines=context_lines,
        max_matches=config.max_search_matches,
        walk_filter=config.search_filter(),
    )
    return GrepResult(
        path=shown,
        pattern=search_pattern,
        file_pattern=file_pattern or "*",
        case_insensitive=case_insensitive,
        search=result,
    )


def find_files(
    root: Path,
    path: str = "",
    name_pattern: str = "*",
    max_results: Optional[int] = None,
    config: Optional[ExplorerConfig] = None,
) -> FindFilesOutcome:
    """Files below ``path`` whose base name matches the glob ``name_pattern``."""
    config = config or load_config()
    shown = _display(path)
    full = resolve_path(root, shown)
    if _stat(full) is None:
        return NotFoundResult("findFiles", shown, f"Directory not found: {shown}")
    if not full.is_dir():
        return NotFoundResult(
            "findFiles", shown, f"Path exists but is not a directory: {path}", is_file=full.is_file(),
        )
    limit = config.max_find_results if max_results is None else max_results
    files = find_matching_files(
        full, compile_glob(name_pattern), root, max_results=limit, walk_filter=config.walk_filter(),
    )
    return FindFilesResult(path=shown, pattern=name_pattern or "*", files=files)


def file_info(root: Path, path: str) -> FileInfoOutcome:
    """Metadata for one path. Size, times and mode follow symlinks; ``is_symbolic_link`` does not."""
    if not path:
        return NotFoundResult("fileInfo", "", "Path is required for fileInfo operation")
    full = resolve_path(root, path)
    st = _stat(full)
    if st is None:
        return NotFoundResult("fileInfo", path, f"Path not found: {path}")
    return FileInfoResult(
        path=path,
        is_file=full.is_file(),
        is_directory=full.is_dir(),
        is_symbolic_link=full.is_symlink(),
        size=format_size(st.st_size),
        size_bytes=st.st_size,
        created=iso_timestamp(birth_time(st)),
        modified=iso_timestamp(st.st_mtime),
        accessed=iso_timestamp(st.st_atime),
        mode=octal_mode(st.st_mode),
    )


def tree(
    root: Path,
    path: str = "",
    max_depth: Optional[int] = None,
    config: Optional[ExplorerConfig] = None,
) -> TreeOutcome:
    """ASCII tree of ``path``; depth is clamped into the configured bounds (1..10 by default)."""
    config = config or load_config()
    depth = config.clamp_tree_depth(config.default_tree_depth if max_depth is None else max_depth)
    shown = _display(path)
    full = resolve_path(root, shown)
    if _stat(full) is None:
        return NotFoundResult("tree", shown, f"Directory not found: {shown}")
    if not full.is_dir():
        return NotFoundResult(
            "tree", shown, f"Path exists but is not a directory: {path}", is_file=full.is_file(),
        )
    root_name = path if path and path != "." else root.name
    lines = build_tree(full, depth, config.walk_filter())
    return TreeResult(path=shown, max_depth=depth, tree_lines=render_tree(root_name, lines))


# ---------------------------------------------------------------------------
# Parameter handling and dispatch
# ---------------------------------------------------------------------------

def _str_param(params: Mapping[str, Any], name: str, default: str = "") -> str:
    value = params.get(name)
    if value is None:
        return default
    return str(value)


def _int_param(params: Mapping[str, Any], name: str, default: Optional[int]) -> Optional[int]:
    value = params.get(name)
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        raise InvalidParameterError(f"{name} must be a number, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidParameterError(f"{name} must be a number, got {value!r}")


def _count_param(params: Mapping[str, Any], name: str, default: Optional[int]) -> Optional[int]:
    """Non-negative integer parameter; negative values are treated as 0."""
    value = _int_param(params, name, default)
    if value is not None and value < 0:
        logger.debug("%s=%d is negative; treating as 0", name, value)
        return 0
    return value


def _bool_param(params: Mapping[str, Any], name: str, default: bool = False) -> bool:
    value = params.get(name)
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def _run_list_directory(root: Path, params: Mapping[str, Any], config: ExplorerConfig) -> ExploreOutcome:
    return list_directory(root, _str_param(params, "path"))


def _run_read_file(root: Path, params: Mapping[str, Any], config: ExplorerConfig) -> ExploreOutcome:
    return read_file(
        root,
        _str_param(params, "path"),
        max_lines=_count_param(params, "maxLines", 0),
        line_offset=_count_param(params, "lineOffset", 0),
    )


def _run_grep(root: Path, params: Mapping[str, Any], config: ExplorerConfig) -> ExploreOutcome:
    return grep(
        root,
        _str_param(params, "searchPattern"),
        path=_str_param(params, "path"),
        file_pattern=_str_param(params, "filePattern", "*"),
        case_insensitive=_bool_param(params, "caseInsensitive"),
        context_lines=_count_param(params, "contextLines", 0),
        config=config,
    )


def _run_find_files(root: Path, params: Mapping[str, Any], config: ExplorerConfig) -> ExploreOutcome:
    return find_files(
        root,
        path=_str_param(params, "path"),
        name_pattern=_str_param(params, "namePattern", "*"),
        max_results=_count_param(params, "maxResults", None),
        config=config,
    )


def _run_file_info(root: Path, params: Mapping[str, Any], config: ExplorerConfig) -> ExploreOutcome:
    return file_info(root, _str_param(params, "path"))


def _run_tree(root: Path, params: Mapping[str, Any], config: ExplorerConfig) -> ExploreOutcome:
    return tree(root, path=_str_param(params, "path"), max_depth=_int_param(params, "maxDepth", None), config=config)


_HANDLERS: Dict[str, Callable[[Path, Mapping[str, Any], ExplorerConfig], ExploreOutcome]] = {
    "listDirectory": _run_list_directory,
    "readFile": _run_read_file,
    "grep": _run_grep,
    "findFiles": _run_find_files,
    "fileInfo": _run_file_info,
    "tree": _run_tree,
}


def run_operation(
    root_path: Optional[str],
    operation: str,
    params: Optional[Mapping[str, Any]] = None,
    *,
    config: Optional[ExplorerConfig] = None,
) -> ExploreOutcome:
    """Validate the root, dispatch ``operation`` and return its typed record.

    Raises ``MissingRequiredParameterError`` (no root, unknown operation),
    ``InvalidRootError``, ``PathTraversalError``, ``InvalidPatternError`` or
    ``InvalidParameterError``. Absent targets come back as ``NotFoundResult``.
    """
    if not root_path:
        raise MissingRequiredParameterError("Root path is required")
    root = validate_root(root_path)
    handler = _HANDLERS.get(operation)
    if handler is None:
        raise MissingRequiredParameterError(
            f"Unknown operation: {operation}. Expected one of: {', '.join(OPERATIONS)}"
        )
    config = config or load_config()
    params = params or {}
    logger.info("explore %s root=%s path=%r", operation, root, params.get("path", ""))
    return handler(root, params, config)


def explore(
    root_path: Optional[str],
    operation: str,
    params: Optional[Mapping[str, Any]] = None,
    *,
    config: Optional[ExplorerConfig] = None,
) -> Dict[str, Any]:
    """``run_operation`` rendered as the camelCase dict agents receive."""
    return run_operation(root_path, operation, params, config=config).to_dict()


def explore_many(
    requests: Iterable[Any],
    *,
    continue_on_fail: bool = False,
    config: Optional[ExplorerConfig] = None,
) -> List[Dict[str, Any]]:
    """Run independent requests (``{"rootPath", "operation", ...params}``) in order.

    With ``continue_on_fail`` a structural error for one request becomes an
    ``{"error", "item"}`` record and the remaining requests still run.
    """
    results: List[Dict[str, Any]] = []
    for index, request in enumerate(requests):
        try:
            if not isinstance(request, Mapping):
                raise InvalidParameterError(
                    f"Request {index} must be an object, got {type(request).__name__}"
                )
            params = {k: v for k, v in request.items() if k not in ("rootPath", "operation")}
            results.append(
                explore(request.get("rootPath"), str(request.get("operation") or ""), params, config=config)
            )
        except ExplorerError as exc:
            if not continue_on_fail:
                raise
            logger.warning("request %d failed: %s", index, exc)
            results.append({"error": str(exc), "item": index})
    return results


__all__ = [
    "OPERATIONS",
    "list_directory",
    "read_file",
    "grep",
    "find_files",
    "file_info",
    "tree",
    "run_operation",
    "explore",
    "explore_many",
]
