"""Domain models: directory entries, search matches and per-operation result records. Pure data, no I/O.

Each operation returns either its success record or a ``NotFoundResult``.
Both carry an explicit discriminant (``found``, or ``exists`` for fileInfo) so
callers branch on data instead of catching exceptions. ``to_dict()`` renders
the camelCase shape agents receive.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

ENTRY_FILE = "file"
ENTRY_DIRECTORY = "directory"
ENTRY_SYMLINK = "symlink"
ENTRY_OTHER = "other"


@dataclass(frozen=True)
class DirEntry:
    """One filesystem entry from a single directory read. Kind is detected without following symlinks."""
    name: str
    path: Path
    kind: str
    size_bytes: Optional[int] = None

    @property
    def is_dir(self) -> bool:
        return self.kind == ENTRY_DIRECTORY


@dataclass(frozen=True)
class SearchMatch:
    """A matching line, or a context line around one (``is_context=True``)."""
    file: str           # relative to the sandbox root
    line_number: int    # 1-based
    content: str
    is_context: bool = False

    def to_dict(self, include_file: bool = True) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        if include_file:
            out["file"] = self.file
        out["lineNumber"] = self.line_number
        out["content"] = self.content
        out["isContext"] = self.is_context
        return out


@dataclass
class SearchResult:
    """Output of one content search: matches and context lines in file order."""
    matches: List[SearchMatch] = field(default_factory=list)
    truncated: bool = False

    @property
    def matches_by_file(self) -> Dict[str, List[SearchMatch]]:
        grouped: Dict[str, List[SearchMatch]] = {}
        for m in self.matches:
            grouped.setdefault(m.file, []).append(m)
        return grouped

    @property
    def total_matches(self) -> int:
        return sum(1 for m in self.matches if not m.is_context)

    @property
    def files_with_matches(self) -> int:
        return len({m.file for m in self.matches if not m.is_context})


# ---------------------------------------------------------------------------
# Result records
# ---------------------------------------------------------------------------

@dataclass
class NotFoundResult:
    """Soft failure: the target is absent, unreadable, or the wrong kind for the operation."""
    operation: str
    path: str
    message: str
    is_file: Optional[bool] = None
    is_directory: Optional[bool] = None

    @property
    def discriminant(self) -> str:
        return "exists" if self.operation == "fileInfo" else "found"

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "operation": self.operation,
            "path": self.path,
            self.discriminant: False,
            "message": self.message,
        }
        if self.is_file is not None:
            out["isFile"] = self.is_file
        if self.is_directory is not None:
            out["isDirectory"] = self.is_directory
        return out


@dataclass
class ListEntry:
    name: str
    type: str
    size: Optional[str] = None
    size_bytes: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"name": self.name, "type": self.type}
        if self.size_bytes is not None:
            out["size"] = self.size
            out["sizeBytes"] = self.size_bytes
        return out


@dataclass
class ListDirectoryResult:
    path: str
    entries: List[ListEntry]
    operation: str = field(default="listDirectory", init=False)
    found: bool = field(default=True, init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "operation": self.operation,
            "path": self.path,
            "found": self.found,
            "totalItems": len(self.entries),
            "directories": sum(1 for e in self.entries if e.type == ENTRY_DIRECTORY),
            "files": sum(1 for e in self.entries if e.type == ENTRY_FILE),
            "entries": [e.to_dict() for e in self.entries],
        }


@dataclass
class ReadFileResult:
    path: str
    total_lines: int
    line_offset: int
    size: str
    size_bytes: int
    lines: List[str]
    operation: str = field(default="readFile", init=False)
    found: bool = field(default=True, init=False)

    @property
    def content(self) -> str:
        return "\n".join(self.lines)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "operation": self.operation,
            "path": self.path,
            "found": self.found,
            "totalLines": self.total_lines,
            "linesReturned": len(self.lines),
            "lineOffset": self.line_offset,
            "size": self.size,
            "sizeBytes": self.size_bytes,
            "content": self.content,
            "lines": [
                {"lineNumber": self.line_offset + i + 1, "content": line}
                for i, line in enumerate(self.lines)
            ],
        }


@dataclass
class GrepResult:
    path: str
    pattern: str
    file_pattern: str
    case_insensitive: bool
    search: SearchResult
    operation: str = field(default="grep", init=False)
    found: bool = field(default=True, init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "operation": self.operation,
            "path": self.path,
            "found": self.found,
            "pattern": self.pattern,
            "filePattern": self.file_pattern,
            "caseInsensitive": self.case_insensitive,
            "totalMatches": self.search.total_matches,
            "filesWithMatches": self.search.files_with_matches,
            "matchesByFile": {
                f: [m.to_dict(include_file=False) for m in ms]
                for f, ms in self.search.matches_by_file.items()
            },
            "matches": [m.to_dict() for m in self.search.matches],
            "truncated": self.search.truncated,
        }


@dataclass
class FindFilesResult:
    path: str
    pattern: str
    files: List[str]
    operation: str = field(default="findFiles", init=False)
    found: bool = field(default=True, init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "operation": self.operation,
            "path": self.path,
            "found": self.found,
            "pattern": self.pattern,
            "totalFound": len(self.files),
            "files": list(self.files),
        }


@dataclass
class FileInfoResult:
    path: str
    is_file: bool
    is_directory: bool
    is_symbolic_link: bool
    size: str
    size_bytes: int
    created: str
    modified: str
    accessed: str
    mode: str
    operation: str = field(default="fileInfo", init=False)
    exists: bool = field(default=True, init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "operation": self.operation,
            "path": self.path,
            "exists": self.exists,
            "isFile": self.is_file,
            "isDirectory": self.is_directory,
            "isSymbolicLink": self.is_symbolic_link,
            "size": self.size,
            "sizeBytes": self.size_bytes,
            "created": self.created,
            "modified": self.modified,
            "accessed": self.accessed,
            "mode": self.mode,
        }


@dataclass
class TreeResult:
    path: str
    max_depth: int
    tree_lines: List[str]   # includes the root line
    operation: str = field(default="tree", init=False)
    found: bool = field(default=True, init=False)

    @property
    def tree(self) -> str:
        return "\n".join(self.tree_lines)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "operation": self.operation,
            "path": self.path,
            "found": self.found,
            "maxDepth": self.max_depth,
            "tree": self.tree,
            "treeLines": list(self.tree_lines),
        }


ListDirectoryOutcome = Union[ListDirectoryResult, NotFoundResult]
ReadFileOutcome = Union[ReadFileResult, NotFoundResult]
GrepOutcome = Union[GrepResult, NotFoundResult]
FindFilesOutcome = Union[FindFilesResult, NotFoundResult]
FileInfoOutcome = Union[FileInfoResult, NotFoundResult]
TreeOutcome = Union[TreeResult, NotFoundResult]
ExploreOutcome = Union[
    ListDirectoryResult, ReadFileResult, GrepResult, FindFilesResult,
    FileInfoResult, TreeResult, NotFoundResult,
]
