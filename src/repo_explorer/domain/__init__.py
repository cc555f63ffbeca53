"""Domain layer: entities, result records and errors. No I/O."""

from .models import (
    DirEntry,
    FileInfoResult,
    FindFilesResult,
    GrepResult,
    ListDirectoryResult,
    ListEntry,
    NotFoundResult,
    ReadFileResult,
    SearchMatch,
    SearchResult,
    TreeResult,
)
from .errors import (
    ExplorerError,
    InvalidParameterError,
    InvalidPatternError,
    InvalidRootError,
    MissingRequiredParameterError,
    PathTraversalError,
)

__all__ = [
    "DirEntry",
    "FileInfoResult",
    "FindFilesResult",
    "GrepResult",
    "ListDirectoryResult",
    "ListEntry",
    "NotFoundResult",
    "ReadFileResult",
    "SearchMatch",
    "SearchResult",
    "TreeResult",
    "ExplorerError",
    "InvalidParameterError",
    "InvalidPatternError",
    "InvalidRootError",
    "MissingRequiredParameterError",
    "PathTraversalError",
]
