"""Application layer: exploration operations and dispatch."""

from .explore import (
    OPERATIONS,
    explore,
    explore_many,
    file_info,
    find_files,
    grep,
    list_directory,
    read_file,
    run_operation,
    tree,
)
from .tool_calls import execute_tool_call, parse_tool_arguments

__all__ = [
    "execute_tool_call",
    "parse_tool_arguments",
    "OPERATIONS",
    "explore",
    "explore_many",
    "file_info",
    "find_files",
    "grep",
    "list_directory",
    "read_file",
    "run_operation",
    "tree",
]
