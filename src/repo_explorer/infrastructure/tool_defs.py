"""OpenAI function-tool definition for the explorer.

An agent loop registers ``EXPLORE_REPOSITORY_TOOL_DEF`` with its chat client
and passes the model's arguments to
``repo_explorer.application.tool_calls.execute_tool_call``.
"""

from __future__ import annotations

from typing import Any, Dict

from repo_explorer.config.constants import DEFAULT_TREE_DEPTH, MAX_TREE_DEPTH, MIN_TREE_DEPTH

EXPLORE_TOOL_NAME = "explore_repository"

TOOL_OPERATIONS = ("listDirectory", "readFile", "grep", "findFiles", "fileInfo", "tree")


def make_tool_def(
    name: str,
    description: str,
    parameters: Dict[str, Any],
) -> Dict[str, Any]:
    """Build an OpenAI function tool definition dict."""
    return {
        "type": "function",
        "function": {
            "name": name,
            "description": description,
            "parameters": parameters,
        },
    }


EXPLORE_REPOSITORY_TOOL_DEF = make_tool_def(
    EXPLORE_TOOL_NAME,
    (
        "Explore a codebase read-only: list directories, read files, search contents (grep), "
        "find files by pattern, get file info, or view directory trees. Set operation to: "
        "listDirectory, readFile, grep, findFiles, fileInfo, or tree. All paths are relative "
        "to the repository root and cannot leave it."
    ),
    {
        "type": "object",
        "properties": {
            "operation": {
                "type": "string",
                "enum": list(TOOL_OPERATIONS),
                "description": "Which exploration to perform.",
            },
            "path": {
                "type": "string",
                "description": (
                    "Path relative to root. For readFile/fileInfo: a file. "
                    "For listDirectory/grep/findFiles/tree: a directory (empty = root)."
                ),
            },
            "maxLines": {
                "type": "integer",
                "description": "readFile: maximum number of lines to return (0 = all lines).",
            },
            "lineOffset": {
                "type": "integer",
                "description": "readFile: start reading from this line (0-based).",
            },
            "searchPattern": {
                "type": "string",
                "description": "grep: regular expression to search for (required for grep).",
            },
            "filePattern": {
                "type": "string",
                "description": "grep: glob restricting which file names are searched, e.g. *.ts.",
            },
            "caseInsensitive": {
                "type": "boolean",
                "description": "grep: match case-insensitively.",
            },
            "contextLines": {
                "type": "integer",
                "description": "grep: number of lines to include before and after each match.",
            },
            "namePattern": {
                "type": "string",
                "description": "findFiles: glob for file names, e.g. *.ts or test_*.py.",
            },
            "maxDepth": {
                "type": "integer",
                "minimum": MIN_TREE_DEPTH,
                "maximum": MAX_TREE_DEPTH,
                "description": f"tree: maximum depth ({MIN_TREE_DEPTH}-{MAX_TREE_DEPTH}, default {DEFAULT_TREE_DEPTH}).",
            },
        },
        "required": ["operation"],
    },
)
