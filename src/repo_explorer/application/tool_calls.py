"""Execute ``explore_repository`` tool calls issued by an LLM agent."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Mapping, Optional, Union

from repo_explorer.config import ExplorerConfig
from repo_explorer.domain.errors import ExplorerError

from .explore import explore

logger = logging.getLogger(__name__)


def parse_tool_arguments(arguments: Union[str, Mapping[str, Any], None]) -> Dict[str, Any]:
    """Tool-call arguments arrive as a JSON string or an already-decoded dict."""
    if arguments is None:
        return {}
    if isinstance(arguments, str):
        if not arguments.strip():
            return {}
        decoded = json.loads(arguments)
        if not isinstance(decoded, dict):
            raise ValueError(f"Tool arguments must be a JSON object, got {type(decoded).__name__}")
        return decoded
    return dict(arguments)


def execute_tool_call(
    root_path: str,
    arguments: Union[str, Mapping[str, Any], None],
    config: Optional[ExplorerConfig] = None,
) -> Dict[str, Any]:
    """Run one tool call against ``root_path``.

    Structural errors (traversal attempt, bad regex, unknown operation) are
    returned as ``{"error": <type>, "message": ...}`` so the agent can read
    them and correct itself; they are not raised.
    """
    try:
        args = parse_tool_arguments(arguments)
    except ValueError as e:
        return {"error": "InvalidArguments", "message": str(e)}
    operation = str(args.pop("operation", "") or "")
    try:
        return explore(root_path, operation, args, config=config)
    except ExplorerError as e:
        logger.info("tool call %s failed: %s", operation, e)
        return {"error": type(e).__name__, "message": str(e)}
