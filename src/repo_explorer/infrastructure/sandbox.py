"""Sandbox policy and path safety.

Paths are checked lexically: ``..`` segments are collapsed before the prefix
test, so a traversal is refused even when the target does not exist. Symlinks
are not resolved; an in-root link that points elsewhere is reachable by name.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Union

from repo_explorer.domain.errors import InvalidRootError, PathTraversalError

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


def normalize_root(root: PathLike) -> Path:
    """Absolute, lexically normalised form of ``root``."""
    return Path(os.path.abspath(os.fspath(root)))


def validate_root(root: PathLike) -> Path:
    """Normalise ``root`` and require it to be an existing directory."""
    resolved_root = normalize_root(root)
    if not resolved_root.is_dir():
        raise InvalidRootError(str(resolved_root))
    return resolved_root


def resolve_path(root: PathLike, rel_path: str) -> Path:
    """Join ``rel_path`` to ``root`` and refuse anything that lands outside it.

    Absolute inputs replace the root before the check, so ``/etc/passwd`` is
    refused while an absolute path inside the root is accepted.
    """
    resolved_root = os.path.abspath(os.fspath(root))
    resolved = os.path.normpath(os.path.join(resolved_root, rel_path))
    if resolved != resolved_root and not resolved.startswith(resolved_root.rstrip(os.sep) + os.sep):
        logger.warning(
            "path traversal refused: %r resolved to %r outside %r", rel_path, resolved, resolved_root
        )
        raise PathTraversalError(rel_path, resolved, resolved_root)
    return Path(resolved)


def relative_to_root(root: PathLike, path: PathLike) -> str:
    """``path`` relative to ``root`` using the platform separator ('.' for the root itself)."""
    return os.path.relpath(os.fspath(path), os.fspath(root))
