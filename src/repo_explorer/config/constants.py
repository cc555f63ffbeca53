"""Named constants for values that appear in multiple places or need explanation.

Each constant has a comment explaining what it bounds, so a maintainer can
decide whether a change is safe without grepping for side-effects.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Traversal filters
# ---------------------------------------------------------------------------

# Entry names skipped by tree, findFiles and the walker in general, in addition
# to every name starting with ".".
DEFAULT_IGNORE_NAMES: tuple = ("node_modules",)

# Directory names skipped by grep. Wider than the walker list because content
# search usually runs over whole checkouts with build output in them.
# Hidden files are otherwise scanned, like `grep -r`.
SEARCH_IGNORE_NAMES: tuple = ("node_modules", ".git", "dist", "build")

# ---------------------------------------------------------------------------
# Result-size limits
# ---------------------------------------------------------------------------

# Maximum paths returned by one findFiles call.
MAX_FIND_RESULTS: int = 1000

# Maximum true matches (context lines excluded) collected by one grep call.
# Once reached the scan stops and the result is flagged truncated.
MAX_SEARCH_MATCHES: int = 10_000

# Bytes read from the head of a file to decide whether it is binary (NUL byte
# present). Binary files are skipped by grep.
BINARY_SNIFF_BYTES: int = 8192

# ---------------------------------------------------------------------------
# Tree depth
# ---------------------------------------------------------------------------

DEFAULT_TREE_DEPTH: int = 3
MIN_TREE_DEPTH: int = 1
MAX_TREE_DEPTH: int = 10

# Line rendered in place of a directory's children when it cannot be read.
PERMISSION_DENIED_PLACEHOLDER: str = "[Permission denied]"
