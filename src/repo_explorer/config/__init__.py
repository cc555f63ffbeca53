"""Configuration: schema, loading from env/file, and shared constants."""

from .schema import DEFAULT_CONFIG, ExplorerConfig
from .loader import load_config, served_root
from .constants import (
    DEFAULT_IGNORE_NAMES,
    SEARCH_IGNORE_NAMES,
    MAX_FIND_RESULTS,
    MAX_SEARCH_MATCHES,
    DEFAULT_TREE_DEPTH,
    MIN_TREE_DEPTH,
    MAX_TREE_DEPTH,
)

get_config = load_config  # alias

__all__ = [
    "DEFAULT_CONFIG", "ExplorerConfig",
    "load_config", "get_config", "served_root",
    "DEFAULT_IGNORE_NAMES", "SEARCH_IGNORE_NAMES",
    "MAX_FIND_RESULTS", "MAX_SEARCH_MATCHES",
    "DEFAULT_TREE_DEPTH", "MIN_TREE_DEPTH", "MAX_TREE_DEPTH",
]
