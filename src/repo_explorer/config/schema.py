"""Configuration schema. Defaults reproduce the built-in ignore lists and limits."""

from __future__ import annotations

from typing import TYPE_CHECKING, List

from pydantic import BaseModel, Field, model_validator

from .constants import (
    DEFAULT_IGNORE_NAMES,
    DEFAULT_TREE_DEPTH,
    MAX_FIND_RESULTS,
    MAX_SEARCH_MATCHES,
    MAX_TREE_DEPTH,
    MIN_TREE_DEPTH,
    SEARCH_IGNORE_NAMES,
)

if TYPE_CHECKING:
    from repo_explorer.infrastructure.walker import WalkFilter


class ExplorerConfig(BaseModel):
    """Traversal filters and result limits shared by every operation."""

    ignore_names: List[str] = Field(
        default_factory=lambda: list(DEFAULT_IGNORE_NAMES),
        description="Entry names skipped by tree and findFiles (in addition to hidden entries).",
    )
    skip_hidden: bool = Field(
        True, description="Skip entries whose name starts with '.' in tree and findFiles."
    )
    search_ignore_names: List[str] = Field(
        default_factory=lambda: list(SEARCH_IGNORE_NAMES),
        description="Directory names grep never descends into. Hidden files are otherwise scanned.",
    )
    max_find_results: int = Field(MAX_FIND_RESULTS, description="Default cap on findFiles results.")
    max_search_matches: int = Field(
        MAX_SEARCH_MATCHES,
        description="Ceiling on true grep matches per call; the result is flagged truncated when hit.",
    )
    default_tree_depth: int = DEFAULT_TREE_DEPTH
    min_tree_depth: int = MIN_TREE_DEPTH
    max_tree_depth: int = MAX_TREE_DEPTH

    @model_validator(mode="after")
    def _check_limits(self) -> "ExplorerConfig":
        if self.max_find_results <= 0:
            raise ValueError(f"max_find_results must be positive, got {self.max_find_results}.")
        if self.max_search_matches <= 0:
            raise ValueError(f"max_search_matches must be positive, got {self.max_search_matches}.")
        if not 1 <= self.min_tree_depth <= self.max_tree_depth:
            raise ValueError(
                f"Tree depth bounds must satisfy 1 <= min ({self.min_tree_depth}) "
                f"<= max ({self.max_tree_depth})."
            )
        return self

    def walk_filter(self) -> WalkFilter:
        """Filter used by tree and findFiles."""
        from repo_explorer.infrastructure.walker import WalkFilter
        return WalkFilter(ignore_names=frozenset(self.ignore_names), skip_hidden=self.skip_hidden)

    def search_filter(self) -> WalkFilter:
        """Filter used by grep."""
        from repo_explorer.infrastructure.walker import WalkFilter
        return WalkFilter(ignore_names=frozenset(self.search_ignore_names), skip_hidden=False)

    def clamp_tree_depth(self, depth: int) -> int:
        return max(self.min_tree_depth, min(self.max_tree_depth, depth))


DEFAULT_CONFIG = ExplorerConfig()
