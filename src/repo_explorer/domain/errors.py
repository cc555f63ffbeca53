"""Domain errors.

Structural problems (bad root, traversal attempt, bad regex, missing
parameter) are raised. A missing target path is not an error: operations
return a ``found=False`` record instead.
"""


class ExplorerError(Exception):
    """Base for explorer errors."""
    pass


class PathTraversalError(ExplorerError, PermissionError):
    """A relative path resolved outside the sandbox root."""

    def __init__(self, attempted: str, resolved: str, root: str):
        self.attempted = attempted
        self.resolved = resolved
        self.root = root
        super().__init__(
            "Path traversal detected - access denied. "
            f"Attempted path: {attempted!r} resolved to {resolved!r}. "
            f"Path must be relative and within root: {root!r}"
        )


class InvalidRootError(ExplorerError, NotADirectoryError):
    """The configured root does not exist or is not a directory."""

    def __init__(self, root: str):
        self.root = root
        super().__init__(f"Root path does not exist or is not a directory: {root}")


class MissingRequiredParameterError(ExplorerError, ValueError):
    """A required parameter (root path, search pattern, operation) is missing or unknown."""
    pass


class InvalidPatternError(ExplorerError, ValueError):
    """The search pattern is not a valid regular expression."""

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid search pattern {pattern!r}: {reason}")


class InvalidParameterError(ExplorerError, ValueError):
    """A parameter has the wrong type (e.g. a non-numeric maxLines)."""
    pass
