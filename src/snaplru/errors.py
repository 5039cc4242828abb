"""snaplru exception hierarchy.

The cache operations themselves never raise; these errors belong to the
edges (configuration files and trace replay). Keep this module dependency-free.
"""


class SnapLRUError(Exception):
    """Base exception for all snaplru errors."""


class SnapLRUConfigError(SnapLRUError):
    """Raised for invalid or missing configuration."""


class SnapLRUTraceError(SnapLRUError):
    """Raised when a replay trace cannot be parsed."""

    def __init__(self, message: str, *, line: int | None = None) -> None:
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)
        self.line = line
