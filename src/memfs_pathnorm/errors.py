"""Error definitions for memfs_pathnorm."""

from typing import Any, Dict


class PathNormError(Exception):
    """Base exception for all memfs_pathnorm errors."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context: Dict[str, Any] = context


class ConfigurationError(PathNormError, ValueError):
    """Normalization options are contradictory or unknown."""
    pass
