"""
Exception hierarchy for the choreography core.

Model mutators raise these synchronously. Degenerate geometry (zero-width
keyframe brackets, zero time deltas, dangling path references) is never an
error and resolves to a held position or a zero vector instead.
"""

from typing import Any, Dict, Optional


class ChoreographyError(Exception):
    """Base class for all choreography errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if not self.details:
            return self.message
        detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
        return f"{self.message} ({detail_str})"


class InvalidPathError(ChoreographyError):
    """A path constructor was given fewer than the minimum keyframes."""

    def __init__(self, message: str, count: Optional[int] = None, **kwargs):
        details = kwargs.copy()
        if count is not None:
            details["count"] = count
        super().__init__(message, details)


class InvariantViolationError(ChoreographyError):
    """An edit would leave a path invalid; the original is unchanged."""

    def __init__(self, message: str, path_id: Optional[str] = None, **kwargs):
        details = kwargs.copy()
        if path_id:
            details["path_id"] = path_id
        super().__init__(message, details)


class ParameterError(ChoreographyError):
    """An argument is out of range or names something unknown."""

    def __init__(self, message: str, parameter: Optional[str] = None, **kwargs):
        details = kwargs.copy()
        if parameter:
            details["parameter"] = parameter
        super().__init__(message, details)


__all__ = [
    "ChoreographyError",
    "InvalidPathError",
    "InvariantViolationError",
    "ParameterError",
]
