from typing import Any, Optional


class InvalidInputError(ValueError):
    """Request carries neither usable chat text nor a resolvable symptom id."""


class UpstreamError(RuntimeError):
    """The completion call failed: transport error, non-2xx status or unusable body."""

    def __init__(self, message: str, status_code: Optional[int] = None, details: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.details = details if details is not None else message


class StartupDataError(RuntimeError):
    """A static dataset could not be loaded. Fatal at startup."""
