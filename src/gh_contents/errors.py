"""GitHub contents client errors."""

from typing import Any


class RequestError(Exception):
    """Non-2xx response from the GitHub API."""

    def __init__(
        self,
        status: int | None,
        message: str,
        errors: list[dict[str, Any]] | None = None,
    ):
        self.status = status
        self.message = message
        self.errors = errors or []
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.status is None:
            return self.message
        return f"{self.message} ({self.status})"


class ResolutionError(ValueError):
    """Repository reference cannot be resolved to an id."""
