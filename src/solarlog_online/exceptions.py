"""Exceptions raised by the SolarLog Online client."""

from __future__ import annotations


class SolarLogOnlineError(Exception):
    """Base class for SolarLog Online errors."""


class AuthError(SolarLogOnlineError):
    """Login to the portal failed."""


class ApiError(SolarLogOnlineError):
    """A data request to the portal failed."""

    def __init__(self, message: str, url: str, status: int | None = None) -> None:
        """Initialize the error with the failing url and HTTP status, if any."""
        super().__init__(message)
        self.url = url
        self.status = status
