"""Error taxonomy raised by td_jobs resource operations."""
from __future__ import annotations


class TDJobsError(Exception):
    """Base class for every error raised by this package."""

    def __init__(self, message: str | None = None, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class WrongAttributes(TDJobsError):
    """The server rejected the given attributes (400) or an id is not an integer."""


class EntityNotFound(TDJobsError):
    """The referenced entity does not exist on the server (404)."""


class InvalidStatus(TDJobsError):
    """The requested status transition is not allowed (400 on an action endpoint)."""


class UnauthorizedRequest(TDJobsError):
    """The application secret was missing or rejected (401/403)."""


class RequestFailed(TDJobsError):
    """The server answered with a status code no operation maps explicitly."""


class NotConfigured(TDJobsError):
    """A resource was used before ``td_jobs.configure`` bound it to a base URL."""
