"""Exception hierarchy for the gofile_uploader library."""

from __future__ import annotations


class GofileError(Exception):
    """Base exception for all gofile_uploader errors."""

    pass


class TransportError(GofileError):
    """Raised when the HTTP request could not be completed."""

    pass


class DecodeError(GofileError):
    """Raised when a response body is not a valid API envelope."""

    pass


class ApiStatusError(GofileError):
    """Raised when the API answers with a status other than "ok".

    The status attribute holds the raw status string returned by the
    service (e.g. "error-auth"). The HTTP status code is not consulted.
    """

    def __init__(self, status: str) -> None:
        super().__init__(f"API returned status {status!r}")
        self.status = status


class MissingTokenError(GofileError):
    """Raised when an endpoint requiring a token is called without one."""

    pass


class StagingError(GofileError):
    """Base class for failures of the local upload staging buffer."""

    pass


class StagingInitError(StagingError):
    """Raised when the staging buffer cannot be allocated."""

    pass


class StagingSealError(StagingError):
    """Raised when the staging buffer cannot be prepared for reading."""

    pass


class StagingIOError(StagingError):
    """Raised when writing to or reading from the staging buffer fails."""

    pass
