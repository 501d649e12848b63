"""Exceptions for the Rivian status client."""

from __future__ import annotations


class RivianApiException(Exception):
    """Base exception for all Rivian client errors."""


class RivianAuthError(RivianApiException):
    """Authentication failed or is required."""


class RivianNotLoggedIn(RivianAuthError):
    """An operation needing an authenticated session was attempted without one."""

    def __init__(
        self, message: str = "Not logged in. Log in to Rivian first."
    ) -> None:
        super().__init__(message)


class RivianProtocolError(RivianApiException):
    """The backend returned a payload the client cannot interpret."""


class RivianRemoteError(RivianApiException):
    """The backend answered with a structured GraphQL error."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        reason: str | None = None,
        status: int | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.reason = reason
        self.status = status


class RivianInvalidCredentials(RivianAuthError, RivianRemoteError):
    """Email or password was rejected."""


class RivianInvalidOTP(RivianAuthError, RivianRemoteError):
    """Verification code was rejected or the challenge expired."""


class RivianUnauthenticated(RivianAuthError, RivianRemoteError):
    """Session tokens were rejected by the backend."""


class RivianApiRateLimitError(RivianRemoteError):
    """Too many requests."""


class RivianBadRequestError(RivianRemoteError):
    """The request was malformed."""


class RivianDataError(RivianRemoteError):
    """The backend could not produce the requested data."""


class RivianTemporarilyLockedError(RivianRemoteError):
    """Account is temporarily locked by the session manager."""


class RivianTransportError(RivianApiException):
    """The HTTP exchange failed without a structured error body."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class RivianPersistenceError(RivianApiException):
    """The session file could not be read or written."""
