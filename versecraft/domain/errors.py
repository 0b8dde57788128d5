"""Failure taxonomy reported on the status surface."""
from __future__ import annotations


class SessionError(RuntimeError):
    """Base class for failures the session controller reports to the user."""


class ValidationError(SessionError):
    """A local precondition failed; no network call was made."""


class ServiceError(SessionError):
    """The remote service answered with a non-success response."""

    def __init__(
        self,
        message: str,
        *,
        detail: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.detail = detail
        self.status_code = status_code


class TransportError(SessionError):
    """The call could not be completed or its response could not be parsed."""
