"""Application error types.

Services raise these; the handlers registered in ``app.main`` turn them
into ``{"message": ...}`` JSON bodies with the matching status code.
"""
from typing import Any, Optional


class AppError(Exception):
    """Base class for errors that map to an HTTP response."""

    status_code = 500

    def __init__(self, message: str, error: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.error = error


class BadRequestError(AppError):
    """Missing or invalid input."""

    status_code = 400


class DuplicateError(BadRequestError):
    """An active membership or registration already exists."""


class UnauthorizedError(AppError):
    """Missing or invalid credential."""

    status_code = 401


class ForbiddenError(AppError):
    """Role or identity mismatch."""

    status_code = 403


class NotFoundError(AppError):
    """Resource absent, or not visible to the caller."""

    status_code = 404
