"""
Application error taxonomy.

Errors are raised by the SQL helpers and the CRUD layer and propagate
unchanged up to the exception handlers registered in main.py, which turn them
into JSON error responses with the matching HTTP status code.
"""

from typing import Optional


class JoblyError(Exception):
    """Base exception for all Jobly errors."""

    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class BadRequestError(JoblyError):
    """Caller supplied malformed, empty or unsupported input."""

    status_code = 400


class ConflictError(BadRequestError):
    """
    A record with the same natural key already exists.

    Reported to clients as 400, like any other bad request.
    """


class NotFoundError(JoblyError):
    """No row matches the requested key."""

    status_code = 404


class UnauthorizedError(JoblyError):
    """Missing credentials, bad credentials or insufficient role."""

    status_code = 401


__all__ = [
    "BadRequestError",
    "ConflictError",
    "JoblyError",
    "NotFoundError",
    "UnauthorizedError",
]
