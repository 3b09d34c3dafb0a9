"""
Domain error taxonomy for catalog operations.

Exception Hierarchy:
    DomainError (base)
    ├── BadRequestError         - 400
    ├── UnauthorizedError       - 401
    ├── NotFoundError           - 404
    ├── CatalogConnectionError  - 5xx
    └── GenericError            - fallback used by callers, never by classify()

Only remote failures that carry a status code are classified. Everything
else (codes outside the table, connectivity failures) is re-raised as is.
"""

from enum import Enum
from typing import Optional

import httpx


class DomainErrorKind(str, Enum):
    """Closed set of error kinds surfaced to callers."""

    BAD_REQUEST = "bad_request"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
    CONNECTION = "connection"
    GENERIC = "generic"


class DomainError(Exception):
    """Base exception for classified catalog errors."""

    kind: DomainErrorKind = DomainErrorKind.GENERIC

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class BadRequestError(DomainError):
    kind = DomainErrorKind.BAD_REQUEST


class UnauthorizedError(DomainError):
    kind = DomainErrorKind.UNAUTHORIZED


class NotFoundError(DomainError):
    kind = DomainErrorKind.NOT_FOUND


class CatalogConnectionError(DomainError):
    """Server side failure (any 5xx status)."""

    kind = DomainErrorKind.CONNECTION


class GenericError(DomainError):
    kind = DomainErrorKind.GENERIC


_ERRORS: dict[DomainErrorKind, tuple[type[DomainError], str]] = {
    DomainErrorKind.BAD_REQUEST: (BadRequestError, "Bad Request Error"),
    DomainErrorKind.UNAUTHORIZED: (UnauthorizedError, "Unauthorized Error"),
    DomainErrorKind.NOT_FOUND: (NotFoundError, "Not Found Error"),
    DomainErrorKind.CONNECTION: (CatalogConnectionError, "Connection Error"),
    DomainErrorKind.GENERIC: (GenericError, "Generic Error"),
}


def classify(status_code: int) -> Optional[DomainErrorKind]:
    """Map a transport status code to an error kind.

    Returns:
        The matching kind, or None when the code is not classified and the
        original failure should be re-raised
    """
    if status_code == 400:
        return DomainErrorKind.BAD_REQUEST
    if status_code == 401:
        return DomainErrorKind.UNAUTHORIZED
    if status_code == 404:
        return DomainErrorKind.NOT_FOUND
    if status_code >= 500:
        return DomainErrorKind.CONNECTION
    return None


def error_for(kind: DomainErrorKind) -> DomainError:
    """Build the error for a kind with its fixed message."""
    error_cls, message = _ERRORS[kind]
    return error_cls(message)


def status_code_of(exc: BaseException) -> Optional[int]:
    """Extract the status code carried by a transport failure, if any."""
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code

    status_code = getattr(exc, "status_code", None)
    if isinstance(status_code, int) and not isinstance(status_code, bool):
        return status_code

    return None


def kind_of(exc: BaseException) -> DomainErrorKind:
    """Kind to present for any failure, falling back to GENERIC."""
    if isinstance(exc, DomainError):
        return exc.kind
    return DomainErrorKind.GENERIC
