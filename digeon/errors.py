"""
Service-level error kinds.

Services raise ``ServiceError`` with a kind; the HTTP layer maps the kind to
a status code in one place (see ``responses.api_exception_handler``).
"""
from enum import Enum


class ErrorKind(str, Enum):
    VALIDATION = "VALIDATION_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self]


_STATUS_CODES = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
}


class ServiceError(Exception):
    """A failure with a kind the API layer knows how to render."""

    def __init__(self, kind: ErrorKind, message: str, details: dict = None):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.details = details

    def __repr__(self):
        return f"ServiceError({self.kind.value}, {self.message!r})"


def validation_error(message: str, details: dict = None) -> ServiceError:
    return ServiceError(ErrorKind.VALIDATION, message, details)


def unauthorized(message: str = "authentication required") -> ServiceError:
    return ServiceError(ErrorKind.UNAUTHORIZED, message)


def forbidden(message: str = "access denied") -> ServiceError:
    return ServiceError(ErrorKind.FORBIDDEN, message)


def not_found(resource: str) -> ServiceError:
    return ServiceError(ErrorKind.NOT_FOUND, f"{resource} not found")


def conflict(message: str) -> ServiceError:
    return ServiceError(ErrorKind.CONFLICT, message)
