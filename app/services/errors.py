"""Service-level exceptions with stable error kinds.

Routes translate these into the JSON error envelope; clients branch on
``kind`` rather than on the message text.
"""
from enum import Enum


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    AUTH = "auth"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    RATE_LIMITED = "rate_limited"
    INTERNAL = "internal"


class ServiceError(Exception):
    kind = ErrorKind.INTERNAL
    status = 500

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class ValidationError(ServiceError):
    kind = ErrorKind.VALIDATION
    status = 400


class AuthError(ServiceError):
    kind = ErrorKind.AUTH
    status = 401


class ForbiddenError(ServiceError):
    kind = ErrorKind.FORBIDDEN
    status = 403


class NotFoundError(ServiceError):
    kind = ErrorKind.NOT_FOUND
    status = 404


class ConflictError(ServiceError):
    kind = ErrorKind.CONFLICT
    status = 400


def kind_for_status(status: int) -> ErrorKind:
    if status == 401:
        return ErrorKind.AUTH
    if status == 403:
        return ErrorKind.FORBIDDEN
    if status == 404:
        return ErrorKind.NOT_FOUND
    if status == 409:
        return ErrorKind.CONFLICT
    if status == 429:
        return ErrorKind.RATE_LIMITED
    if status >= 500:
        return ErrorKind.INTERNAL
    return ErrorKind.VALIDATION


__all__ = [
    "ErrorKind",
    "ServiceError",
    "ValidationError",
    "AuthError",
    "ForbiddenError",
    "NotFoundError",
    "ConflictError",
    "kind_for_status",
]
