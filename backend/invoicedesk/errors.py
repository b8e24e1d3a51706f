# Overview: Error kinds shared by services and routes.

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    AUTHENTICATION_FAILURE = "AUTHENTICATION_FAILURE"
    UNAUTHORIZED = "UNAUTHORIZED"
    CONSTRAINT_VIOLATION = "CONSTRAINT_VIOLATION"
    NOT_FOUND = "NOT_FOUND"
    UPLOAD_INVALID = "UPLOAD_INVALID"
    VALIDATION = "VALIDATION"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"


class ServiceError(Exception):
    """
    Base for failures a service reports back to its route.

    Routes turn these into the plain success/failure values clients expect
    (false, null, {"success": false}); the kind is for logging and tests.
    """
    kind = ErrorKind.CONSTRAINT_VIOLATION

    def __init__(self, message: str, kind: ErrorKind | None = None):
        super().__init__(message)
        if kind is not None:
            self.kind = kind


class StoreUnavailableError(ServiceError):
    """Raised while the database file is being swapped out."""
    kind = ErrorKind.STORE_UNAVAILABLE
