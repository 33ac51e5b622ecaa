"""Error taxonomy for navbar operations.

Every failure carries a structured :class:`ErrorKind` from the moment it is
raised, so callers never have to inspect message text to decide what happened.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    validation = "validation"
    already_exists = "already_exists"
    forbidden = "forbidden"
    not_found = "not_found"
    ref_conflict = "ref_conflict"
    remote = "remote"
    configuration = "configuration"


class NavbarError(Exception):
    """Base class for all navsync errors.

    Wraps an optional underlying exception (PyGithub, requests) the same way
    the provider adapters wrap SDK errors: the original is kept as __cause__.
    """

    kind: ErrorKind = ErrorKind.remote
    http_status: int = 500

    def __init__(
        self,
        message: str,
        *,
        operation: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.message = message
        self.operation = operation
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause


class InvalidNavbarError(NavbarError):
    kind = ErrorKind.validation
    http_status = 400


class AlreadyExistsError(NavbarError):
    kind = ErrorKind.already_exists
    http_status = 409


class ForbiddenError(NavbarError):
    kind = ErrorKind.forbidden
    http_status = 403


class NotFoundError(NavbarError):
    kind = ErrorKind.not_found
    http_status = 500


class RefConflictError(NavbarError):
    """The branch ref moved away from the base commit before we could update it."""

    kind = ErrorKind.ref_conflict
    http_status = 409


class RemoteError(NavbarError):
    kind = ErrorKind.remote
    http_status = 500


class ConfigurationError(NavbarError):
    """Deployment settings (repository, token) are missing or invalid."""

    kind = ErrorKind.configuration
    http_status = 500


__all__ = [
    "AlreadyExistsError",
    "ConfigurationError",
    "ErrorKind",
    "ForbiddenError",
    "InvalidNavbarError",
    "NavbarError",
    "NotFoundError",
    "RefConflictError",
    "RemoteError",
]
