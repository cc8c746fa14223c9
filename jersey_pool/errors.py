"""Custom exceptions for centralized error handling."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class AppError(Exception):
    """Base application error."""

    code: str
    message: str
    status_code: int
    details: Any | None = None

    def __str__(self) -> str:
        return self.message


class ValidationError(AppError):
    """Input validation error."""

    def __init__(self, message: str = "Validation error", details: Any | None = None) -> None:
        super().__init__(code="validation_error", message=message, status_code=400, details=details)


class UnauthorizedError(AppError):
    """Caller is not on the admin allow-list."""

    def __init__(self, message: str = "Unauthorized", details: Any | None = None) -> None:
        super().__init__(code="unauthorized", message=message, status_code=403, details=details)


class LockedError(AppError):
    """Write rejected because the matchup is locked."""

    def __init__(
        self,
        message: str = "Guesses are locked for this matchup.",
        details: Any | None = None,
    ) -> None:
        super().__init__(code="locked", message=message, status_code=403, details=details)


class DuplicateError(AppError):
    """Participant already has a guess for the matchup."""

    def __init__(
        self,
        message: str = "You already submitted a guess for this matchup.",
        details: Any | None = None,
    ) -> None:
        super().__init__(code="duplicate", message=message, status_code=409, details=details)


class NotFoundError(AppError):
    """Resource not found."""

    def __init__(self, message: str = "Not found", details: Any | None = None) -> None:
        super().__init__(code="not_found", message=message, status_code=404, details=details)


class InternalError(AppError):
    """Storage or connectivity failure."""

    def __init__(self, message: str = "Internal server error", details: Any | None = None) -> None:
        super().__init__(code="internal_error", message=message, status_code=500, details=details)
