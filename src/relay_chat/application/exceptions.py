from __future__ import annotations


class AppError(Exception):
    """Base application error."""

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__(detail)


class NotFoundError(AppError):
    pass


class ForbiddenError(AppError):
    pass


class ConflictError(AppError):
    pass


class ValidationError(AppError):
    pass


class RejectedError(AppError):
    """Caller is not a registered participant at the time of the write."""


class UnauthenticatedError(AppError):
    """Claimed identity does not match any registered participant."""


class PersistenceError(AppError):
    """Underlying store is unavailable or a statement failed."""
