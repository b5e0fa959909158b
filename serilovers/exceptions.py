"""Domain exceptions for the SeriLovers API.

Services raise these instead of HTTPException so the business rules stay
usable outside a request. ``main.py`` maps each class to an HTTP status.
"""

from typing import Any, Optional


class SeriLoversError(Exception):
    """Base exception carrying a context dict for structured logging."""

    status_code: int = 400

    def __init__(self, message: str, context: Optional[dict[str, Any]] = None) -> None:
        self.message = message
        self.context = context or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "context": self.context,
        }


class NotFoundError(SeriLoversError):
    """A referenced series, season, episode, user or other record is missing."""

    status_code = 404

    def __init__(self, model: str, record_id: Any, context: Optional[dict[str, Any]] = None) -> None:
        ctx = context or {}
        ctx.update({"model": model, "record_id": record_id})
        super().__init__(f"{model} with ID {record_id} not found.", context=ctx)
        self.model = model
        self.record_id = record_id


class ValidationFailedError(SeriLoversError):
    """Input rejected before any mutation (duplicate numbers, bad ranges)."""

    status_code = 400


class PreconditionFailedError(SeriLoversError):
    """Mutation refused until the caller satisfies a condition first."""

    status_code = 400


class ConflictError(SeriLoversError):
    """The record already exists."""

    status_code = 409


class PermissionDeniedError(SeriLoversError):
    """The current user may not touch this record."""

    status_code = 403


class SeriesNotCompletedError(PreconditionFailedError):
    """Raised by the completion gate when a rating is attempted too early."""

    def __init__(self, user_id: int, series_id: int) -> None:
        super().__init__(
            "You must finish the series before leaving a review or rating.",
            context={"user_id": user_id, "series_id": series_id},
        )
