"""Exceptions raised by the service layer and translated by the API."""

from __future__ import annotations

from campusgigs.scheduling.conflicts import BookingInputError, ConflictDecision


class NotFoundError(LookupError):
    """A referenced record does not exist (or is not visible to the caller)."""


class PermissionDeniedError(PermissionError):
    """The acting user may not perform the operation."""


class BookingConflictError(Exception):
    """The provider's schedule does not permit the requested booking."""

    def __init__(self, decision: ConflictDecision) -> None:
        super().__init__(decision.message)
        self.decision = decision


class ScheduleUnavailableError(RuntimeError):
    """The provider's schedule could not be loaded, so bookability is unknown."""


__all__ = [
    "BookingConflictError",
    "BookingInputError",
    "NotFoundError",
    "PermissionDeniedError",
    "ScheduleUnavailableError",
]
