"""
Application-level exceptions.

- InvalidSelectionError: best/worst picks that do not describe a valid ranking.
- SignalEmissionError / PartialPairError: a signal could not be persisted.
- SessionBusyError: a card resolution is already in flight.
- TasteApiError: the taste API answered with an error status.
"""

from __future__ import annotations


class TrainerError(Exception):
    """Base class for all trainer errors."""


class InvalidSelectionError(TrainerError, ValueError):
    """Raised when best/worst ids are missing, off-card, or identical."""


class SessionBusyError(TrainerError):
    """Raised when an action is attempted while another round-trip is in flight."""


class SignalEmissionError(TrainerError):
    """
    Raised when a signal could not be submitted.

    The card stays unresolved (session sets unchanged) so the user can resubmit it.
    persisted: number of signals of this resolution already durable before the failure.
    """

    def __init__(self, message: str, *, set_id: str, persisted: int = 0):
        super().__init__(message)
        self.set_id = set_id
        self.persisted = persisted


class PartialPairError(SignalEmissionError):
    """
    The best signal persisted but the worst signal failed.

    No compensation is attempted; the first signal stays in the log.
    """


class TasteApiError(TrainerError):
    """Raised when the taste API returns an error response."""

    def __init__(self, message: str, status_code: int | None = None, path: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.path = path
