"""Unrecoverable conditions raised by the domain core."""

from __future__ import annotations


class InvariantViolationError(RuntimeError):
    """Raised when a precondition the core relies on has been broken.

    These are defects (bad configuration reaching the scorer, hours appearing or
    vanishing during allocation), never bad input data.
    """


class MalformedConfirmationPayloadError(ValueError):
    """Raised when a caller-supplied confirmation mapping cannot be validated."""

    def __init__(self, message: str, *, details: tuple[str, ...] = ()) -> None:
        self.details = details
        super().__init__(message)
