"""
Custom exceptions, shared by all layers.

The rules engine itself never raises for a rule violation: it returns a tagged rejection.
The service layer turns those rejections into the errors below, so whoever sits on top (an API router, a CLI)
can map each class onto its own response.
"""

from typing import Optional

from src.core.shared_types import RejectionReason


class GameError(Exception):
    """Base class for anything that goes wrong while playing a match."""


class RuleViolationError(GameError):
    """A move/action was refused by the rules. Carries the reason tag reported by the engine."""

    def __init__(self, message: str, reason: Optional[RejectionReason] = None) -> None:
        super().__init__(message)
        self.reason = reason


class InvalidMoveError(RuleViolationError):
    """Capacity, dice restriction, or species rule violated. The player may retry elsewhere."""


class NotYourTurnError(RuleViolationError):
    """Acting player is not the current player."""


class IllegalStateError(RuleViolationError):
    """Action not allowed in the current match status or turn phase."""


class PieceNotAvailableError(RuleViolationError):
    """Referenced hand slot is already played or holds a different piece."""


class GameStateError(GameError):
    """A stored snapshot could not be turned back into a Match."""


class IllegalMoveError(GameError):
    """A placement was applied without being validated first. This is a bug in the caller."""


class UnknownEnclosureError(GameError, KeyError):
    """Enclosure id not in the catalog. This is a programming error, never a rule violation."""


class ConcurrencyConflictError(GameError):
    """The stored snapshot changed between reading and writing it."""


class RepositoryError(GameError):
    """Persistence layer could not find or store a match."""


class InvalidRequestError(GameError):
    """Request payload could not be interpreted."""


REASON_TO_ERROR: dict[RejectionReason, type[RuleViolationError]] = {
    RejectionReason.ENCLOSURE_FULL: InvalidMoveError,
    RejectionReason.DICE_RESTRICTED: InvalidMoveError,
    RejectionReason.SPECIES_CONFLICT: InvalidMoveError,
    RejectionReason.NOT_YOUR_TURN: NotYourTurnError,
    RejectionReason.NOT_IN_PROGRESS: IllegalStateError,
    RejectionReason.OUT_OF_PHASE: IllegalStateError,
    RejectionReason.PIECE_NOT_IN_HAND: PieceNotAvailableError,
}


def error_for(reason: RejectionReason, message: str) -> RuleViolationError:
    """Build the exception that belongs to a rejection tag."""
    return REASON_TO_ERROR[reason](message, reason)
