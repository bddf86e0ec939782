# src/liveglicko/exceptions.py

"""Custom exception hierarchy for liveglicko.

This module provides a structured exception hierarchy that enables:
1. Clear distinction between usage errors and library defects
2. Detailed error context for logging and debugging
3. A single base class callers can catch for anything raised here
"""

from __future__ import annotations


class LiveGlickoError(Exception):
    """Base exception for all liveglicko errors.

    Attributes:
        message: Human-readable error description
        details: Optional dict with additional context for logging/debugging
    """

    def __init__(self, message: str, details: dict | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)


# =============================================================================
# Resource Not Found Errors
# =============================================================================


class ResourceNotFoundError(LiveGlickoError):
    """Base class for resource not found errors."""

    pass


class UnknownPlayerError(ResourceNotFoundError):
    """Raised when a player ID was never registered with the engine."""

    def __init__(self, player_id: int) -> None:
        self.player_id = player_id
        super().__init__(
            message=f"Player with ID {player_id} not found",
            details={"player_id": player_id},
        )


# =============================================================================
# Validation Errors
# =============================================================================


class ValidationError(LiveGlickoError):
    """Base class for validation errors."""

    pass


class InvalidRatingError(ValidationError):
    """Raised when a rating value, score or elapsed time is out of range."""

    def __init__(self, message: str, field: str | None = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message=message, details=details)


class SelfMatchError(ValidationError):
    """Raised when a result is registered between a player and themselves."""

    def __init__(self, player_id: int) -> None:
        super().__init__(
            message=f"Player {player_id} cannot play against themselves",
            details={"player_id": player_id},
        )


# =============================================================================
# Rating Engine Errors
# =============================================================================


class RatingEngineError(LiveGlickoError):
    """Base class for rating calculation errors."""

    pass


class ConvergenceFailureError(RatingEngineError):
    """Raised when the volatility iteration does not reach its tolerance.

    This is unreachable for finite, valid inputs and should be reported
    as a bug rather than retried.
    """

    def __init__(self, iterations: int, tolerance: float, stage: str) -> None:
        super().__init__(
            message=f"Volatility {stage} did not converge within {iterations} "
            f"iterations (tolerance {tolerance})",
            details={"iterations": iterations, "tolerance": tolerance, "stage": stage},
        )
