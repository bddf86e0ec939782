# src/liveglicko/models.py

"""Value types shared by the algorithm and the rating engine.

Public and internal ratings are distinct types on purpose: converting between
them always goes through ``liveglicko.rating.scale``, never implicitly.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from liveglicko.exceptions import InvalidRatingError


def _check_triple(value: float, spread: float, volatility: float, names: tuple) -> None:
    """Validate a (value, spread, volatility) triple of either scale."""
    for name, field_value in zip(names, (value, spread, volatility)):
        if not math.isfinite(field_value):
            raise InvalidRatingError(f"{name} must be finite, got {field_value}", name)
    if spread < 0:
        raise InvalidRatingError(f"{names[1]} must be >= 0, got {spread}", names[1])
    if volatility <= 0:
        raise InvalidRatingError(f"{names[2]} must be > 0, got {volatility}", names[2])


@dataclass(frozen=True)
class PublicRating:
    """A rating on the public Glicko scale (centered at 1500)."""

    rating: float
    deviation: float
    volatility: float

    def __post_init__(self) -> None:
        _check_triple(
            self.rating,
            self.deviation,
            self.volatility,
            ("rating", "deviation", "volatility"),
        )


@dataclass(frozen=True)
class InternalRating:
    """A rating on the internal Glicko-2 scale (centered at 0)."""

    mu: float
    phi: float
    sigma: float

    def __post_init__(self) -> None:
        _check_triple(self.mu, self.phi, self.sigma, ("mu", "phi", "sigma"))


@dataclass(frozen=True)
class GameResult:
    """One game as seen by the player being rated."""

    opponent: InternalRating
    score: float

    def __post_init__(self) -> None:
        if not 0.0 <= self.score <= 1.0:
            raise InvalidRatingError(
                f"score must be between 0.0 and 1.0, got {self.score}", "score"
            )


class MatchOutcome(str, Enum):
    """Result of a match from the first player's point of view."""

    WIN = "win"
    LOSS = "loss"
    DRAW = "draw"

    @property
    def score(self) -> float:
        """Points for the first player: win 1.0, draw 0.5, loss 0.0."""
        if self is MatchOutcome.WIN:
            return 1.0
        if self is MatchOutcome.LOSS:
            return 0.0
        return 0.5

    @property
    def opponent_score(self) -> float:
        return self.invert().score

    def invert(self) -> MatchOutcome:
        """The same match seen from the opponent's side."""
        if self is MatchOutcome.WIN:
            return MatchOutcome.LOSS
        if self is MatchOutcome.LOSS:
            return MatchOutcome.WIN
        return MatchOutcome.DRAW
