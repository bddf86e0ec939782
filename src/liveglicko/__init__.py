# src/liveglicko/__init__.py

"""Glicko-2 ratings updated continuously at fractional rating periods.

Quick Start:
    from liveglicko import GlickoSettings, MatchOutcome, new_engine

    engine = new_engine(GlickoSettings(tau=0.5))
    alice = engine.register_player()
    bob = engine.register_player()
    engine.register_result(alice, bob, MatchOutcome.WIN)
    print(engine.player_rating(alice))

Untimed use without the engine:
    from liveglicko import GameResult, to_internal, to_public, update

    new = update(to_internal(player), [GameResult(to_internal(opp), 1.0)], 1.0, settings)
"""

from .exceptions import (
    ConvergenceFailureError,
    InvalidRatingError,
    LiveGlickoError,
    RatingEngineError,
    ResourceNotFoundError,
    SelfMatchError,
    UnknownPlayerError,
    ValidationError,
)
from .models import GameResult, InternalRating, MatchOutcome, PublicRating
from .rating import (
    RatingEngine,
    decay,
    expected_score,
    new_engine,
    to_internal,
    to_public,
    update,
)
from .settings import GlickoSettings

__version__ = "0.1.0"

__all__ = [
    # Values
    "GameResult",
    "InternalRating",
    "MatchOutcome",
    "PublicRating",
    "GlickoSettings",
    # Algorithm
    "decay",
    "expected_score",
    "update",
    "to_internal",
    "to_public",
    # Engine
    "RatingEngine",
    "new_engine",
    # Errors
    "LiveGlickoError",
    "ResourceNotFoundError",
    "UnknownPlayerError",
    "ValidationError",
    "InvalidRatingError",
    "SelfMatchError",
    "RatingEngineError",
    "ConvergenceFailureError",
]
