# src/liveglicko/rating/__init__.py

"""Glicko-2 algorithm, scale conversion and the continuous-time engine."""

from .engine import RatingEngine, new_engine
from .glicko2 import decay, expected_score, update
from .scale import to_internal, to_public

__all__ = [
    "RatingEngine",
    "new_engine",
    "decay",
    "expected_score",
    "update",
    "to_internal",
    "to_public",
]
