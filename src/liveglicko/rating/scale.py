# src/liveglicko/rating/scale.py

"""Conversion between the public Glicko scale and the internal Glicko-2 scale.

Steps 2 and 8 of the paper by Dr. Mark Glickman:
https://www.glicko.net/glicko/glicko2.pdf
"""

from liveglicko.constants import RATING_ORIGIN, SCALE_FACTOR
from liveglicko.models import InternalRating, PublicRating


def to_internal(rating: PublicRating) -> InternalRating:
    """Convert a public rating to the internal Glicko-2 scale."""
    return InternalRating(
        mu=(rating.rating - RATING_ORIGIN) / SCALE_FACTOR,
        phi=rating.deviation / SCALE_FACTOR,
        sigma=rating.volatility,
    )


def to_public(rating: InternalRating) -> PublicRating:
    """Convert an internal rating back to the public Glicko scale."""
    return PublicRating(
        rating=rating.mu * SCALE_FACTOR + RATING_ORIGIN,
        deviation=rating.phi * SCALE_FACTOR,
        volatility=rating.sigma,
    )
