# src/liveglicko/settings.py

"""Tuning parameters shared by the algorithm and the rating engine."""

from datetime import timedelta

from pydantic import BaseModel, ConfigDict, Field, field_validator

from liveglicko import constants
from liveglicko.models import PublicRating


class GlickoSettings(BaseModel):
    """Immutable, validated configuration for one rating pool.

    Settings are passed explicitly to every computation, so several pools
    with different tuning can live in the same process.

    Attributes:
        tau: System constant constraining volatility change (typically 0.3-1.2)
        convergence_tolerance: Bracket width at which the volatility
            iteration stops
        default_rating: Rating assigned to players registered without one
        default_deviation: Deviation assigned to players registered without one
        default_volatility: Volatility assigned to players registered without one
        rating_period_duration: Wall-clock length of one rating period
        max_iterations: Iteration cap for the volatility root finding
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    tau: float = Field(constants.DEFAULT_TAU, gt=0, description="System constant")
    convergence_tolerance: float = Field(
        constants.DEFAULT_CONVERGENCE_TOLERANCE,
        gt=0,
        description="Volatility convergence tolerance",
    )
    default_rating: float = Field(constants.DEFAULT_RATING, description="Start rating")
    default_deviation: float = Field(
        constants.DEFAULT_DEVIATION, gt=0, description="Start rating deviation"
    )
    default_volatility: float = Field(
        constants.DEFAULT_VOLATILITY, gt=0, description="Start volatility"
    )
    rating_period_duration: timedelta = Field(
        constants.DEFAULT_RATING_PERIOD, description="Length of one rating period"
    )
    max_iterations: int = Field(
        constants.DEFAULT_MAX_ITERATIONS,
        ge=1,
        description="Iteration cap for the volatility calculation",
    )

    @field_validator("rating_period_duration")
    @classmethod
    def _positive_duration(cls, value: timedelta) -> timedelta:
        if value <= timedelta(0):
            raise ValueError("rating_period_duration must be positive")
        return value

    def start_rating(self) -> PublicRating:
        """The rating a player gets when registered without one."""
        return PublicRating(
            rating=self.default_rating,
            deviation=self.default_deviation,
            volatility=self.default_volatility,
        )

    def with_tau(self, tau: float) -> "GlickoSettings":
        """Return a validated copy with a different system constant."""
        return self.model_validate({**self.model_dump(), "tau": tau})

    def with_rating_period_duration(self, duration: timedelta) -> "GlickoSettings":
        """Return a validated copy with a different rating period length."""
        return self.model_validate(
            {**self.model_dump(), "rating_period_duration": duration}
        )
