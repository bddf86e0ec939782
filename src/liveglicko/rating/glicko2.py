# src/liveglicko/rating/glicko2.py

"""
A from-scratch implementation of the Glicko-2 rating system, generalised to
fractional rating periods.
The formulas and steps are based on the paper by Dr. Mark Glickman:
https://www.glicko.net/glicko/glicko2.pdf

Everything here works on the internal Glicko-2 scale and is a pure function
of its inputs.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

from liveglicko.exceptions import ConvergenceFailureError, InvalidRatingError
from liveglicko.models import GameResult, InternalRating
from liveglicko.settings import GlickoSettings

logger = logging.getLogger(__name__)

# ===============================================
# == Glicko-2 Core Implementation
# ===============================================


def update(
    current: InternalRating,
    results: Sequence[GameResult],
    elapsed_periods: float,
    settings: GlickoSettings,
) -> InternalRating:
    """
    Calculates a player's new rating from the games played since their last
    update, `elapsed_periods` rating periods ago.

    The player's own rating is treated as fixed for the whole set of
    results, exactly like one Glicko-2 rating period.
    """
    _check_elapsed(elapsed_periods)
    mu, phi, sigma = current.mu, current.phi, current.sigma

    if not results:
        # If the player didn't play, only RD changes (Step 6 with sigma' = sigma)
        return decay(current, elapsed_periods)

    # Step 3: Compute the estimated variance of the player's rating
    v = _compute_v(mu, results)
    if math.isinf(v):
        # Every expected score rounded to exactly 0 or 1: the games carry no
        # information, so the player is only decayed.
        logger.debug("Uninformative results, rating only decayed", extra={"mu": mu})
        return decay(current, elapsed_periods)

    # Step 4: Compute the estimated improvement in rating
    delta = _compute_delta(mu, v, results)

    # Step 5: Determine the new volatility
    sigma_prime = _compute_new_sigma(delta, phi, v, sigma, settings)

    # Step 6: Update the rating deviation to the new pre-rating period value
    phi_star = _pre_rating_period_value(phi, sigma_prime, elapsed_periods)

    # Step 7: Update the rating and rating deviation
    # Same as 1 / sqrt(1 / phi*^2 + 1 / v), but total at phi* = 0
    phi_prime = phi_star * math.sqrt(v / (v + phi_star**2))
    mu_prime = mu + phi_prime**2 * _sum_g_phi_j(mu, results)

    return InternalRating(mu=mu_prime, phi=phi_prime, sigma=sigma_prime)


def decay(current: InternalRating, elapsed_periods: float) -> InternalRating:
    """Grow the deviation of a player who has been idle for a while."""
    _check_elapsed(elapsed_periods)
    new_phi = _pre_rating_period_value(current.phi, current.sigma, elapsed_periods)
    return InternalRating(mu=current.mu, phi=new_phi, sigma=current.sigma)


def expected_score(player: InternalRating, opponent: InternalRating) -> float:
    """Expected score of `player` against `opponent` (the E() function)."""
    return _E(player.mu, opponent.mu, opponent.phi)


def _check_elapsed(elapsed_periods: float) -> None:
    if not math.isfinite(elapsed_periods) or elapsed_periods < 0:
        raise InvalidRatingError(
            f"elapsed_periods must be a finite value >= 0, got {elapsed_periods}",
            "elapsed_periods",
        )


def _pre_rating_period_value(phi: float, sigma: float, elapsed: float) -> float:
    return math.sqrt(phi**2 + sigma**2 * elapsed)


def _g(phi: float) -> float:
    """The g() function from the Glickman paper."""
    return 1 / math.sqrt(1 + 3 * phi**2 / math.pi**2)


def _E(mu: float, mu_j: float, phi_j: float) -> float:
    """The E() function, expected outcome against one opponent."""
    return 1 / (1 + math.exp(-_g(phi_j) * (mu - mu_j)))


def _compute_v(mu: float, results: Sequence[GameResult]) -> float:
    """Computes the estimated variance `v`."""
    v_inv = 0.0
    for result in results:
        opponent = result.opponent
        g_phi_j = _g(opponent.phi)
        E = _E(mu, opponent.mu, opponent.phi)
        v_inv += g_phi_j**2 * E * (1 - E)
    return 1 / v_inv if v_inv != 0 else math.inf


def _sum_g_phi_j(mu: float, results: Sequence[GameResult]) -> float:
    """Helper to compute a sum used in delta and mu' calculation."""
    total = 0.0
    for result in results:
        opponent = result.opponent
        total += _g(opponent.phi) * (result.score - _E(mu, opponent.mu, opponent.phi))
    return total


def _compute_delta(mu: float, v: float, results: Sequence[GameResult]) -> float:
    """Computes the estimated improvement `delta`."""
    return v * _sum_g_phi_j(mu, results)


def _compute_new_sigma(
    delta: float, phi: float, v: float, sigma: float, settings: GlickoSettings
) -> float:
    """
    Determines the new volatility `sigma'` using the Illinois algorithm.
    This is the most complex step of the Glicko-2 calculation.
    """
    a = math.log(sigma**2)
    delta_sq = delta**2
    phi_sq = phi**2
    tau = settings.tau
    tau_sq = tau**2
    epsilon = settings.convergence_tolerance
    max_iterations = settings.max_iterations

    def f(x: float) -> float:
        ex = math.exp(x)
        return (
            ex * (delta_sq - phi_sq - v - ex) / (2 * (phi_sq + v + ex) ** 2)
            - (x - a) / tau_sq
        )

    # Bracket the root of f(x) between A and B
    A = a
    if delta_sq > phi_sq + v:
        B = math.log(delta_sq - phi_sq - v)
    else:
        k = 1
        while f(a - k * tau) < 0:
            k += 1
            if k > max_iterations:
                _fail(max_iterations, epsilon, "bracket")
        B = a - k * tau

    f_A = f(A)
    f_B = f(B)

    iteration = 0
    while abs(B - A) > epsilon:
        iteration += 1
        if iteration > max_iterations:
            _fail(max_iterations, epsilon, "iteration")
        C = A + (A - B) * f_A / (f_B - f_A)
        f_C = f(C)
        if f_C * f_B <= 0:
            A = B
            f_A = f_B
        else:
            f_A /= 2
        B = C
        f_B = f_C

    return math.exp(A / 2)


def _fail(iterations: int, tolerance: float, stage: str) -> None:
    error = ConvergenceFailureError(iterations, tolerance, stage)
    logger.error("Glicko-2 volatility error: %s", error.message, extra=error.details)
    raise error
