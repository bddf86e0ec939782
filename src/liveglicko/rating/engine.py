# src/liveglicko/rating/engine.py

"""Continuous-time rating engine.

The engine keeps one internal rating per player together with the instant it
was last updated. Every result is applied immediately as its own, possibly
fractional, rating period; idle-time deviation growth is derived at read time
and never written back.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from liveglicko.exceptions import SelfMatchError, UnknownPlayerError
from liveglicko.models import GameResult, InternalRating, MatchOutcome, PublicRating
from liveglicko.rating import glicko2
from liveglicko.rating.scale import to_internal, to_public
from liveglicko.settings import GlickoSettings

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Default clock: timezone-aware wall-clock time in UTC."""
    return datetime.now(timezone.utc)


@dataclass
class _PlayerRecord:
    """Mutable engine state for one registered player."""

    rating: InternalRating
    last_update: datetime


class RatingEngine:
    """Manages player ratings and updates them as match results arrive.

    A single re-entrant lock guards the player map, so results touching the
    same player are applied one after the other.

    Example:
        >>> engine = new_engine(GlickoSettings())
        >>> alice = engine.register_player(PublicRating(1700.0, 300.0, 0.06))
        >>> bob = engine.register_player()
        >>> engine.register_result(alice, bob, MatchOutcome.LOSS)
        >>> engine.player_rating(bob).rating > 1500.0
        True
    """

    def __init__(self, settings: GlickoSettings, clock: Clock = utc_now) -> None:
        self._settings = settings
        self._clock = clock
        self._players: dict[int, _PlayerRecord] = {}
        self._next_id = 0
        self._lock = threading.RLock()
        self._created_at = clock()

    @property
    def settings(self) -> GlickoSettings:
        return self._settings

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def created_at(self) -> datetime:
        """The clock reading when the engine was constructed."""
        return self._created_at

    def __len__(self) -> int:
        with self._lock:
            return len(self._players)

    def __contains__(self, player_id: object) -> bool:
        with self._lock:
            return player_id in self._players

    def player_ids(self) -> Iterator[int]:
        """Iterate over all registered player IDs in registration order."""
        with self._lock:
            ids = list(self._players)
        return iter(ids)

    # =========================================================================
    # Registration
    # =========================================================================

    def register_player(self, starting: PublicRating | None = None) -> int:
        """Register a new player and return their ID."""
        return self.register_player_at(starting, self._clock())

    def register_player_at(
        self, starting: PublicRating | None, time: datetime
    ) -> int:
        """Register a new player as of `time`.

        If `starting` is None the settings' start rating is used.
        """
        if starting is None:
            starting = self._settings.start_rating()
        rating = to_internal(starting)

        with self._lock:
            player_id = self._next_id
            self._next_id += 1
            self._players[player_id] = _PlayerRecord(rating=rating, last_update=time)

        logger.debug(
            "Registered player %d",
            player_id,
            extra={
                "player_id": player_id,
                "rating": starting.rating,
                "deviation": starting.deviation,
                "volatility": starting.volatility,
            },
        )
        return player_id

    # =========================================================================
    # Queries
    # =========================================================================

    def player_rating(self, player_id: int) -> PublicRating:
        """The player's current public rating, including idle-time decay."""
        return self.player_rating_at(player_id, self._clock())

    def player_rating_at(self, player_id: int, time: datetime) -> PublicRating:
        """The player's public rating as it would be seen at `time`.

        This never changes stored state, so repeated queries are idempotent.
        """
        return to_public(self.internal_rating_at(player_id, time))

    def internal_rating(self, player_id: int) -> InternalRating:
        return self.internal_rating_at(player_id, self._clock())

    def internal_rating_at(self, player_id: int, time: datetime) -> InternalRating:
        with self._lock:
            record = self._get_record(player_id)
            elapsed = self._elapsed_periods(player_id, record, time)
            return glicko2.decay(record.rating, elapsed)

    def last_update(self, player_id: int) -> datetime:
        """When the player's stored rating was last changed."""
        with self._lock:
            return self._get_record(player_id).last_update

    def win_probability(self, player_id: int, opponent_id: int) -> float:
        """Expected score of `player_id` against `opponent_id` right now."""
        now = self._clock()
        with self._lock:
            player = self.internal_rating_at(player_id, now)
            opponent = self.internal_rating_at(opponent_id, now)
        return glicko2.expected_score(player, opponent)

    # =========================================================================
    # Results
    # =========================================================================

    def register_result(
        self, player_id: int, opponent_id: int, outcome: MatchOutcome
    ) -> None:
        """Apply a match result to both players immediately.

        `outcome` is given from `player_id`'s point of view.
        """
        self.register_result_at(player_id, opponent_id, outcome, self._clock())

    def register_result_at(
        self,
        player_id: int,
        opponent_id: int,
        outcome: MatchOutcome,
        time: datetime,
    ) -> None:
        """Apply a match result played at `time` to both players.

        Both new ratings are computed from the pre-match state before either
        is stored, so neither update sees the other's result.
        """
        with self._lock:
            player = self._get_record(player_id)
            opponent = self._get_record(opponent_id)
            if player_id == opponent_id:
                raise SelfMatchError(player_id)

            player_elapsed = self._elapsed_periods(player_id, player, time)
            opponent_elapsed = self._elapsed_periods(opponent_id, opponent, time)

            # Each side plays against the other's rating as decayed to `time`.
            player_now = glicko2.decay(player.rating, player_elapsed)
            opponent_now = glicko2.decay(opponent.rating, opponent_elapsed)

            new_player_rating = glicko2.update(
                player.rating,
                [GameResult(opponent=opponent_now, score=outcome.score)],
                player_elapsed,
                self._settings,
            )
            new_opponent_rating = glicko2.update(
                opponent.rating,
                [GameResult(opponent=player_now, score=outcome.opponent_score)],
                opponent_elapsed,
                self._settings,
            )

            player.rating = new_player_rating
            player.last_update = max(player.last_update, time)
            opponent.rating = new_opponent_rating
            opponent.last_update = max(opponent.last_update, time)

        logger.debug(
            "Registered result %d vs %d: %s",
            player_id,
            opponent_id,
            outcome.value,
            extra={
                "player_id": player_id,
                "opponent_id": opponent_id,
                "outcome": outcome.value,
                "player_elapsed_periods": player_elapsed,
                "opponent_elapsed_periods": opponent_elapsed,
            },
        )

    # =========================================================================
    # Internals
    # =========================================================================

    def _get_record(self, player_id: int) -> _PlayerRecord:
        record = self._players.get(player_id)
        if record is None:
            error = UnknownPlayerError(player_id)
            logger.warning("Unknown player: %s", error.message, extra=error.details)
            raise error
        return record

    def _elapsed_periods(
        self, player_id: int, record: _PlayerRecord, time: datetime
    ) -> float:
        """Fractional rating periods between the last update and `time`."""
        elapsed = time - record.last_update
        if elapsed < timedelta(0):
            # A time before the last update sees the stored rating unchanged.
            logger.warning(
                "Time %s is before the last update of player %d",
                time.isoformat(),
                player_id,
                extra={
                    "player_id": player_id,
                    "last_update": record.last_update.isoformat(),
                },
            )
            return 0.0
        return elapsed / self._settings.rating_period_duration


def new_engine(
    settings: GlickoSettings | None = None, clock: Clock | None = None
) -> RatingEngine:
    """Create an engine with its own, empty player pool."""
    return RatingEngine(settings or GlickoSettings(), clock or utc_now)
