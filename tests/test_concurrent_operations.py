# tests/test_concurrent_operations.py

"""Tests for concurrent access to a shared rating engine.

All threads share one fake clock that never moves, so every result is
applied at the same instant and the final state does not depend on the
order in which threads happen to run.
"""

from concurrent.futures import ThreadPoolExecutor

from liveglicko.models import MatchOutcome
from liveglicko.rating.engine import RatingEngine, new_engine

# =============================================================================
# Helper Functions
# =============================================================================


def play_many(engine: RatingEngine, player_id: int, opponent_id: int, games: int):
    """Helper to register the same result several times."""
    for _ in range(games):
        engine.register_result(player_id, opponent_id, MatchOutcome.WIN)


# =============================================================================
# Concurrent Operation Tests
# =============================================================================


def test_concurrent_registration_gives_unique_ids(engine: RatingEngine):
    """Registering from many threads never hands out the same ID twice."""
    with ThreadPoolExecutor(max_workers=8) as pool:
        ids = list(pool.map(lambda _: engine.register_player(), range(200)))

    assert len(set(ids)) == 200
    assert len(engine) == 200


def test_concurrent_results_on_same_pair_are_not_lost(engine: RatingEngine, clock):
    """Results touching the same players are serialized, none are lost."""
    # 1. ARRANGE: The same pair in a threaded and a sequential engine.
    sequential = new_engine(engine.settings, clock=clock)
    a, b = engine.register_player(), engine.register_player()
    seq_a, seq_b = sequential.register_player(), sequential.register_player()

    # 2. ACT: 40 identical wins from 8 threads vs. 40 in a row.
    with ThreadPoolExecutor(max_workers=8) as pool:
        futures = [pool.submit(play_many, engine, a, b, 5) for _ in range(8)]
        for future in futures:
            future.result()
    play_many(sequential, seq_a, seq_b, 40)

    # 3. ASSERT: Same state as applying every result one after the other.
    assert engine.internal_rating(a) == sequential.internal_rating(seq_a)
    assert engine.internal_rating(b) == sequential.internal_rating(seq_b)


def test_concurrent_disjoint_pairs(engine: RatingEngine):
    """Independent pairs can be rated from different threads."""
    pairs = [(engine.register_player(), engine.register_player()) for _ in range(10)]

    with ThreadPoolExecutor(max_workers=10) as pool:
        futures = [pool.submit(play_many, engine, a, b, 3) for a, b in pairs]
        for future in futures:
            future.result()

    winners = {engine.player_rating(a).rating for a, _ in pairs}
    losers = {engine.player_rating(b).rating for _, b in pairs}
    assert len(winners) == 1
    assert len(losers) == 1
    assert winners.pop() > 1500.0 > losers.pop()


def test_queries_during_updates_see_consistent_state(engine: RatingEngine):
    """Readers never observe an invalid rating while writers are active."""
    a, b = engine.register_player(), engine.register_player()

    with ThreadPoolExecutor(max_workers=4) as pool:
        writer = pool.submit(play_many, engine, a, b, 50)
        readings = [pool.submit(engine.player_rating, a) for _ in range(50)]
        writer.result()
        ratings = [r.result() for r in readings]

    assert all(r.deviation > 0 for r in ratings)
    assert all(r.rating >= 1500.0 for r in ratings)
