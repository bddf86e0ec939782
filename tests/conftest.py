# tests/conftest.py

"""Pytest configuration and fixtures."""

from datetime import timedelta

import pytest
from fake_clock import FakeClock
from liveglicko.rating.engine import RatingEngine, new_engine
from liveglicko.settings import GlickoSettings


@pytest.fixture
def settings() -> GlickoSettings:
    """Paper settings: tau = 0.5 with one-hour rating periods."""
    return GlickoSettings(tau=0.5, rating_period_duration=timedelta(hours=1))


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def engine(settings: GlickoSettings, clock: FakeClock) -> RatingEngine:
    """A fresh engine driven by the fake clock."""
    return new_engine(settings, clock=clock)
