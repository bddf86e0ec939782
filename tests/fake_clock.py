# tests/fake_clock.py

"""A controllable clock shared by the test modules."""

from datetime import datetime, timedelta, timezone

START_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


class FakeClock:
    """A manually advanced clock so tests control elapsed time exactly."""

    def __init__(self, start: datetime = START_TIME) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now
