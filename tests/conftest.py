"""Pytest configuration and fixtures."""

import itertools
from datetime import datetime, timedelta, timezone

import numpy as np
import pytest

from first_signal.cognition import CognitiveEngine, EngineConfig

START_TIME = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    """Manually advanced clock returning aware UTC datetimes."""

    def __init__(self, start: datetime = START_TIME):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


class SequentialIds:
    """Id factory producing node-0, node-1, ..."""

    def __init__(self, prefix: str = "node"):
        self._counter = itertools.count()
        self.prefix = prefix

    def __call__(self) -> str:
        return f"{self.prefix}-{next(self._counter)}"


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def ids():
    return SequentialIds()


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def config():
    return EngineConfig()


@pytest.fixture
def engine(config, rng, clock, ids):
    """Engine with deterministic randomness, time and ids."""
    return CognitiveEngine("user-1", config, rng=rng, clock=clock, id_factory=ids)


@pytest.fixture
def make_engine(rng, clock):
    """Factory for engines sharing the test clock."""

    def _make(config=None, seed=None, user_id="user-1"):
        generator = np.random.default_rng(seed) if seed is not None else rng
        return CognitiveEngine(
            user_id, config, rng=generator, clock=clock, id_factory=SequentialIds()
        )

    return _make
