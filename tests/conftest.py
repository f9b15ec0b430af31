from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from guessbet.deps import get_registry
from guessbet.games.registry import SessionRegistry
from guessbet.main import create_app

START = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    def __init__(self, now: datetime = START):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


class FixedRandom:
    """Stands in for random.Random; always draws the same number."""

    def __init__(self, number: int):
        self.number = number
        self.calls = 0

    def randint(self, a: int, b: int) -> int:
        self.calls += 1
        return self.number


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def rng():
    return FixedRandom(4)


@pytest.fixture()
def registry(clock, rng):
    return SessionRegistry(clock=clock, rng=rng, timeout_seconds=60)


@pytest.fixture()
def client(registry):
    application = create_app()
    application.dependency_overrides[get_registry] = lambda: registry
    with TestClient(application) as test_client:
        yield test_client
    application.dependency_overrides.clear()
