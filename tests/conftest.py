from __future__ import annotations
import pytest

from construmator import EditorSession, LocalAuth, ProjectPersistence, ProjectStore


class FakeClock:
    def __init__(self, now: float = 1_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, hours: float):
        self.now += hours * 3600


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def auth(tmp_path, clock):
    return LocalAuth(tmp_path / "users.json", session_hours=24, clock=clock)


@pytest.fixture
def store(tmp_path):
    return ProjectStore(tmp_path / "user_saves.json")


@pytest.fixture
def persistence(store, auth):
    return ProjectPersistence(store, auth)


@pytest.fixture
def alice(auth):
    user = auth.register("alice@example.com", "secret1", "Alice")
    auth.login("alice@example.com", "secret1")
    return user


@pytest.fixture
def session():
    return EditorSession()
