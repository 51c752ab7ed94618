import itertools

import fakeredis
import pytest
from fastapi.testclient import TestClient

from tinyfeed.core.config import settings
from tinyfeed.main import create_app
from tinyfeed.services.feed_store import FeedStore

START_MS = 1_760_000_000_000


class Clock:
    def __init__(self, now: int = START_MS):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


@pytest.fixture(autouse=True)
def cheap_kdf(monkeypatch):
    monkeypatch.setattr(settings, "KDF_N", 16)
    monkeypatch.setattr(settings, "KDF_R", 1)
    monkeypatch.setattr(settings, "KDF_P", 1)


@pytest.fixture
def clock():
    return Clock()


@pytest.fixture
def fake_redis():
    return fakeredis.FakeAsyncRedis(server=fakeredis.FakeServer(), decode_responses=True)


@pytest.fixture
def store(fake_redis, clock):
    return FeedStore(fake_redis, clock=clock)


@pytest.fixture
def counting_ids():
    counter = itertools.count()
    return lambda length: f"p{next(counter)}"


@pytest.fixture
def client(fake_redis, clock):
    app = create_app(redis_client=fake_redis, clock=clock)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def new_feed(client):
    res = client.post("/api/feed")
    assert res.status_code == 200
    data = res.json()
    return data["id"], data["writeKey"]
