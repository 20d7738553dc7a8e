import pytest
import redis
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from app import ratelimit
from app.config import settings
from app.errors import register_exception_handlers

class FakePipeline:
    def __init__(self, store: dict[str, int]):
        self.store = store
        self.key: str | None = None

    def incr(self, key: str) -> None:
        self.key = key

    def expire(self, key: str, seconds: int, nx: bool = False) -> None:
        pass

    def execute(self) -> list:
        self.store[self.key] = self.store.get(self.key, 0) + 1
        return [self.store[self.key], True]

class FakeRedis:
    def __init__(self):
        self.store: dict[str, int] = {}

    def pipeline(self) -> FakePipeline:
        return FakePipeline(self.store)

class DownRedis:
    def pipeline(self):
        raise redis.ConnectionError("connection refused")

def _limited_app(limit: int) -> TestClient:
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/ping", dependencies=[Depends(ratelimit.rate_limit("test", limit_per_window=limit, window_seconds=60))])
    def ping() -> dict:
        return {"success": True}

    return TestClient(app)

@pytest.fixture()
def limiter_on(monkeypatch):
    monkeypatch.setattr(settings, "rate_limit_enabled", True)

def test_blocks_after_limit(monkeypatch, limiter_on):
    monkeypatch.setattr(ratelimit, "redis_client", FakeRedis())
    client = _limited_app(limit=2)

    assert client.get("/ping").status_code == 200
    assert client.get("/ping").status_code == 200

    r = client.get("/ping")
    assert r.status_code == 429
    assert r.json() == {"success": False, "message": ratelimit.TOO_MANY_REQUESTS}

def test_fails_open_when_redis_down(monkeypatch, limiter_on):
    monkeypatch.setattr(ratelimit, "redis_client", DownRedis())
    client = _limited_app(limit=1)

    for _ in range(3):
        assert client.get("/ping").status_code == 200

def test_disabled_limiter_skips_redis(monkeypatch):
    monkeypatch.setattr(settings, "rate_limit_enabled", False)
    monkeypatch.setattr(ratelimit, "redis_client", DownRedis())
    client = _limited_app(limit=0)

    assert client.get("/ping").status_code == 200
