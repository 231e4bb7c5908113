"""
Tests for the Redis connection lifecycle and the liveness route.
"""

import fakeredis
import pytest
from fastapi.testclient import TestClient

from userboard.database import RedisConnection, UserRecord, get_connection
from userboard.database import connection as connection_module
from userboard.config import AppConfig, RedisConfig
from userboard.errors import StoreUnavailable
from userboard.main import app


@pytest.fixture
def fake_redis_factory(monkeypatch):
    """Make RedisConnection build in-memory clients."""
    server = fakeredis.FakeServer()

    def factory(**kwargs):
        return fakeredis.FakeAsyncRedis(server=server, decode_responses=True)

    monkeypatch.setattr(connection_module, "Redis", factory)
    return server


class TestRedisConnection:
    """Tests for RedisConnection."""

    async def test_client_before_initialize_raises(self):
        with pytest.raises(RuntimeError):
            RedisConnection().client

    async def test_initialize_and_close(self, fake_redis_factory):
        conn = RedisConnection()
        await conn.initialize()
        client = conn.client
        await conn.initialize()
        assert conn.client is client

        await conn.close()
        with pytest.raises(RuntimeError):
            conn.client

    async def test_user_records_share_the_client(self, fake_redis_factory):
        conn = RedisConnection()
        await conn.initialize()
        try:
            first = conn.user("1")
            second = conn.user("2")
            assert isinstance(first, UserRecord)
            assert first.redis is second.redis is conn.client

            await first.add_score(3)
            assert await second.get_leaderboard_index() == -1
            assert await first.get_leaderboard_index() == 0
        finally:
            await conn.close()

    async def test_unreachable_redis_raises_store_unavailable(self, fake_redis_factory):
        fake_redis_factory.connected = False
        conn = RedisConnection()
        with pytest.raises(StoreUnavailable):
            await conn.initialize()
        with pytest.raises(RuntimeError):
            conn.client

    def test_process_wide_connection(self):
        assert get_connection() is get_connection()


class TestIndexRoute:
    """Tests for the liveness route."""

    def test_get_index(self):
        client = TestClient(app)
        response = client.get("/")
        assert response.status_code == 200
        assert response.text == "Success"

    def test_lifespan_opens_and_closes_redis(self, fake_redis_factory):
        with TestClient(app) as client:
            assert client.get("/").status_code == 200
            assert get_connection().client is not None
        with pytest.raises(RuntimeError):
            get_connection().client

    def test_unknown_route(self):
        client = TestClient(app)
        assert client.get("/health").status_code == 404


class TestSettings:
    """Tests for environment-driven settings."""

    def test_unprefixed_variables_are_ignored(self, monkeypatch):
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("HOST", "0.0.0.0")
        assert RedisConfig().PORT == 6379
        assert RedisConfig().HOST == "localhost"
        assert AppConfig().PORT == 8000

    def test_prefixed_variables_apply(self, monkeypatch):
        monkeypatch.setenv("REDIS_PORT", "6380")
        monkeypatch.setenv("APP_PORT", "9000")
        assert RedisConfig().PORT == 6380
        assert AppConfig().PORT == 9000
