"""
Shared fixtures: an in-memory Redis and a record bound to it.
"""

import os

import fakeredis
import pytest

from userboard.database import UserRecord


TEST_USER_ID = os.getenv("TEST_USER_ID") or "1234"


@pytest.fixture
async def redis_client():
    client = fakeredis.FakeAsyncRedis(decode_responses=True)
    await client.flushall()
    yield client
    await client.flushall()
    await client.aclose()


@pytest.fixture
def user(redis_client):
    return UserRecord(TEST_USER_ID, redis_client)


@pytest.fixture
def offline_client():
    """A client whose server refuses every command."""
    server = fakeredis.FakeServer()
    server.connected = False
    return fakeredis.FakeAsyncRedis(server=server, decode_responses=True)
