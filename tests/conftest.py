"""Shared fixtures: an in-memory Redis behind RedisService."""

import fakeredis
import pytest
from fakeredis import aioredis

from tastematch.services.stores.redis_service import RedisService


@pytest.fixture
def fake_redis():
    # fresh server per test so no keys leak between tests
    return aioredis.FakeRedis(server=fakeredis.FakeServer(), decode_responses=True)


@pytest.fixture
def redis(fake_redis):
    return RedisService(client=fake_redis)
