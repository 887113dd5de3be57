import fakeredis
import pytest

from localshortener.dao.redis import KeyValueRedisDAO


@pytest.fixture
def fake_redis() -> fakeredis.FakeRedis:
    """Stateful in-process Redis, isolated per test."""
    return fakeredis.FakeRedis(server=fakeredis.FakeServer(), decode_responses=True)


@pytest.fixture
def store_dao(fake_redis: fakeredis.FakeRedis) -> KeyValueRedisDAO:
    return KeyValueRedisDAO(redis_client=fake_redis)
