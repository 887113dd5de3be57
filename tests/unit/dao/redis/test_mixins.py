"""Unit tests for Redis-based mixins.

Test coverage includes:
    1. Initialization and configuration
       - Uses a pre-initialized client as-is.
       - Creates a standalone Redis client when a host is configured.
       - Opens the embedded store otherwise.
       - Confirms unreachable Redis raises DataStoreError.
    2. Healthcheck behavior
       - Healthcheck pings Redis.
       - Missed pong from Redis raises error or returns False.
    3. Shutdown
       - close() releases the client.
"""

import re
from unittest.mock import MagicMock, patch

import pytest
import redis

from localshortener.constants import Defaults
from localshortener.dao.exceptions import DataStoreError
from localshortener.dao.redis.mixins import RedisClientMixin


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture
def redis_client():
    _redis_client = MagicMock(
        spec=redis.Redis, connection_pool=MagicMock(spec=redis.ConnectionPool, connection_kwargs={'host': 'redis', 'port': 6379, 'db': 0})
    )
    _redis_client.ping.return_value = True
    return _redis_client


# -------------------------------
# 1. Initialization and configuration
# -------------------------------


def test_initialize_with_redis_client(redis_client):
    mixin = RedisClientMixin(redis_client=redis_client, prefix='testapp:test')

    assert mixin.redis is redis_client
    assert mixin.keys.prefix == 'testapp:test'
    redis_client.ping.assert_called_once_with()


def test_initialize_standalone_redis():
    redis_config = {
        'redis_host': 'redis',
        'redis_port': '6379',
        'redis_db': '1',
        'redis_decode_responses': True,
        'redis_username': 'default',
        'redis_password': 'password',
    }

    with patch('localshortener.dao.redis.mixins.redis.Redis', autospec=True) as redis_mock:
        mixin = RedisClientMixin(**redis_config, prefix='testapp:test')

        redis_mock.assert_called_once_with(host='redis', port=6379, db=1, decode_responses=True, username='default', password='password')
        assert mixin.redis is redis_mock.return_value


def test_initialize_embedded_store(redis_client, tmp_path):
    store_path = tmp_path / 'store' / 'links.rdb'

    with patch('localshortener.dao.redis.mixins._embedded_client', return_value=redis_client) as embedded_mock:
        mixin = RedisClientMixin(redis_path=store_path)

    embedded_mock.assert_called_once_with(store_path, True)
    assert mixin.redis is redis_client


def test_initialize_embedded_store_with_default_path(redis_client):
    with patch('localshortener.dao.redis.mixins._embedded_client', return_value=redis_client) as embedded_mock:
        RedisClientMixin()

    embedded_mock.assert_called_once_with(Defaults.STORE_PATH, True)


def test_initialize_with_unreachable_redis():
    exception_message = "Can't connect to Redis at 203.0.113.1:18000/5. Check the provided configuration parameters."

    with patch('localshortener.dao.redis.mixins.redis.Redis', autospec=True) as redis_mock:
        redis_mock_instance = redis_mock.return_value
        redis_mock_instance.ping.side_effect = redis.exceptions.ConnectionError('Connection error')
        redis_mock_instance.connection_pool = MagicMock()
        redis_mock_instance.connection_pool.connection_kwargs = {'host': '203.0.113.1', 'port': 18000, 'db': 5}

        with pytest.raises(DataStoreError, match=re.escape(exception_message)):
            RedisClientMixin(redis_host='203.0.113.1', redis_port=18000, redis_db=5)


# -------------------------------
# 2. Healthcheck behavior
# -------------------------------


def test_healthcheck(redis_client):
    mixin = RedisClientMixin(redis_client=redis_client)
    assert mixin.healthcheck() is True
    assert redis_client.ping.call_count == 2


def test_healthcheck_without_raising(redis_client):
    mixin = RedisClientMixin(redis_client=redis_client)
    redis_client.ping.side_effect = redis.exceptions.ConnectionError('Connection error')

    assert mixin.healthcheck(raise_error=False) is False
    with pytest.raises(DataStoreError):
        mixin.healthcheck()


# -------------------------------
# 3. Shutdown
# -------------------------------


def test_close(redis_client):
    mixin = RedisClientMixin(redis_client=redis_client)
    mixin.close()
    redis_client.close.assert_called_once_with()
