from unittest.mock import MagicMock

import pytest
import redis


TCP_CONNECTION = {'host': 'redis.test', 'port': 6379, 'db': 0}
EMBEDDED_CONNECTION = {'path': '/tmp/localshortener/redis.socket', 'db': 0}


def mock_store_client(connection_kwargs: dict) -> MagicMock:
    """Mock a client whose MULTI/EXEC pipeline is the client itself

    Commands queued on the pipeline are therefore asserted directly on the
    returned mock, e.g. `client.set.assert_called_once_with(...)`.
    """
    client = MagicMock(spec=redis.client.Pipeline)
    client.connection_pool = MagicMock(spec=redis.ConnectionPool, connection_kwargs=connection_kwargs)
    client.exists.return_value = 0
    client.ttl.return_value = -1
    client.pipeline.return_value = client
    client.__enter__.return_value = client
    client.__exit__.return_value = None
    return client


@pytest.fixture
def app_prefix() -> str:
    return 'testapp:test'


@pytest.fixture
def redis_client() -> MagicMock:
    """Standalone Redis server reached over TCP."""
    return mock_store_client(TCP_CONNECTION)


@pytest.fixture
def embedded_redis_client() -> MagicMock:
    """Embedded redislite store reached over its unix socket."""
    return mock_store_client(EMBEDDED_CONNECTION)
