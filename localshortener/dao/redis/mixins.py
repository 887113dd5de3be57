"""Redis mixin providing shared client initialization and connectivity checks.

Responsibilities:
    - Initialize a Redis client (injected, standalone server or embedded store)
    - Healthcheck Redis client
    - Release the client on shutdown

The embedded store is a redislite-managed Redis server persisting to an RDB
file on local disk. It exposes the regular redis.Redis client API, so DAOs
work the same way against either backend.

Classes:
    - RedisClientMixin: Base mixin to inject Redis key management, client setup & healthcheck.

Example:
    Typical usage with a DAO implementation:

        >>> class KeyValueRedisDAO(RedisClientMixin, KeyValueBaseDAO):
        ...     pass
        ...
        >>> dao = KeyValueRedisDAO(redis_path='data/localshortener.rdb')
        >>> dao.healthcheck()
        True
"""

import logging
from pathlib import Path

import redis

from localshortener.constants import Defaults
from localshortener.dao.redis.redis_key_schema import RedisKeySchema
from localshortener.dao.redis.helpers import describe_connection
from localshortener.dao.exceptions import DataStoreError
from localshortener.exceptions import BadConfigurationError


logger = logging.getLogger(__name__)


def _embedded_client(path: str | Path, decode_responses: bool) -> redis.Redis:
    try:
        import redislite
    except ImportError as e:
        raise BadConfigurationError(
            "The embedded store requires the 'redislite' package. "
            "Install it with `pip install localshortener[embedded]` or configure REDIS_HOST."
        ) from e

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    logger.info('Opening embedded store.', extra={'storePath': str(path)})
    return redislite.Redis(str(path), decode_responses=decode_responses)


class RedisClientMixin:
    """Mixin Redis client setup and health check for Redis-backed DAOs.

    Attributes:
        redis (redis.Redis):
            Active Redis client instance used by subclasses.

        keys (RedisKeySchema):
            Helper class for generating namespaced Redis key names.

    Methods:
        healthcheck(raise_error: bool = True) -> bool:
            Ping Redis to verify connectivity.
            Optionally raise a DataStoreError if unreachable.

        close() -> None:
            Release the Redis client.
    """

    def __init__(
        self,
        redis_host: str | None = None,
        redis_port: int | str = 6379,
        redis_db: int | str = 0,
        redis_decode_responses: bool = True,
        redis_username: str | None = None,
        redis_password: str | None = None,
        redis_path: str | Path | None = None,
        redis_client: redis.Redis | None = None,
        prefix: str | None = None,
    ):
        """Initialize a Redis-based DAO

        The client is resolved in this order:
            1. `redis_client`, if given, is used as-is.
            2. `redis_host`, if given, connects to a standalone Redis server.
            3. Otherwise an embedded store is opened at `redis_path`
               (defaults to Defaults.STORE_PATH).

        Args:
            redis_host (str | None):
                Hostname of a standalone Redis server.

            redis_port (int | str):
                Redis server port. Defaults to 6379.

            redis_db (int | str):
                Redis database index. Defaults to 0.

            redis_decode_responses (bool):
                If True, decodes Redis responses. Defaults to True.

            redis_username (str | None):
                Username for Redis authentication (if required).

            redis_password (str | None):
                Password for Redis authentication (if required).

            redis_path (str | Path | None):
                RDB file of the embedded store.

            redis_client (redis.Redis | None):
                Pre-initialized Redis client. If None, a new client is created.

            prefix (str | None):
                Namespace prefix for all Redis keys, e.g. 'app:env'.

        Raises:
            DataStoreError:
                If Redis healthcheck fails (connectivity issues).
            BadConfigurationError:
                If the embedded store is requested but redislite is not installed.
        """
        if redis_client is None:
            if redis_host:
                redis_client = redis.Redis(
                    host=redis_host,
                    port=int(redis_port),
                    db=int(redis_db),
                    decode_responses=redis_decode_responses,
                    username=redis_username,
                    password=redis_password,
                )
            else:
                redis_client = _embedded_client(redis_path or Defaults.STORE_PATH, redis_decode_responses)

        self.redis = redis_client
        self.keys = RedisKeySchema(prefix=prefix)

        self.healthcheck()

    def healthcheck(self, raise_error: bool = True) -> bool:
        """PING Redis to healthcheck connectivity

        Args:
            raise_error (bool):
                If True, raises DataStoreError on failure. Defaults to True.

        Returns:
            bool:
                True if Redis is reachable, False otherwise (only if raise_error=False).

        Raises:
            DataStoreError:
                If Redis connection cannot be established and raise_error=True.

        Example:
            >>> self.healthcheck()
            True
        """
        try:
            self.redis.ping()
        except redis.exceptions.RedisError as e:
            if raise_error:
                raise DataStoreError(
                    f"Can't connect to Redis at {describe_connection(self.redis)}. Check the provided configuration parameters."
                ) from e
            return False
        else:
            return True

    def close(self) -> None:
        """Release the Redis client

        Must only be called once no request is using the DAO anymore.
        """
        logger.info('Closing store connection.', extra={'store': describe_connection(self.redis)})
        self.redis.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
