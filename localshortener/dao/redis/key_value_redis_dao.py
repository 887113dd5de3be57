"""Data Access Object (DAO) implementation for short links in Redis

This module provides a Redis-based implementation of KeyValueBaseDAO. It runs
against the embedded redislite store or a standalone Redis server alike.

Responsibilities:
    - Check, read, write and delete short link keys;
    - Delegate link expiry to Redis' native key TTL (lazy expiry on read and
      background reclamation happen inside Redis);
    - Translate Redis failures into StoreReadError / StoreWriteError.

Each method issues a single Redis command or a single MULTI/EXEC transaction,
so every call is atomic and isolated from concurrent callers. No
application-level locking is added on top.

Classes:
    KeyValueRedisDAO:
        DAO for storing and retrieving short link targets in a Redis datastore.

Example:
    >>> from localshortener.dao.redis import KeyValueRedisDAO

    >>> dao = KeyValueRedisDAO(redis_path='data/localshortener.rdb')
    >>> dao.set('abc123', 'https://example.com/page', ttl_minutes=60)
    >>> dao.get('abc123')
    'https://example.com/page'
    >>> dao.ttl('abc123')
    3600
"""

from beartype import beartype

from localshortener.constants import TTL
from localshortener.dao.base import KeyValueBaseDAO
from localshortener.dao.redis.mixins import RedisClientMixin
from localshortener.dao.redis.helpers import handle_redis_read_error, handle_redis_write_error
from localshortener.dao.exceptions import StoreReadError


class KeyValueRedisDAO(RedisClientMixin, KeyValueBaseDAO):
    """Redis-based Data Access Object (DAO) for short link key-value pairs

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.

    Example:
        >>> dao = KeyValueRedisDAO(redis_host='localhost', prefix='localshortener:test')
        >>> dao.set('abc123', 'https://example.com')
        >>> dao.exists('abc123')
        True
        >>> dao.delete('abc123')
        >>> dao.exists('abc123')
        False
    """

    @handle_redis_read_error
    @beartype
    def exists(self, key: str) -> bool:
        return self.redis.exists(self.keys.link_key(key)) > 0

    @handle_redis_read_error
    @beartype
    def get(self, key: str) -> str:
        """Retrieve the value stored under key

        Redis returns a fresh object for every reply, so the value is never
        shared with the client's connection buffers.

        Raises:
            StoreReadError:
                If the key doesn't exist (or just expired) or Redis fails.

        Example:
            >>> dao.get('abc123')
            'https://example.com'
        """
        value = self.redis.get(self.keys.link_key(key))
        if value is None:
            raise StoreReadError(f"Key '{key}' not found.")

        # Clients created without decode_responses hand back raw bytes
        if isinstance(value, bytes):
            return value.decode('utf-8')
        return str(value)

    @handle_redis_write_error
    @beartype
    def set(self, key: str, value: str, ttl_minutes: int = 0) -> None:
        """Store value under key, optionally expiring after ttl_minutes

        The write is performed via a Redis transaction. A plain SET (no TTL)
        also clears any expiry left over from a previous value under the same
        key, so overwriting an expiring link with a permanent one makes it permanent.

        Raises:
            ValueError:
                If ttl_minutes is negative.
            StoreWriteError:
                If a Redis failure occurs during the transaction.

        Example:
            >>> dao.set('abc123', 'https://example.com', ttl_minutes=5)
            >>> dao.ttl('abc123')
            300
        """
        if ttl_minutes < 0:
            raise ValueError(f'TTL must be a non-negative number of minutes (given value: {ttl_minutes}).')

        link_key = self.keys.link_key(key)
        with self.redis.pipeline(transaction=True) as pipe:
            if ttl_minutes == 0:
                pipe.set(link_key, value)
            else:
                pipe.set(link_key, value, ex=ttl_minutes * TTL.ONE_MINUTE)
            pipe.execute()

    @handle_redis_write_error
    @beartype
    def delete(self, key: str) -> None:
        self.redis.delete(self.keys.link_key(key))

    @handle_redis_read_error
    @beartype
    def ttl(self, key: str) -> int | None:
        """Retrieve the remaining TTL of key in seconds

        Redis replies -2 for missing keys and -1 for keys without expiry.

        Example:
            >>> dao.ttl('abc123')
            299
            >>> dao.ttl('permanent')
            None
        """
        ttl = self.redis.ttl(self.keys.link_key(key))
        if ttl == -2:
            raise StoreReadError(f"Key '{key}' not found.")
        return None if ttl == -1 else ttl
