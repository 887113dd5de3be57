import functools
from typing import Any
from collections.abc import Callable

import redis

from localshortener.dao.exceptions import DataStoreError, StoreReadError, StoreWriteError


__all__ = ['describe_connection', 'handle_redis_read_error', 'handle_redis_write_error']


def describe_connection(client: redis.Redis) -> str:
    """Return a human-readable location of the Redis server behind a client

    Embedded (redislite) and other unix socket clients are described by their
    socket path, TCP clients by host:port.

    Example:
        >>> describe_connection(redis.Redis(host='localhost', port=6379, db=0))
        'localhost:6379/0'
        >>> describe_connection(redislite.Redis('data/links.rdb'))
        'unix:///tmp/tmpa1b2c3/redis.socket/0'
    """
    info = client.connection_pool.connection_kwargs
    if info.get('path'):
        return f"unix://{info['path']}/{info.get('db', 0)}"
    return f"{info.get('host')}:{info.get('port')}/{info.get('db')}"


def _translate_redis_errors[F: Callable[..., Any]](error_cls: type[DataStoreError], action: str) -> Callable[[F], F]:
    def decorator(method: F) -> F:
        @functools.wraps(method)
        def wrapper(self, *args, **kwargs):
            try:
                return method(self, *args, **kwargs)
            except redis.exceptions.RedisError as e:
                raise error_cls(f'Failed to {action} Redis at {describe_connection(self.redis)} ({e}).') from e

        return wrapper

    return decorator


def handle_redis_read_error[F: Callable[..., Any]](method: F) -> F:
    """Wrap read-only DAO methods to translate Redis failures into StoreReadError

    Args:
        method (Callable[..., Any]):
            DAO method performing Redis reads which may raise redis.exceptions.RedisError.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises StoreReadError on any Redis failure
            (connectivity issues, timeouts, server-side errors).

    Example:
        >>> @handle_redis_read_error
        ... def exists(self, key):
        ...     return self.redis.exists(key) > 0
    """
    return _translate_redis_errors(StoreReadError, 'read from')(method)


def handle_redis_write_error[F: Callable[..., Any]](method: F) -> F:
    """Wrap mutating DAO methods to translate Redis failures into StoreWriteError

    Args:
        method (Callable[..., Any]):
            DAO method performing Redis writes which may raise redis.exceptions.RedisError.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises StoreWriteError on any Redis failure.
    """
    return _translate_redis_errors(StoreWriteError, 'write to')(method)
