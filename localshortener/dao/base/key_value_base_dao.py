"""Abstract base class for short link key-value data access objects (DAOs).

This class establishes a consistent contract for all key-value DAO implementations,
regardless of the underlying storage engine (e.g., embedded redislite, standalone Redis).

Responsibilities:
    - Provide an interface for existence checks, reads, writes with optional TTL and deletes.
    - Standardize error handling across multiple data store implementations.
    - Enforce a consistent API for use by the shortening service.

Every operation maps to a single atomic store call (or a single store transaction).
Callers that need "must exist" semantics check `exists()` first; the pair is not
atomic and a concurrent delete or expiry in between is possible.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from localshortener.dao.redis import KeyValueRedisDAO

        >>> dao = KeyValueRedisDAO(redis_path='data/localshortener.rdb')

        >>> dao.set('a1b2c3', 'https://example.com/blog/article-123', ttl_minutes=5)
        >>> dao.exists('a1b2c3')
        True
        >>> dao.get('a1b2c3')
        'https://example.com/blog/article-123'
        >>> dao.delete('a1b2c3')
        >>> dao.exists('a1b2c3')
        False
"""

from abc import ABC, abstractmethod


class KeyValueBaseDAO(ABC):
    """Interface for key-value data access objects (DAOs).

    Methods:
        exists(key: str) -> bool:
            Check whether a live (non-expired) value is stored under key.
            Raises StoreReadError on read failure.

        get(key: str) -> str:
            Retrieve the value stored under key.
            Raises StoreReadError if the key is absent or the read fails.

        set(key: str, value: str, ttl_minutes: int = 0) -> None:
            Store value under key, overwriting any previous value.
            Raises StoreWriteError on write failure.

        delete(key: str) -> None:
            Remove key. Deleting an absent key is not an error.
            Raises StoreWriteError on write failure.

        ttl(key: str) -> int | None:
            Remaining time-to-live in seconds, None if the key never expires.
            Raises StoreReadError if the key is absent or the read fails.

        healthcheck(raise_error: bool = True) -> bool:
            Verify the data store is reachable.

        close() -> None:
            Release the data store handle.

    Subclassing:
        Datastore-specific implementations (e.g., KeyValueRedisDAO) must extend
        this class and implement all abstract methods.
    """

    @abstractmethod
    def exists(self, key: str) -> bool:
        """Check whether a live value is stored under key.

        Expired keys count as absent even if the data store hasn't physically
        reclaimed them yet.

        Args:
            key (str):
                The key to look up.

        Returns:
            bool: True if a live value exists, False otherwise.

        Raises:
            StoreReadError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def get(self, key: str) -> str:
        """Retrieve the value stored under key.

        Args:
            key (str):
                The key to look up.

        Returns:
            str: An independent copy of the stored value.

        Raises:
            StoreReadError:
                If the key is absent or there is an error in the data store.
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str, ttl_minutes: int = 0) -> None:
        """Store value under key.

        Args:
            key (str):
                The key to write.

            value (str):
                The value to store.

            ttl_minutes (int):
                0 stores the value without expiry. A positive number of minutes
                makes the data store expire the value after that duration.

        Raises:
            ValueError:
                If ttl_minutes is negative.

            StoreWriteError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove key from the data store.

        Args:
            key (str):
                The key to remove.

        Raises:
            StoreWriteError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def ttl(self, key: str) -> int | None:
        """Retrieve the remaining time-to-live of key in seconds.

        Args:
            key (str):
                The key to look up.

        Returns:
            int | None: Remaining seconds, None if the key never expires.

        Raises:
            StoreReadError:
                If the key is absent or there is an error in the data store.
        """
        pass

    @abstractmethod
    def healthcheck(self, raise_error: bool = True) -> bool:
        pass

    @abstractmethod
    def close(self) -> None:
        pass
