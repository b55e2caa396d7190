"""Abstract base class for key-value store data access objects (DAOs).

This class establishes the storage contract the shortening core depends on,
regardless of the underlying store (e.g., Redis, Valkey, an in-memory fake).

Responsibilities:
    - Provide atomic primitives: set-if-absent and increment-with-expire.
    - Provide typed accessors which never coerce malformed payloads.
    - Standardize error handling: every store failure is a StorageUnavailableError,
      and an absent key is never an error.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from shorty.dao.redis import StoreRedisDAO
        >>> dao = StoreRedisDAO(redis_host='localhost')

        >>> dao.set_if_absent(dao.keys.link_key('a1B2c3D4e5'), 'https://example.com')
        True
        >>> dao.set_if_absent(dao.keys.link_key('a1B2c3D4e5'), 'https://example.org')
        False
        >>> dao.get(dao.keys.link_key('a1B2c3D4e5'))
        'https://example.com'

        >>> dao.increment_and_maybe_expire(dao.keys.rate_key('my-key'), ttl=600)
        1
        >>> dao.get_bool(dao.keys.api_key_key('my-key'), default=False)
        False
"""

from abc import ABC, abstractmethod

from shorty.dao.key_schema import KeySchema


class StoreBaseDAO(ABC):
    """Interface for key-value store data access objects (DAOs).

    Attributes:
        keys (KeySchema):
            Helper for generating namespaced store keys. Set by implementations.

    Methods:
        get(key: str, **kwargs) -> str | None:
            Read a string value. Returns None if the key is absent.

        set_if_absent(key: str, value: str, **kwargs) -> bool:
            Atomically create a key. Returns False if it already exists.

        increment_and_maybe_expire(key: str, ttl: int, **kwargs) -> int:
            Atomically increment a counter, creating it at 1 with a TTL.

        get_bool(key: str, default: bool = False, **kwargs) -> bool:
            Read a boolean-encoded value. Returns default if the key is absent.

        get_int(key: str, **kwargs) -> int | None:
            Read an integer-encoded value. Returns None if the key is absent.

        set_bool(key: str, value: bool, **kwargs) -> None:
            Write a boolean-encoded value.

    Subclassing:
        Datastore-specific implementations must extend this class, implement all
        abstract methods and raise StorageUnavailableError on every store failure.

    NOTE:
        - Short link mappings are immutable. The DAO does not provide an
          interface to update or delete entries.
    """

    keys: KeySchema

    @abstractmethod
    def get(self, key: str, **kwargs) -> str | None:
        """Read a string value from the data store.

        Args:
            key (str):
                Fully qualified store key (see KeySchema).

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            str | None: The stored value, or None if the key is absent.

        Raises:
            StorageUnavailableError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def set_if_absent(self, key: str, value: str, **kwargs) -> bool:
        """Atomically store a value only if the key doesn't exist yet.

        This is the sole mechanism preventing two concurrent writers from
        claiming the same short ID.

        Args:
            key (str):
                Fully qualified store key (see KeySchema).

            value (str):
                Value to store. The key gets no TTL.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            bool: True if this call created the key, False if it already existed.

        Raises:
            StorageUnavailableError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def increment_and_maybe_expire(self, key: str, ttl: int, **kwargs) -> int:
        """Atomically increment a counter and set its TTL on creation.

        If the key is absent, it is created with value 1 and expires after `ttl`
        seconds. If it exists, it is incremented and its TTL is left untouched.

        Args:
            key (str):
                Fully qualified store key (see KeySchema).

            ttl (int):
                Time-to-live in seconds, applied only when the counter is created.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            int: The counter value after the increment.

        Raises:
            StorageUnavailableError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def get_bool(self, key: str, default: bool = False, **kwargs) -> bool:
        """Read a boolean-encoded value from the data store.

        Accepted encodings are 'true'/'false' and '1'/'0' (case-insensitive).

        Args:
            key (str):
                Fully qualified store key (see KeySchema).

            default (bool):
                Value returned when the key is absent.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            bool: The decoded value, or `default` if the key is absent.

        Raises:
            StorageUnavailableError:
                If there is an error in the data store, or the stored payload
                isn't a valid boolean encoding.
        """
        pass

    @abstractmethod
    def get_int(self, key: str, **kwargs) -> int | None:
        """Read an integer-encoded value from the data store.

        Returns:
            int | None: The decoded value, or None if the key is absent.

        Raises:
            StorageUnavailableError:
                If there is an error in the data store, or the stored payload
                isn't a valid integer.
        """
        pass

    @abstractmethod
    def set_bool(self, key: str, value: bool, **kwargs) -> None:
        """Write a boolean-encoded value ('true'/'false') without TTL.

        Raises:
            StorageUnavailableError:
                If there is an error in the data store.
        """
        pass
