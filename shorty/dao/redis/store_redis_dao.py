"""Data Access Object (DAO) implementation of the key-value store contract in Redis

This module provides a Redis-based implementation of StoreBaseDAO, the storage
facade behind short link mappings, API key records and rate limit counters.

Responsibilities:
    - Read and atomically create string values (SET NX);
    - Atomically increment rate counters and set their TTL once per window;
    - Decode boolean and integer payloads without coercing malformed values;
    - Raise StorageUnavailableError on every Redis failure.

Classes:
    StoreRedisDAO:
        DAO for the shortener's key-value records in a Redis datastore.

Example:
    >>> from shorty.dao.redis import StoreRedisDAO

    >>> dao = StoreRedisDAO(redis_host='localhost', prefix=None)

    >>> dao.set_if_absent('a1B2c3D4e5', 'https://example.com/page')
    True
    >>> dao.get('a1B2c3D4e5')
    'https://example.com/page'

    >>> dao.increment_and_maybe_expire('RATE_my-key', ttl=600)
    1
    >>> dao.increment_and_maybe_expire('RATE_my-key', ttl=600)
    2
"""

from beartype import beartype

from shorty.dao.base import StoreBaseDAO
from shorty.dao.codecs import decode_str, decode_bool, decode_int, encode_bool
from shorty.dao.redis.mixins import RedisClientMixin
from shorty.dao.redis.helpers import handle_redis_errors


# INCR creates a missing key at 1. The TTL is attached only on that first
# increment so later calls within the window never extend it.
INCREMENT_AND_MAYBE_EXPIRE_SCRIPT = """
local count = redis.call('INCR', KEYS[1])
if count == 1 then
    redis.call('EXPIRE', KEYS[1], ARGV[1])
end
return count
"""


class StoreRedisDAO(RedisClientMixin, StoreBaseDAO):
    """Redis-based Data Access Object (DAO) for the shortener's key-value records

    This class implements the StoreBaseDAO interface using Redis as a data store.

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (KeySchema):
            Key schema helper for generating namespaced store keys.

    Methods:
        get(key: str, **kwargs) -> str | None:
            GET a string value. None if the key is absent.

        set_if_absent(key: str, value: str, **kwargs) -> bool:
            SET NX a string value without TTL.

        increment_and_maybe_expire(key: str, ttl: int, **kwargs) -> int:
            INCR a counter and EXPIRE it on creation, atomically (Lua script).

        get_bool(key: str, default: bool = False, **kwargs) -> bool:
            GET a boolean-encoded value.

        get_int(key: str, **kwargs) -> int | None:
            GET an integer-encoded value.

        set_bool(key: str, value: bool, **kwargs) -> None:
            SET a boolean-encoded value.

    All methods raise StorageUnavailableError on connectivity issues or
    undecodable payloads.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._increment_and_maybe_expire = self.redis.register_script(INCREMENT_AND_MAYBE_EXPIRE_SCRIPT)

    @handle_redis_errors
    @beartype
    def get(self, key: str, **kwargs) -> str | None:
        return decode_str(self.redis.get(key), key)

    @handle_redis_errors
    @beartype
    def set_if_absent(self, key: str, value: str, **kwargs) -> bool:
        """Store a value only if the key doesn't exist yet

        Redis answers SET NX with OK when the key was created and with a nil
        reply otherwise, which redis-py surfaces as True and None.

        Example:
            >>> dao.set_if_absent('a1B2c3D4e5', 'https://example.com')
            True
            >>> dao.set_if_absent('a1B2c3D4e5', 'https://example.com')
            False
        """
        return bool(self.redis.set(key, value, nx=True))

    @handle_redis_errors
    @beartype
    def increment_and_maybe_expire(self, key: str, ttl: int, **kwargs) -> int:
        """Increment a counter, setting its TTL only when the counter is created

        NOTE: INCR and EXPIRE run inside one Lua script so both steps are a single
              atomic round trip. Checking EXISTS first and then issuing INCR/EXPIRE
              as separate commands would allow this interleaving:

              (request 1): EXISTS RATE_<key>     => 0
              (request 2): EXISTS RATE_<key>     => 0
              (request 1): INCR RATE_<key>       => 1
              (request 1): EXPIRE RATE_<key> 600
              ... request 2 stalls for a while
              (request 2): INCR RATE_<key>       => 2
              (request 2): EXPIRE RATE_<key> 600 => window silently extended

        Example:
            >>> dao.increment_and_maybe_expire('RATE_my-key', ttl=600)
            1
        """
        count = self._increment_and_maybe_expire(keys=[key], args=[ttl])
        return decode_int(count, key)

    @handle_redis_errors
    @beartype
    def get_bool(self, key: str, default: bool = False, **kwargs) -> bool:
        value = decode_bool(self.redis.get(key), key)
        return default if value is None else value

    @handle_redis_errors
    @beartype
    def get_int(self, key: str, **kwargs) -> int | None:
        return decode_int(self.redis.get(key), key)

    @handle_redis_errors
    @beartype
    def set_bool(self, key: str, value: bool, **kwargs) -> None:
        self.redis.set(key, encode_bool(value))
