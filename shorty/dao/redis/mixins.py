"""Redis client wiring shared by Redis-backed DAOs.

Responsibilities:
    - Build a Redis client from the shortener's connection settings
      (or adopt an injected one, e.g. shared across DAOs)
    - Namespace keys with the configured prefix
    - Fail fast at construction time if Redis can't serve requests

Clients built here return raw bytes (`decode_responses=False`): turning
payloads into strings, booleans and integers is left to `shorty.dao.codecs`,
which reports undecodable values as StorageUnavailableError.

Example:
    >>> from shorty.utils import load_config
    >>> dao = StoreRedisDAO(**load_config().redis_kwargs())
    >>> dao.healthcheck()
    True
"""

import redis

from shorty.constants import Defaults
from shorty.dao.key_schema import KeySchema
from shorty.dao.exceptions import StorageUnavailableError
from shorty.dao.redis.helpers import handle_redis_errors


def connect_redis(
    redis_host: str = Defaults.REDIS_HOST,
    redis_port: int | str = Defaults.REDIS_PORT,
    redis_db: int | str = Defaults.REDIS_DB,
    redis_username: str | None = None,
    redis_password: str | None = None,
) -> redis.Redis:
    """Create a byte-returning Redis client (parameters as in ShortenerConfig.redis_kwargs())."""
    return redis.Redis(
        host=redis_host,
        port=int(redis_port),
        db=int(redis_db),
        username=redis_username,
        password=redis_password,
        decode_responses=False,
    )


class RedisClientMixin:
    """Client setup and healthcheck for Redis-backed DAOs.

    Attributes:
        redis (redis.Redis): Client used by subclasses.
        keys (KeySchema): Namespaced key generator.
    """

    def __init__(self, redis_client: redis.Redis | None = None, prefix: str | None = None, **connection):
        """Adopt `redis_client`, or connect with `connection` (see connect_redis()).

        Raises:
            StorageUnavailableError:
                If Redis doesn't answer the healthcheck.
        """
        self.redis = redis_client if redis_client is not None else connect_redis(**connection)
        self.keys = KeySchema(prefix=prefix)

        self.healthcheck()

    def healthcheck(self, raise_error: bool = True) -> bool:
        """PING Redis

        Any failure (connection, timeout, authentication or server error) is
        a StorageUnavailableError, raised unless `raise_error` is False.
        """
        try:
            return self._ping()
        except StorageUnavailableError:
            if raise_error:
                raise
            return False

    @handle_redis_errors
    def _ping(self) -> bool:
        return bool(self.redis.ping())
