import functools
import redis
from typing import TypeVar, Any
from collections.abc import Callable

from shorty.dao.exceptions import StorageUnavailableError


__all__ = []

F = TypeVar('F', bound=Callable[..., Any])


def redis_location(client: redis.Redis) -> str:
    """Return '<host>:<port>/<db>' of a Redis client's connection pool."""
    info = client.connection_pool.connection_kwargs
    return f'{info.get("host")}:{info.get("port")}/{info.get("db")}'


def handle_redis_errors[F](method: F) -> F:
    """Wrap Redis-interacting DAO methods to translate Redis errors

    Connection failures and timeouts mean the store is down. Protocol and
    server-side errors (e.g. WRONGTYPE, NOSCRIPT, OOM) mean the store can't
    serve the request either, and so does a reply a decoding client
    can't turn into text. All of them become StorageUnavailableError so
    callers never mistake an outage for an absent key.

    Args:
        method (Callable[..., Any]):
            DAO method performing Redis operations which may raise redis.exceptions.RedisError.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises StorageUnavailableError on any Redis error.

    Example:
        >>> @handle_redis_errors
        ... def get_count(self):
        ...     return self.redis.get('count')
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError) as e:
            raise StorageUnavailableError(f"Can't connect to Redis at {redis_location(self.redis)}.") from e
        except redis.exceptions.RedisError as e:
            raise StorageUnavailableError(f'Redis at {redis_location(self.redis)} failed to serve the request: {e}') from e
        except UnicodeDecodeError as e:
            # Raised by clients built with decode_responses=True
            raise StorageUnavailableError(f'Redis at {redis_location(self.redis)} returned a reply that is not valid UTF-8.') from e

    return wrapper
