import functools

from shorty.core import ShortenerService
from shorty.utils.config import ShortenerConfig


@functools.lru_cache(maxsize=1)
def get_service(config: ShortenerConfig) -> ShortenerService:
    """Return a service shared by warm invocations of the same Lambda container

    The Redis client (and its connection pool) is reused for as long as the
    configuration doesn't change.
    """
    return ShortenerService.from_config(config)
