import logging

from beartype import beartype

from shorty.dao.base import StoreBaseDAO
from shorty.exceptions import RateLimitExceededError


logger = logging.getLogger(__name__)


class RateLimiter:
    """Fixed-window rate limiter for create calls, counted per API key.

    Each key owns a counter (`RATE_<key>`) whose TTL is set once, on the first
    call of a window. When the TTL expires the counter disappears and the next
    call opens a new window.

    NOTE: The counter is incremented on every attempt, including the one which
          exceeds the limit. Rejected calls keep consuming the window, so the
          counter reflects attempted usage rather than accepted usage.
    """

    def __init__(self, store: StoreBaseDAO):
        self.store = store

    @beartype
    def check_and_consume(self, api_key: str, limit: int, period_seconds: int) -> int:
        """Consume one call from the API key's current window

        Args:
            api_key (str):
                API key the call is counted against.

            limit (int):
                Calls allowed per window. 0 disables rate limiting.

            period_seconds (int):
                Window length in seconds.

        Returns:
            int: Calls counted in the current window (0 if rate limiting is disabled).

        Raises:
            RateLimitExceededError:
                If the count exceeds `limit`.

            StorageUnavailableError:
                If the counter can't be incremented.

        Example:
            >>> limiter.check_and_consume('my-key', limit=1, period_seconds=600)
            1
            >>> limiter.check_and_consume('my-key', limit=1, period_seconds=600)
            Traceback (most recent call last):
                ...
            shorty.exceptions.RateLimitExceededError: Rate limit exceeded.
        """
        if limit == 0:
            return 0

        count = self.store.increment_and_maybe_expire(self.store.keys.rate_key(api_key), period_seconds)
        if count > limit:
            logger.info(
                'Rate limit exceeded.',
                extra={'event': RateLimitExceededError.error_code, 'count': count, 'limit': limit},
            )
            raise RateLimitExceededError('Rate limit exceeded.', retry_after=period_seconds)
        return count
