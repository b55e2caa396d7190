import functools
from collections.abc import Callable

from shorty.constants import KeyPrefix


__all__ = ['KeySchema']  # hide internal decorator prefix_key from imports


def prefix_key(func: Callable) -> Callable:
    @functools.wraps(func)
    def wrapper(self, *args, **kwargs) -> str:
        key = func(self, *args, **kwargs)
        return f'{self.prefix}:{key}' if self.prefix is not None else key

    return wrapper


class KeySchema:
    """Provide standardized store keys for persisted records.

    Keys follow the persisted namespace:
        API_KEY_<key>  -> boolean (API key enabled)
        RATE_<key>     -> integer counter with TTL (rate limit window)
        <id>           -> destination URL (no TTL)

    An optional prefix namespaces every generated key, short link IDs
    included: with prefix "shorty:prod" the link "a1B2c3D4e5" is stored under
    "shorty:prod:a1B2c3D4e5". The prefix is derived from APP_NAME/APP_ENV
    (see shorty.utils.config.app_prefix) and is off unless APP_NAME is set, so
    by default keys are stored bare, in the namespace above. Records written
    without a prefix aren't visible to a prefixed deployment and vice versa.
    """

    def __init__(self, prefix: str | None = None):
        if prefix is not None and not isinstance(prefix, str):
            raise TypeError(f'Prefix must be of type string (given type: {type(prefix)}).')

        self.prefix = prefix

    @prefix_key
    def link_key(self, short_id: str) -> str:
        return short_id

    @prefix_key
    def api_key_key(self, api_key: str) -> str:
        return f'{KeyPrefix.API_KEY}{api_key}'

    @prefix_key
    def rate_key(self, api_key: str) -> str:
        return f'{KeyPrefix.RATE}{api_key}'
