"""Shared fixtures for unit tests.

Fixtures:
    - `store`: in-memory StoreBaseDAO honoring TTLs against (freezable) wall clock time.
    - `config`: ShortenerConfig with authorization and rate limiting enabled.
    - `service`: ShortenerService backed by `store` and `config`.
"""

import time

import pytest

from shorty.core import ShortenerService
from shorty.dao import KeySchema, StoreBaseDAO
from shorty.dao.codecs import decode_bool, decode_int, encode_bool
from shorty.utils.config import ShortenerConfig


class InMemoryStore(StoreBaseDAO):
    """Dictionary-backed store with Redis-like TTL semantics."""

    def __init__(self, prefix: str | None = None):
        self.keys = KeySchema(prefix=prefix)
        self.data: dict[str, str] = {}
        self.deadlines: dict[str, float] = {}

    def _evict_if_expired(self, key: str) -> None:
        deadline = self.deadlines.get(key)
        if deadline is not None and time.time() >= deadline:
            self.data.pop(key, None)
            self.deadlines.pop(key, None)

    def ttl(self, key: str) -> float | None:
        self._evict_if_expired(key)
        deadline = self.deadlines.get(key)
        return None if deadline is None else deadline - time.time()

    def get(self, key, **kwargs):
        self._evict_if_expired(key)
        return self.data.get(key)

    def set_if_absent(self, key, value, **kwargs):
        self._evict_if_expired(key)
        if key in self.data:
            return False
        self.data[key] = value
        return True

    def increment_and_maybe_expire(self, key, ttl, **kwargs):
        self._evict_if_expired(key)
        count = (decode_int(self.data.get(key), key) or 0) + 1
        self.data[key] = str(count)
        if count == 1:
            self.deadlines[key] = time.time() + ttl
        return count

    def get_bool(self, key, default=False, **kwargs):
        value = decode_bool(self.get(key), key)
        return default if value is None else value

    def get_int(self, key, **kwargs):
        return decode_int(self.get(key), key)

    def set_bool(self, key, value, **kwargs):
        self.data[key] = encode_bool(value)
        self.deadlines.pop(key, None)


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def config() -> ShortenerConfig:
    return ShortenerConfig(
        api_key_mandatory=True,
        rate_limit=3,
        rate_limit_period=600,
        id_length=10,
        id_generation_max_attempts=5,
    )


@pytest.fixture
def service(store: InMemoryStore, config: ShortenerConfig) -> ShortenerService:
    store.set_bool(store.keys.api_key_key('good-key'), True)
    store.set_bool(store.keys.api_key_key('disabled-key'), False)
    return ShortenerService(store, config)
