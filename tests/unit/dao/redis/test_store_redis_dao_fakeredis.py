"""StoreRedisDAO against an in-memory Redis server (fakeredis with Lua support)

Test coverage includes:

1. Rate counter script
   - Ensures the first increment creates the counter with the window TTL.
   - Ensures later increments never touch the TTL of a running window.
   - Ensures the counter restarts at 1 once the window expired.

2. Raw replies
   - Ensures byte replies are decoded by the DAO, and undecodable ones
     raise StorageUnavailableError.
"""

import time

import fakeredis
import pytest

from shorty.dao.exceptions import StorageUnavailableError
from shorty.dao.redis import StoreRedisDAO


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture
def server():
    return fakeredis.FakeRedis()


@pytest.fixture
def dao(server):
    return StoreRedisDAO(redis_client=server)


# -------------------------------
# 1. Rate counter script
# -------------------------------


def test_first_increment_sets_ttl(server, dao):
    assert dao.increment_and_maybe_expire('RATE_my-key', 600) == 1
    assert 599 <= server.ttl('RATE_my-key') <= 600


def test_later_increments_keep_ttl(server, dao):
    """Ensure a running window is never extended by later calls."""
    dao.increment_and_maybe_expire('RATE_my-key', 600)
    server.expire('RATE_my-key', 100)

    assert dao.increment_and_maybe_expire('RATE_my-key', 600) == 2
    assert dao.increment_and_maybe_expire('RATE_my-key', 600) == 3
    assert 0 < server.ttl('RATE_my-key') <= 100


def test_counter_restarts_after_window(server, dao):
    dao.increment_and_maybe_expire('RATE_my-key', 600)
    dao.increment_and_maybe_expire('RATE_my-key', 600)
    server.pexpire('RATE_my-key', 1)
    time.sleep(0.05)

    assert server.exists('RATE_my-key') == 0
    assert dao.increment_and_maybe_expire('RATE_my-key', 600) == 1
    assert 599 <= server.ttl('RATE_my-key') <= 600


def test_counter_survives_other_keys(server, dao):
    """Ensure each key owns its own window."""
    dao.increment_and_maybe_expire('RATE_key-a', 600)
    assert dao.increment_and_maybe_expire('RATE_key-b', 60) == 1
    assert 59 <= server.ttl('RATE_key-b') <= 60


# -------------------------------
# 2. Raw replies
# -------------------------------


def test_links_and_keys_round_trip(dao):
    assert dao.set_if_absent('a1B2c3D4e5', 'https://example.com/ünïcode') is True
    assert dao.set_if_absent('a1B2c3D4e5', 'https://example.org') is False
    assert dao.get('a1B2c3D4e5') == 'https://example.com/ünïcode'

    dao.set_bool('API_KEY_my-key', True)
    assert dao.get_bool('API_KEY_my-key') is True
    assert dao.get_int('RATE_my-key') is None


def test_undecodable_record(server, dao):
    """Ensure a record which isn't UTF-8 never authorizes anyone."""
    server.set('API_KEY_my-key', b'\xff\xfe')

    with pytest.raises(StorageUnavailableError, match='not valid UTF-8'):
        dao.get_bool('API_KEY_my-key')
