"""Unit tests for handle_redis_errors decorator.

This test suite verifies that the decorator properly translates Redis
failures and preserves the original method's behavior.

Test coverage includes:
    1. Normal function execution
       - Ensures the wrapped method executes and returns its result.
    2. Error handling
       - Ensures connection errors and timeouts become StorageUnavailableError.
       - Ensures server-side errors become StorageUnavailableError.
       - Ensures undecodable replies become StorageUnavailableError.
       - Ensures non-Redis errors pass through untouched.
    3. Function metadata preservation
       - Confirms functools.wraps preserves the original function's name and docstring.
"""

import pytest
import redis
from unittest.mock import MagicMock

from shorty.dao.redis.helpers import handle_redis_errors, redis_location
from shorty.dao.exceptions import StorageUnavailableError


class DummyDAO:
    def __init__(self, error: Exception | None = None):
        self.error = error
        self.redis = MagicMock()
        self.redis.connection_pool.connection_kwargs = {'host': 'localhost', 'port': 6379, 'db': 0}

    @handle_redis_errors
    def call(self):
        """Call Redis."""
        if self.error is not None:
            raise self.error
        return 'OK'


# -------------------------------
# 1. Normal execution
# -------------------------------


def test_decorator_allows_normal_execution():
    """Ensure the wrapped function executes normally when no error occurs."""
    assert DummyDAO().call() == 'OK'


def test_redis_location():
    """Ensure the Redis location is formatted as host:port/db."""
    assert redis_location(DummyDAO().redis) == 'localhost:6379/0'


# -------------------------------
# 2. Error handling
# -------------------------------


@pytest.mark.parametrize('error', [redis.exceptions.ConnectionError('Cannot connect'), redis.exceptions.TimeoutError('Timeout')])
def test_decorator_transforms_connection_errors(error):
    """Ensure connection errors and timeouts are re-raised as StorageUnavailableError."""
    with pytest.raises(StorageUnavailableError, match="Can't connect to Redis at localhost:6379/0.") as exc_info:
        DummyDAO(error).call()

    assert exc_info.value.__cause__ is error


def test_decorator_transforms_server_errors():
    """Ensure server-side errors are re-raised as StorageUnavailableError."""
    error = redis.exceptions.ResponseError('WRONGTYPE Operation against a key holding the wrong kind of value')

    with pytest.raises(StorageUnavailableError, match='failed to serve the request: WRONGTYPE'):
        DummyDAO(error).call()


def test_decorator_transforms_decode_errors():
    """Ensure replies a decoding client can't turn into text become StorageUnavailableError."""
    error = UnicodeDecodeError('utf-8', b'\xff\xfe', 0, 1, 'invalid start byte')

    with pytest.raises(StorageUnavailableError, match='localhost:6379/0 returned a reply that is not valid UTF-8'):
        DummyDAO(error).call()


def test_decorator_ignores_other_errors():
    """Ensure non-Redis errors are not swallowed nor translated."""
    with pytest.raises(KeyError):
        DummyDAO(KeyError('boom')).call()


# -------------------------------
# 3. Metadata preservation
# -------------------------------


def test_decorator_preserves_metadata():
    """Ensure functools.wraps keeps the wrapped function's metadata."""
    assert DummyDAO.call.__name__ == 'call'
    assert DummyDAO.call.__doc__ == 'Call Redis.'
