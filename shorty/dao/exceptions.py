"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    StorageUnavailableError:
        Raised when the data store can't serve a request (e.g. connection issues,
        timeouts, protocol errors or undecodable payloads).

NOTE:
    An absent key is never an error at this layer. DAO reads return None for
    absent keys, so an outage can't be mistaken for a missing short link.

Example:
    >>> from shorty.dao.exceptions import StorageUnavailableError
    >>> raise StorageUnavailableError("Can't connect to Redis at localhost:6379/0.")
    Traceback (most recent call last):
        ...
    shorty.dao.exceptions.StorageUnavailableError: Can't connect to Redis at localhost:6379/0.
"""

from shorty.exceptions import ShortyError


class DAOError(ShortyError):
    """Generic base class for DAO-related exceptions."""

    error_code = 'dao:dao_error'


class StorageUnavailableError(DAOError):
    """Raised when the data store is unreachable or answers with unusable data.

    Examples include connection issues, timeouts, protocol errors and values
    that can't be decoded into the expected type.
    """

    error_code = 'dao:storage_unavailable'
    status_code = 503
