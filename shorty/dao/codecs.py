"""Typed value codecs shared by DAO implementations.

Key-value stores hand back raw strings (or bytes). These helpers turn raw
payloads into typed values and refuse to guess: a payload that isn't a valid
encoding raises StorageUnavailableError instead of being coerced into a
default. An API key record holding 'yes please' must never authorize a caller.

Functions:
    decode_str(raw, key) -> str | None
    decode_bool(raw, key) -> bool | None
    decode_int(raw, key) -> int | None
    encode_bool(value) -> str
"""

from shorty.dao.exceptions import StorageUnavailableError


__all__ = ['decode_str', 'decode_bool', 'decode_int', 'encode_bool']

TRUE_VALUES = frozenset({'true', '1'})
FALSE_VALUES = frozenset({'false', '0'})


def decode_str(raw: str | bytes | None, key: str) -> str | None:
    """Decode a raw store payload into a string (None stays None)."""
    if raw is None or isinstance(raw, str):
        return raw
    try:
        return raw.decode('utf-8')
    except UnicodeDecodeError as e:
        raise StorageUnavailableError(f"Value stored under '{key}' is not valid UTF-8.") from e


def decode_bool(raw: str | bytes | None, key: str) -> bool | None:
    """Decode a raw store payload into a boolean (None stays None).

    Raises:
        StorageUnavailableError: If the payload isn't one of true/false/1/0.

    Example:
        >>> decode_bool('TRUE', 'API_KEY_abc')
        True
        >>> decode_bool(b'0', 'API_KEY_abc')
        False
    """
    value = decode_str(raw, key)
    if value is None:
        return None

    normalized = value.strip().lower()
    if normalized in TRUE_VALUES:
        return True
    if normalized in FALSE_VALUES:
        return False
    raise StorageUnavailableError(f"Value stored under '{key}' is not a valid boolean: {value!r}.")


def decode_int(raw: str | bytes | int | None, key: str) -> int | None:
    """Decode a raw store payload into an integer (None stays None).

    Raises:
        StorageUnavailableError: If the payload isn't a base-10 integer.
    """
    if raw is None or isinstance(raw, int):
        return raw

    value = decode_str(raw, key)
    try:
        return int(value.strip())
    except ValueError as e:
        raise StorageUnavailableError(f"Value stored under '{key}' is not a valid integer: {value!r}.") from e


def encode_bool(value: bool) -> str:
    return 'true' if value else 'false'
