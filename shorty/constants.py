import string
from enum import StrEnum


# Short ID alphabet: 26 lowercase + 26 uppercase + 10 digits
ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits


class Defaults:
    """Default configuration values."""

    REDIS_HOST = '127.0.0.1'
    REDIS_PORT = 6379
    REDIS_DB = 0
    API_KEY_MANDATORY = True
    RATE_LIMIT = 10  # create calls per period, 0 disables rate limiting
    RATE_LIMIT_PERIOD = 600  # seconds
    ID_LENGTH = 10
    ID_GENERATION_MAX_ATTEMPTS = 10
    HOST = '127.0.0.1'
    PORT = 8088


class KeyPrefix(StrEnum):
    """Prefixes of the persisted key namespace."""

    API_KEY = 'API_KEY_'
    RATE = 'RATE_'


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        LOG_LEVEL = 'LOG_LEVEL'

    class Redis(StrEnum):
        HOST = 'SHORTENER_REDIS_HOST'
        PORT = 'SHORTENER_REDIS_PORT'
        DB = 'SHORTENER_REDIS_DB'
        USERNAME = 'SHORTENER_REDIS_USERNAME'
        PASSWORD = 'SHORTENER_REDIS_PASSWORD'  # noqa: S105

    class Shortener(StrEnum):
        API_KEY_MANDATORY = 'SHORTENER_API_KEY_MANDATORY'
        RATE_LIMIT = 'SHORTENER_RATE_LIMIT'
        RATE_LIMIT_PERIOD = 'SHORTENER_RATE_LIMIT_PERIOD'
        ID_LENGTH = 'SHORTENER_ID_LENGTH'
        ID_GENERATION_MAX_ATTEMPTS = 'SHORTENER_ID_GENERATION_MAX_ATTEMPTS'
        PUBLIC_HOST = 'SHORTENER_PUBLIC_HOST'

    class Server(StrEnum):
        HOST = 'SHORTENER_HOST'
        PORT = 'SHORTENER_PORT'


# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
