"""Utility functions for application configuration management.

Configuration is read from environment variables only, once per process or
Lambda invocation, into an immutable `ShortenerConfig`. Core components never
read the environment: the values are threaded into them as explicit parameters.

Environment variables (all optional):
    SHORTENER_REDIS_HOST                  - store host (default 127.0.0.1)
    SHORTENER_REDIS_PORT                  - store port (default 6379)
    SHORTENER_REDIS_DB                    - store database index (default 0)
    SHORTENER_REDIS_USERNAME              - store username
    SHORTENER_REDIS_PASSWORD              - store password
    SHORTENER_API_KEY_MANDATORY           - require API keys (default true)
    SHORTENER_RATE_LIMIT                  - create calls per period, 0 disables (default 10)
    SHORTENER_RATE_LIMIT_PERIOD           - rate limit window in seconds (default 600)
    SHORTENER_ID_LENGTH                   - generated short ID length (default 10)
    SHORTENER_ID_GENERATION_MAX_ATTEMPTS  - collision retries (default 10)
    SHORTENER_HOST                        - listen host (default 127.0.0.1)
    SHORTENER_PORT                        - listen port (default 8088)
    SHORTENER_PUBLIC_HOST                 - serving host used for loop detection
    APP_NAME / APP_ENV                    - optional store key prefix '<name>:<env>'

Functions:
    app_env() -> str
        Return the current application environment (`APP_ENV`) value,
        defaulting to `'local'`.

    app_name() -> str | None
        Return the application name (`APP_NAME`), or None if not set.

    app_prefix() -> str | None
        Return the store key prefix, or None if `APP_NAME` is not set.

    load_config() -> ShortenerConfig
        Parse and validate all configuration variables.

Example:
    >>> from shorty.utils.config import load_config
    >>> config = load_config()
    >>> config.id_length
    10
"""

import os
import logging
from dataclasses import dataclass, field
from typing import Any

from shorty.constants import ENV, Defaults
from shorty.exceptions import BadConfigurationError


logger = logging.getLogger(__name__)

BOOLEAN_SPELLINGS = {
    'true': True,
    '1': True,
    'yes': True,
    'on': True,
    'false': False,
    '0': False,
    'no': False,
    'off': False,
}


@dataclass(frozen=True)
class ShortenerConfig:
    """Immutable application configuration.

    Attributes:
        redis_host, redis_port, redis_db, redis_username, redis_password:
            Store connection parameters.
        api_key_mandatory (bool):
            If True, create calls require an enabled API key.
        rate_limit (int):
            Create calls allowed per API key and period. 0 disables rate limiting.
        rate_limit_period (int):
            Rate limit window in seconds.
        id_length (int):
            Length of generated short IDs.
        id_generation_max_attempts (int):
            Short IDs drawn before giving up on collisions.
        host, port:
            Listen address of the standalone HTTP server.
        public_host (str | None):
            Host the shortener is served from. Overrides the request host for loop detection.
        prefix (str | None):
            Optional store key prefix.
    """

    redis_host: str = Defaults.REDIS_HOST
    redis_port: int = Defaults.REDIS_PORT
    redis_db: int = Defaults.REDIS_DB
    redis_username: str | None = None
    redis_password: str | None = field(default=None, repr=False)
    api_key_mandatory: bool = Defaults.API_KEY_MANDATORY
    rate_limit: int = Defaults.RATE_LIMIT
    rate_limit_period: int = Defaults.RATE_LIMIT_PERIOD
    id_length: int = Defaults.ID_LENGTH
    id_generation_max_attempts: int = Defaults.ID_GENERATION_MAX_ATTEMPTS
    host: str = Defaults.HOST
    port: int = Defaults.PORT
    public_host: str | None = None
    prefix: str | None = None

    def redis_kwargs(self) -> dict[str, Any]:
        """Return keyword arguments for Redis-backed DAOs (see RedisClientMixin)."""
        return {
            'redis_host': self.redis_host,
            'redis_port': self.redis_port,
            'redis_db': self.redis_db,
            'redis_username': self.redis_username,
            'redis_password': self.redis_password,
            'prefix': self.prefix,
        }


def app_env() -> str:
    """Return the current application environment by reading 'APP_ENV'

    Returns:
        str:
            Value of `APP_ENV` environment variable, `'local'` by default.

    Example:
        >>> os.environ['APP_ENV'] = 'dev'
        >>> app_env()
        'dev'
    """
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    """Return the current application name by reading 'APP_NAME'

    Returns:
        str:
            Value of `APP_NAME` environment variable.
            None if variable is not set.
    """
    return os.environ.get(ENV.App.APP_NAME) or None


def app_prefix() -> str | None:
    """Return store key prefix

    Returns:
        str: app prefix as <app name>:<app env>.
             None if APP_NAME is not set.

    Example:
        >>> os.environ['APP_NAME'] = 'shorty'
        >>> os.environ['APP_ENV'] = 'local'
        >>> app_prefix()
        'shorty:local'
    """
    return None if app_name() is None else f'{app_name()}:{app_env()}'


def _env_str(name: str, default: str | None = None) -> str | None:
    value = os.environ.get(name, '').strip()
    return value or default


def _env_int(name: str, default: int, minimum: int = 0) -> int:
    raw = _env_str(name)
    if raw is None:
        return default

    try:
        value = int(raw)
    except ValueError as e:
        raise BadConfigurationError(f"'{name}' must be an integer (given value: {raw!r}).") from e

    if value < minimum:
        raise BadConfigurationError(f"'{name}' must be at least {minimum} (given value: {value}).")
    return value


def _env_bool(name: str, default: bool) -> bool:
    raw = _env_str(name)
    if raw is None:
        return default

    try:
        return BOOLEAN_SPELLINGS[raw.lower()]
    except KeyError as e:
        raise BadConfigurationError(f"'{name}' must be a boolean, e.g. 'true' or 'false' (given value: {raw!r}).") from e


def load_config() -> ShortenerConfig:
    """Load the application configuration from environment variables

    Returns:
        ShortenerConfig: Parsed and validated configuration.

    Raises:
        BadConfigurationError:
            If any variable holds a malformed or out-of-range value.

    Example:
        >>> os.environ['SHORTENER_RATE_LIMIT'] = '0'
        >>> load_config().rate_limit
        0
    """
    config = ShortenerConfig(
        redis_host=_env_str(ENV.Redis.HOST, Defaults.REDIS_HOST),
        redis_port=_env_int(ENV.Redis.PORT, Defaults.REDIS_PORT, minimum=1),
        redis_db=_env_int(ENV.Redis.DB, Defaults.REDIS_DB),
        redis_username=_env_str(ENV.Redis.USERNAME),
        redis_password=_env_str(ENV.Redis.PASSWORD),
        api_key_mandatory=_env_bool(ENV.Shortener.API_KEY_MANDATORY, Defaults.API_KEY_MANDATORY),
        rate_limit=_env_int(ENV.Shortener.RATE_LIMIT, Defaults.RATE_LIMIT),
        rate_limit_period=_env_int(ENV.Shortener.RATE_LIMIT_PERIOD, Defaults.RATE_LIMIT_PERIOD, minimum=1),
        id_length=_env_int(ENV.Shortener.ID_LENGTH, Defaults.ID_LENGTH, minimum=1),
        id_generation_max_attempts=_env_int(ENV.Shortener.ID_GENERATION_MAX_ATTEMPTS, Defaults.ID_GENERATION_MAX_ATTEMPTS, minimum=1),
        host=_env_str(ENV.Server.HOST, Defaults.HOST),
        port=_env_int(ENV.Server.PORT, Defaults.PORT, minimum=1),
        public_host=_env_str(ENV.Shortener.PUBLIC_HOST),
        prefix=app_prefix(),
    )
    logger.debug('Loaded configuration from environment.', extra={'config': repr(config)})
    return config
