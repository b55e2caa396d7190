"""Application-wide exceptions.

Every exception carries a stable `error_code` (reported to clients in the
`errorCode` response field) and the HTTP `status_code` transports respond with.

Classes:
    ShortyError:
        Base exception for all application-specific errors.

    ShortenerError:
        Base exception for client input and policy failures of the shortening core.

    ConfigurationError:
        Base exception for all configuration errors.

Example:
    >>> from shorty.exceptions import InvalidUrlError
    >>> raise InvalidUrlError("'not a url' is not a valid URL.")
    Traceback (most recent call last):
        ...
    shorty.exceptions.InvalidUrlError: 'not a url' is not a valid URL.
"""


class ShortyError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:shorty_error'
    status_code = 500


class ShortenerError(ShortyError):
    """Base exception for client input and policy failures."""

    error_code = 'shortener:shortener_error'
    status_code = 400


class InvalidUrlError(ShortenerError):
    """Raised when a submitted URL is not a well-formed absolute http(s) URL."""

    error_code = 'shortener:invalid_url'
    status_code = 400


class LoopDetectedError(ShortenerError):
    """Raised when a submitted URL points back at the shortener itself."""

    error_code = 'shortener:loop_detected'
    status_code = 400


class MissingApiKeyError(ShortenerError):
    """Raised when authorization is mandatory and no API key was presented."""

    error_code = 'shortener:missing_api_key'
    status_code = 401


class InvalidApiKeyError(ShortenerError):
    """Raised when the presented API key is unknown or disabled."""

    error_code = 'shortener:invalid_api_key'
    status_code = 403


class RateLimitExceededError(ShortenerError):
    """Raised when an API key exceeded its create calls for the current period."""

    error_code = 'shortener:rate_limit_exceeded'
    status_code = 429

    def __init__(self, message: str, retry_after: int | None = None):
        super().__init__(message)
        self.retry_after = retry_after


class IdGenerationExhaustedError(ShortenerError):
    """Raised when every short ID drawn within the attempt budget collided."""

    error_code = 'shortener:id_generation_exhausted'
    status_code = 500


class NotFoundError(ShortenerError):
    """Raised when a short ID does not map to any URL."""

    error_code = 'shortener:not_found'
    status_code = 404


class ConfigurationError(ShortyError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'
