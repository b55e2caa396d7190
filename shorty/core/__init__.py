from shorty.core.validator import validate_url
from shorty.core.authorizer import ApiKeyAuthorizer
from shorty.core.rate_limiter import RateLimiter
from shorty.core.id_generator import IdGenerator, generate_id
from shorty.core.service import ShortenerService


__all__ = [
    'validate_url',
    'ApiKeyAuthorizer',
    'RateLimiter',
    'IdGenerator',
    'generate_id',
    'ShortenerService',
]
