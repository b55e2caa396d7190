"""Shortening service: the facade every transport calls

Create path:
    validate URL -> authorize API key -> consume rate limit -> claim short ID

Resolve path:
    read the short ID's mapping from the data store

The order of the create path is fixed: a malformed URL never consumes a rate
limit slot, and a rate limited call never allocates a short ID.

Example:
    >>> from shorty.core import ShortenerService
    >>> from shorty.utils import ShortenerConfig
    >>> service = ShortenerService.from_config(ShortenerConfig(api_key_mandatory=False))
    >>> link = service.create('https://en.wikipedia.org/wiki/URL_shortening')
    >>> link.url
    'https://en.wikipedia.org/wiki/URL_shortening'
    >>> service.resolve(link.id)
    'https://en.wikipedia.org/wiki/URL_shortening'
"""

import logging

from beartype import beartype

from shorty.models import ShortLink
from shorty.dao.base import StoreBaseDAO
from shorty.exceptions import NotFoundError
from shorty.utils.config import ShortenerConfig
from shorty.core.validator import validate_url
from shorty.core.authorizer import ApiKeyAuthorizer
from shorty.core.rate_limiter import RateLimiter
from shorty.core.id_generator import IdGenerator


logger = logging.getLogger(__name__)


class ShortenerService:
    """Orchestrate URL validation, authorization, rate limiting and ID generation

    The service holds no mutable state: all shared state lives in the data
    store, so a single instance can serve concurrent requests.

    Attributes:
        store (StoreBaseDAO):
            Data store shared by all components.
        config (ShortenerConfig):
            Policy parameters (authorization, rate limit, ID length, ...).
    """

    def __init__(self, store: StoreBaseDAO, config: ShortenerConfig):
        self.store = store
        self.config = config
        self.authorizer = ApiKeyAuthorizer(store)
        self.rate_limiter = RateLimiter(store)
        self.id_generator = IdGenerator(store)

    @classmethod
    def from_config(cls, config: ShortenerConfig) -> 'ShortenerService':
        """Build a service backed by Redis, as described by `config`

        Raises:
            StorageUnavailableError:
                If Redis can't be reached.
        """
        from shorty.dao.redis import StoreRedisDAO

        return cls(StoreRedisDAO(**config.redis_kwargs()), config)

    @beartype
    def create(self, raw_url: str, api_key: str | None = None, own_host: str | None = None) -> ShortLink:
        """Shorten a URL

        Args:
            raw_url (str):
                Destination URL as submitted by the client.

            api_key (str | None):
                API key presented by the client, if any. Calls without a key
                are not rate limited (possible only when keys aren't mandatory).

            own_host (str | None):
                Host the request was served from. The configured public host
                takes precedence when set.

        Returns:
            ShortLink: The newly created short link.

        Raises:
            InvalidUrlError, LoopDetectedError:
                If the URL is malformed or points back at the shortener.
            MissingApiKeyError, InvalidApiKeyError:
                If authorization is mandatory and fails.
            RateLimitExceededError:
                If the API key exceeded its calls for the current period.
            IdGenerationExhaustedError:
                If no free short ID was found.
            StorageUnavailableError:
                If the data store can't be reached.
        """
        url = validate_url(raw_url, self.config.public_host or own_host)

        self.authorizer.authorize(api_key, self.config.api_key_mandatory)

        if api_key:
            self.rate_limiter.check_and_consume(api_key, self.config.rate_limit, self.config.rate_limit_period)

        link = self.id_generator.generate_and_store(url, self.config.id_length, self.config.id_generation_max_attempts)
        logger.info('Short link created.', extra={'shortId': link.id, 'url': link.url})
        return link

    @beartype
    def resolve(self, short_id: str) -> str:
        """Resolve a short ID to its destination URL

        Short IDs outside the configured alphabet can never have been created,
        so they are reported as not found without a store round trip. This
        also keeps API key and rate limit records from being served as links.

        Raises:
            NotFoundError:
                If the short ID doesn't map to any URL.
            StorageUnavailableError:
                If the data store can't be reached.
        """
        alphabet = self.id_generator.alphabet
        if not short_id or any(char not in alphabet for char in short_id):
            raise NotFoundError(f"Short link '{short_id}' not found.")

        url = self.store.get(self.store.keys.link_key(short_id))
        if url is None:
            raise NotFoundError(f"Short link '{short_id}' not found.")
        return url
