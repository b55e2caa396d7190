"""URL validation and normalization

Functions:
    validate_url(raw_url, own_host=None) -> str:
        Normalize a candidate destination URL and reject malformed or
        self-referential targets.

Example:
    >>> from shorty.core.validator import validate_url
    >>> validate_url('en.wikipedia.org/wiki/URL_shortening')
    'http://en.wikipedia.org/wiki/URL_shortening'
    >>> validate_url('https://sho.rt/a1B2c3D4e5', own_host='sho.rt')
    Traceback (most recent call last):
        ...
    shorty.exceptions.LoopDetectedError: URL 'https://sho.rt/a1B2c3D4e5' redirects back to this shortener.
"""

import re
import logging
from urllib.parse import urlsplit

from beartype import beartype

from shorty.exceptions import InvalidUrlError, LoopDetectedError


logger = logging.getLogger(__name__)

DEFAULT_SCHEME = 'http'
ALLOWED_SCHEMES = frozenset({'http', 'https'})

# RFC 3986 scheme followed by '://'
SCHEME_RE = re.compile(r'^[a-zA-Z][a-zA-Z0-9+.-]*://')


def _hostname(host: str) -> str:
    """Return the lowercase hostname of a 'host[:port]' string."""
    return (urlsplit(f'//{host}').hostname or '').rstrip('.')


@beartype
def validate_url(raw_url: str, own_host: str | None = None) -> str:
    """Validate and normalize a destination URL

    Procedure:
    - Step 1: Strip surrounding whitespace
    - Step 2: Prepend 'http://' if the URL has no scheme
    - Step 3: Parse it and require an http(s) scheme and a host
    - Step 4: Reject URLs pointing back at the shortener (redirect loops)

    Args:
        raw_url (str):
            Candidate destination URL as submitted by the client.

        own_host (str | None):
            Host the shortener is served from (port is ignored).
            If None or empty, the loop check is skipped.

    Returns:
        str: The normalized URL.

    Raises:
        InvalidUrlError:
            If the URL isn't a well-formed absolute http(s) URL.

        LoopDetectedError:
            If the URL's host is the shortener's own host.
    """
    url = raw_url.strip()
    if not url:
        raise InvalidUrlError('URL must be a non-empty string.')

    if not SCHEME_RE.match(url):
        url = f'{DEFAULT_SCHEME}://{url}'

    if any(char.isspace() or not char.isprintable() for char in url):
        raise InvalidUrlError(f'{raw_url!r} is not a valid URL.')

    try:
        components = urlsplit(url)
        hostname = components.hostname
        components.port  # noqa: B018 raises ValueError on malformed ports
    except ValueError as e:
        raise InvalidUrlError(f'{raw_url!r} is not a valid URL.') from e

    if components.scheme.lower() not in ALLOWED_SCHEMES:
        raise InvalidUrlError(f'{raw_url!r} is not a valid URL (unsupported scheme {components.scheme!r}).')
    if not hostname:
        raise InvalidUrlError(f'{raw_url!r} is not a valid URL (missing host).')

    if own_host and hostname.rstrip('.') == _hostname(own_host):
        logger.info('Rejected URL pointing back at the shortener.', extra={'url': url, 'ownHost': own_host})
        raise LoopDetectedError(f'URL {url!r} redirects back to this shortener.')

    return url
