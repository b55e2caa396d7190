"""Unit tests for validate_url()

Test coverage includes:

1. Normalization
   - Ensures a default 'http://' scheme is prepended when missing.
   - Ensures URLs with a scheme are kept unchanged.

2. Malformed input
   - Ensures empty, whitespace-laden, hostless and non-http(s) URLs raise InvalidUrlError.

3. Loop detection
   - Ensures URLs pointing at the shortener's own host raise LoopDetectedError.
   - Ensures ports and letter case don't defeat the check.
   - Ensures the check is skipped when the own host is unknown.
"""

import pytest
from beartype.roar import BeartypeCallHintParamViolation

from shorty.core.validator import validate_url
from shorty.exceptions import InvalidUrlError, LoopDetectedError


# -------------------------------
# 1. Normalization
# -------------------------------


@pytest.mark.parametrize(
    'raw_url, expected',
    [
        ('en.wikipedia.org/wiki/URL_shortening', 'http://en.wikipedia.org/wiki/URL_shortening'),
        ('https://en.wikipedia.org/wiki/URL_shortening', 'https://en.wikipedia.org/wiki/URL_shortening'),
        ('HTTP://EXAMPLE.com/Path?q=1#frag', 'HTTP://EXAMPLE.com/Path?q=1#frag'),
        ('  example.com  ', 'http://example.com'),
        ('httpbin.org/get', 'http://httpbin.org/get'),
        ('localhost:8080/health', 'http://localhost:8080/health'),
    ],
)
def test_validate_url_normalizes_scheme(raw_url, expected):
    """Ensure a default scheme is prepended only when the URL has none."""
    assert validate_url(raw_url) == expected


# -------------------------------
# 2. Malformed input
# -------------------------------


@pytest.mark.parametrize(
    'raw_url',
    [
        '',
        '   ',
        'not a url',
        'http://',
        'https:///path-only',
        'ftp://example.com/file',
        'javascript:alert(1)',
        'http://example.com:99999999/',
        'http://exa\tmple.com',
    ],
)
def test_validate_url_rejects_malformed_urls(raw_url):
    """Ensure malformed URLs raise InvalidUrlError."""
    with pytest.raises(InvalidUrlError):
        validate_url(raw_url)


def test_validate_url_rejects_non_string():
    """Ensure non-string URLs are rejected by the type checker."""
    with pytest.raises(BeartypeCallHintParamViolation):
        validate_url(12345)


# -------------------------------
# 3. Loop detection
# -------------------------------


@pytest.mark.parametrize(
    'raw_url, own_host',
    [
        ('https://sho.rt/a1B2c3D4e5', 'sho.rt'),
        ('sho.rt/a1B2c3D4e5', 'sho.rt'),
        ('https://SHO.RT/a1B2c3D4e5', 'sho.rt'),
        ('https://sho.rt:8443/a1B2c3D4e5', 'sho.rt'),
        ('https://sho.rt/a1B2c3D4e5', 'Sho.Rt:443'),
        ('https://sho.rt./a1B2c3D4e5', 'sho.rt'),
    ],
)
def test_validate_url_detects_loops(raw_url, own_host):
    """Ensure URLs pointing back at the shortener raise LoopDetectedError."""
    with pytest.raises(LoopDetectedError):
        validate_url(raw_url, own_host)


def test_validate_url_allows_other_hosts():
    """Ensure subdomains and other hosts aren't mistaken for the shortener."""
    assert validate_url('https://www.sho.rt/page', 'sho.rt') == 'https://www.sho.rt/page'
    assert validate_url('https://example.com/sho.rt', 'sho.rt') == 'https://example.com/sho.rt'


@pytest.mark.parametrize('own_host', [None, ''])
def test_validate_url_skips_loop_check_without_own_host(own_host):
    """Ensure the loop check is skipped when the own host is unknown."""
    assert validate_url('https://sho.rt/a1B2c3D4e5', own_host) == 'https://sho.rt/a1B2c3D4e5'
