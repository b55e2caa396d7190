"""Unit tests for the standalone HTTP server

Test coverage includes:

1. Shortening (POST /)
   - Ensures valid requests answer 200 with the new short link.
   - Ensures the X-Api-Key header takes precedence over the body's api_key.
   - Ensures validation, authorization and rate limit errors map onto their status codes.

2. Redirecting (GET /{id})
   - Ensures known IDs answer 302 with a Location header.
   - Ensures unknown IDs answer 404.

3. Failures
   - Ensures store outages answer 503 and unexpected errors a generic 500.
"""

import dataclasses
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from shorty.core import ShortenerService
from shorty.dao.exceptions import StorageUnavailableError
from shorty.server import create_app


WIKIPEDIA = 'https://en.wikipedia.org/wiki/URL_shortening'


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture
def client(config, service):
    return TestClient(create_app(config, service), raise_server_exceptions=False)


def failing_client(config, error: Exception) -> TestClient:
    service = MagicMock(spec=ShortenerService)
    service.create.side_effect = error
    service.resolve.side_effect = error
    return TestClient(create_app(config, service), raise_server_exceptions=False)


# -------------------------------
# 1. Shortening (POST /)
# -------------------------------


def test_shorten(client, service):
    """Ensure a valid request creates a resolvable short link."""
    response = client.post('/', json={'url': WIKIPEDIA}, headers={'X-Api-Key': 'good-key'})
    body = response.json()

    assert response.status_code == 200
    assert body['url'] == WIKIPEDIA
    assert len(body['id']) == 10
    assert service.resolve(body['id']) == WIKIPEDIA


def test_shorten_with_api_key_in_body(client):
    response = client.post('/', json={'url': WIKIPEDIA, 'api_key': 'good-key'})
    assert response.status_code == 200


def test_shorten_header_takes_precedence(client):
    """Ensure the X-Api-Key header wins over the body's api_key."""
    response = client.post('/', json={'url': WIKIPEDIA, 'api_key': 'good-key'}, headers={'X-Api-Key': 'disabled-key'})
    assert response.status_code == 403


@pytest.mark.parametrize(
    'payload',
    [
        {},
        {'url': None},
        {'api_key': 'good-key'},
    ],
)
def test_shorten_with_invalid_body(client, payload):
    """Ensure malformed request bodies answer 400."""
    response = client.post('/', json=payload, headers={'X-Api-Key': 'good-key'})

    assert response.status_code == 400
    assert response.json()['errorCode'] == 'INVALID_REQUEST'


def test_shorten_with_invalid_json(client):
    response = client.post('/', content='{"url": ', headers={'Content-Type': 'application/json', 'X-Api-Key': 'good-key'})
    assert response.status_code == 400


@pytest.mark.parametrize(
    'url, status_code, error_code',
    [
        ('not a url', 400, 'shortener:invalid_url'),
        ('http://testserver/a1B2c3D4e5', 400, 'shortener:loop_detected'),
    ],
)
def test_shorten_with_rejected_url(client, url, status_code, error_code):
    """Ensure malformed and self-referential URLs are rejected."""
    response = client.post('/', json={'url': url}, headers={'X-Api-Key': 'good-key'})

    assert response.status_code == status_code
    assert response.json()['errorCode'] == error_code


@pytest.mark.parametrize(
    'headers, status_code',
    [
        ({}, 401),
        ({'X-Api-Key': 'unknown-key'}, 403),
    ],
)
def test_shorten_unauthorized(client, headers, status_code):
    response = client.post('/', json={'url': WIKIPEDIA}, headers=headers)
    assert response.status_code == status_code


def test_shorten_rate_limited(client):
    """Ensure the (N+1)-th call answers 429 with a Retry-After header."""
    for _ in range(3):
        assert client.post('/', json={'url': WIKIPEDIA}, headers={'X-Api-Key': 'good-key'}).status_code == 200

    response = client.post('/', json={'url': WIKIPEDIA}, headers={'X-Api-Key': 'good-key'})

    assert response.status_code == 429
    assert response.headers['Retry-After'] == '600'
    assert response.json() == {'err': 'Rate limit exceeded.', 'errorCode': 'shortener:rate_limit_exceeded'}


def test_shorten_anonymous(config, store):
    """Ensure anonymous calls succeed when API keys aren't mandatory."""
    config = dataclasses.replace(config, api_key_mandatory=False)
    client = TestClient(create_app(config, ShortenerService(store, config)))

    assert client.post('/', json={'url': WIKIPEDIA}).status_code == 200


# -------------------------------
# 2. Redirecting (GET /{id})
# -------------------------------


def test_redirect(client, store):
    store.set_if_absent('a1B2c3D4e5', 'https://example.com/page')

    response = client.get('/a1B2c3D4e5', follow_redirects=False)

    assert response.status_code == 302
    assert response.headers['Location'] == 'https://example.com/page'


@pytest.mark.parametrize('short_id', ['zzzzzzzzzz', 'RATE_good-key'])
def test_redirect_unknown_id(client, short_id):
    response = client.get(f'/{short_id}', follow_redirects=False)

    assert response.status_code == 404
    assert response.json()['errorCode'] == 'shortener:not_found'


# -------------------------------
# 3. Failures
# -------------------------------


def test_unavailable_store(config):
    """Ensure store outages answer 503."""
    client = failing_client(config, StorageUnavailableError("Can't connect to Redis at redis:6379/0."))

    assert client.post('/', json={'url': WIKIPEDIA}).status_code == 503
    assert client.get('/a1B2c3D4e5', follow_redirects=False).status_code == 503


def test_unexpected_error(config):
    """Ensure unexpected errors answer a generic 500 without leaking internals."""
    client = failing_client(config, RuntimeError('secret internals'))

    response = client.get('/a1B2c3D4e5', follow_redirects=False)

    assert response.status_code == 500
    assert response.json()['err'] == 'Internal Server Error'
    assert 'secret internals' not in response.text
