"""Standalone HTTP server for the shortener (FastAPI + uvicorn).

Routes:
    POST /        {"url": "<string>", "api_key": "<optional>"}  -> 200 {"id", "url"}
    GET  /{id}    -> 302 Location: <url>, or 404

The API key may be sent in the `X-Api-Key` header, which takes precedence
over the body's `api_key`. Failures answer with {"err": ..., "errorCode": ...}
and the status code mapped on the raised application error.

How to Use
===========
    $ SHORTENER_API_KEY_MANDATORY=false shorty-server
    $ curl -X POST http://127.0.0.1:8088/ \
           -H "Content-Type: application/json" \
           -d '{"url": "https://en.wikipedia.org/wiki/URL_shortening"}'
    {"id": "Tq4ZbM0xWe", "url": "https://en.wikipedia.org/wiki/URL_shortening"}
"""

import logging

import uvicorn
from fastapi import FastAPI, Header, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from pydantic import BaseModel

from shorty.constants import UNKNOWN_INTERNAL_SERVER_ERROR
from shorty.core import ShortenerService
from shorty.exceptions import ShortyError, RateLimitExceededError
from shorty.utils import ShortenerConfig, load_config, initialize_logging


logger = logging.getLogger(__name__)


class ShortenRequest(BaseModel):
    url: str
    api_key: str | None = None


class ShortLinkResponse(BaseModel):
    id: str
    url: str


def _error(status_code: int, message: str, error_code: str, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={'err': message, 'errorCode': error_code}, headers=headers)


async def handle_shorty_error(request: Request, error: ShortyError) -> JSONResponse:
    log = logger.exception if error.status_code >= 500 else logger.info
    log(
        'Request failed with %s. Responding with %s.',
        error.__class__.__name__,
        error.status_code,
        extra={'event': error.error_code, 'reason': str(error), 'path': request.url.path},
    )

    headers = None
    if isinstance(error, RateLimitExceededError) and error.retry_after is not None:
        headers = {'Retry-After': str(error.retry_after)}
    return _error(error.status_code, str(error), error.error_code, headers)


async def handle_validation_error(request: Request, error: RequestValidationError) -> JSONResponse:
    fields = ', '.join('.'.join(str(part) for part in e['loc']) for e in error.errors())
    return _error(400, f'Bad Request (invalid or missing fields: {fields})', 'INVALID_REQUEST')


async def handle_unexpected_error(request: Request, error: Exception) -> JSONResponse:
    logger.exception('Unhandled exception. Responding with 500.', extra={'event': UNKNOWN_INTERNAL_SERVER_ERROR})
    return _error(500, 'Internal Server Error', UNKNOWN_INTERNAL_SERVER_ERROR)


def create_app(config: ShortenerConfig | None = None, service: ShortenerService | None = None) -> FastAPI:
    """Create the FastAPI application

    Args:
        config (ShortenerConfig | None):
            Application configuration. Loaded from the environment if None.

        service (ShortenerService | None):
            Shortening service. Built from `config` (backed by Redis) if None.

    Returns:
        FastAPI: The configured application.
    """
    config = config or load_config()
    service = service or ShortenerService.from_config(config)

    app = FastAPI(title='shorty', description='Short, collision-free identifiers for arbitrary URLs')
    app.state.service = service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=['*'],
        allow_methods=['GET', 'POST', 'OPTIONS'],
        allow_headers=['Content-Type', 'X-Api-Key'],
    )
    app.add_exception_handler(ShortyError, handle_shorty_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    # Route handlers are plain functions: FastAPI runs them in its threadpool,
    # one request per worker thread, sharing the Redis connection pool.
    @app.post('/', response_model=ShortLinkResponse)
    def shorten(payload: ShortenRequest, request: Request, x_api_key: str | None = Header(default=None)) -> ShortLinkResponse:
        api_key = x_api_key or payload.api_key or None
        link = request.app.state.service.create(payload.url, api_key=api_key, own_host=request.url.hostname)
        return ShortLinkResponse(id=link.id, url=link.url)

    @app.get('/{short_id}')
    def redirect(short_id: str, request: Request) -> RedirectResponse:
        url = request.app.state.service.resolve(short_id)
        return RedirectResponse(url, status_code=302)

    return app


def main() -> None:  # pragma: no cover
    initialize_logging()
    config = load_config()
    logger.info('Starting server.', extra={'host': config.host, 'port': config.port})
    uvicorn.run(create_app(config), host=config.host, port=config.port, log_config=None)


if __name__ == '__main__':  # pragma: no cover
    main()
