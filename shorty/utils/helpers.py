"""Helper utilities for AWS lambda functions.

Functions:
    request_host(event) -> str | None
        Extract the host the request was served from
    get_header(event, name) -> str | None
        Case-insensitive lookup of a request header
    json_response(status_code, body, headers) -> dict
        Build an API Gateway proxy response with a JSON body
    error_response(error) -> dict
        Build an API Gateway proxy response from an application error
    guarantee_500_response(handler) -> Callable
        Decorator: Translate escaping exceptions into error responses

Example:
    Typical usage inside a Lambda handler:

        >>> from shorty.utils.helpers import request_host
        >>> event = {
        ...     "requestContext": {
        ...         "domainName": "abc123.execute-api.us-east-1.amazonaws.com",
        ...         "stage": "Prod"
        ...     }
        ... }
        >>> request_host(event)
        'abc123.execute-api.us-east-1.amazonaws.com'

        >>> request_host({'headers': {'host': 'sho.rt'}})
        'sho.rt'
"""

import json
import logging
import functools
from typing import Any
from collections.abc import Callable

from shorty.constants import UNKNOWN_INTERNAL_SERVER_ERROR
from shorty.exceptions import ShortyError, RateLimitExceededError
from shorty.types import LambdaEvent, LambdaResponse, HttpHeaders


logger = logging.getLogger(__name__)

CORS_HEADERS = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Headers': 'Content-Type,X-Api-Key',
    'Access-Control-Allow-Methods': 'OPTIONS,POST,GET',
}


def get_header(event: LambdaEvent, name: str) -> str | None:
    """Return a request header value, matching the header name case-insensitively

    API Gateway preserves the client's header casing, so 'X-Api-Key',
    'x-api-key' and 'X-API-KEY' must all be found.
    """
    headers = event.get('headers') or {}
    name = name.lower()
    for key, value in headers.items():
        if key.lower() == name:
            return value
    return None


def request_host(event: LambdaEvent) -> str | None:
    """Extract the host this request was served from

    Prefers the API Gateway domain name (custom or execute-api domain) and
    falls back to the Host header (SAM CLI, tests, etc.).

    Args:
        event (dict): API Gateway event object passed to Lambda handler

    Returns:
        str | None: Host name (possibly with port), None if unknown.
    """
    domain = (event.get('requestContext') or {}).get('domainName')
    return domain or get_header(event, 'Host')


def json_response(status_code: int, body: dict[str, Any], headers: HttpHeaders | None = None) -> LambdaResponse:
    return {
        'statusCode': status_code,
        'headers': {'Content-Type': 'application/json', **CORS_HEADERS, **(headers or {})},
        'body': json.dumps(body),
    }


def error_response(error: ShortyError) -> LambdaResponse:
    """Build an error response from an application error

    The body follows the shortener's error contract: `err` holds a human
    readable message and `errorCode` the stable machine readable code.
    """
    headers = {}
    if isinstance(error, RateLimitExceededError) and error.retry_after is not None:
        headers['Retry-After'] = str(error.retry_after)

    return json_response(error.status_code, {'err': str(error), 'errorCode': error.error_code}, headers)


def guarantee_500_response(handler: Callable[[LambdaEvent, Any], LambdaResponse]) -> Callable[[LambdaEvent, Any], LambdaResponse]:
    """Decorator ensuring a Lambda handler always answers with a proper response.

    Behavior:
        - Application errors (ShortyError) escaping the handler are translated
          into their mapped status code and error body.
        - Any other exception is logged and answered with a generic 500, never
          leaking internals to the client.

    Example:
        >>> @guarantee_500_response
        ... def lambda_handler(event, context):
        ...     raise NotFoundError("Short link 'abc' not found.")
        >>> lambda_handler({}, None)['statusCode']
        404
    """

    @functools.wraps(handler)
    def wrapper(event: LambdaEvent, context: Any) -> LambdaResponse:
        try:
            return handler(event, context)
        except ShortyError as error:
            log = logger.exception if error.status_code >= 500 else logger.info
            log(
                'Request failed with %s. Responding with %s.',
                error.__class__.__name__,
                error.status_code,
                extra={'event': error.error_code, 'reason': str(error)},
            )
            return error_response(error)
        except Exception:
            logger.exception('Unhandled exception. Responding with 500.', extra={'event': UNKNOWN_INTERNAL_SERVER_ERROR})
            return json_response(500, {'err': 'Internal Server Error', 'errorCode': UNKNOWN_INTERNAL_SERVER_ERROR})

    return wrapper
