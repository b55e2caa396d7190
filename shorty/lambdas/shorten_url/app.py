import json
import logging

from shorty.lambdas import get_service
from shorty.models import ShortLink
from shorty.types import LambdaEvent, LambdaContext, LambdaResponse
from shorty.utils import load_config, request_host, get_header, json_response, guarantee_500_response
from shorty.lambdas.shorten_url.constants import INVALID_JSON, MISSING_URL, SHORTEN_SUCCESS, API_KEY_HEADER


logger = logging.getLogger(__name__)


def response_400(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    base = 'Bad Request'
    body = {'err': base if not message else f'{base} ({message})'}
    if error_code:
        body['errorCode'] = error_code
    return json_response(400, body)


def response_200(link: ShortLink) -> LambdaResponse:
    return json_response(200, link.to_dict())


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to shorten URLs

    This Lambda handler follows this procedure to shorten URLs:
    - Step 1: Extract destination URL and API key from the request
    - Step 2: Validate, authorize, rate limit and store the short link
    - Step 3: Respond to the client with the new short link

    HTTP responses:
        200: Successful URL shortening
            id: newly generated short ID
            url: normalized destination URL
        400: Bad client request
            err: invalid JSON, missing/invalid 'url' or redirect loop
        401: Missing API key
        403: Invalid API key
        429: Rate limit exceeded (with Retry-After header)
        500: Internal server error (e.g. short IDs exhausted)
        503: Data store unavailable

    Args:
        event (LambdaEvent):
            API Gateway event payload in Lambda Proxy format. The JSON body
            holds `url` and, optionally, `api_key`. The `X-Api-Key` header
            takes precedence over the body's `api_key`.
        context (LambdaContext):
            AWS Lambda context object containing runtime information.

    Returns:
        LambdaResponse:
            API Gateway-compatible response including statusCode, headers, and body.

    Example:
        >>> event = {'body': '{"url": "https://example.com"}', 'headers': {'X-Api-Key': 'my-key'}}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        200
        >>> json.loads(response['body'])
        {'id': 'Tq4ZbM0xWe', 'url': 'https://example.com'}
    """
    # 1- Extract destination URL and API key from request
    try:
        request_body = json.loads(event.get('body') or '{}')
    except json.JSONDecodeError:
        logger.info('Invalid JSON body. Responding with 400.', extra={'event': INVALID_JSON})
        return response_400(message='invalid JSON body', error_code=INVALID_JSON)

    if not isinstance(request_body, dict):
        return response_400(message='JSON body must be an object', error_code=INVALID_JSON)

    url = request_body.get('url')
    if not isinstance(url, str) or not url:
        logger.info("Missing 'url' in JSON body. Responding with 400.", extra={'event': MISSING_URL})
        return response_400(message="missing 'url' in JSON body", error_code=MISSING_URL)

    api_key = get_header(event, API_KEY_HEADER) or request_body.get('api_key')
    if api_key is not None and not isinstance(api_key, str):
        return response_400(message="'api_key' must be a string", error_code=INVALID_JSON)

    # 2- Validate, authorize, rate limit and store the short link
    service = get_service(load_config())
    link = service.create(url, api_key=api_key or None, own_host=request_host(event))

    # 3- Respond with the new short link
    logger.info(
        'Shortened URL. Responding with 200.',
        extra={'shortId': link.id, 'event': SHORTEN_SUCCESS},
    )
    return response_200(link)
