import json
import logging

from shorty.lambdas import get_service
from shorty.types import LambdaEvent, LambdaContext, LambdaResponse
from shorty.utils import load_config, json_response, guarantee_500_response
from shorty.utils.helpers import CORS_HEADERS
from shorty.lambdas.redirect_url.constants import MISSING_SHORT_ID, REDIRECT_SUCCESS


logger = logging.getLogger(__name__)


def response_400(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    base = 'Bad Request'
    body = {'err': base if not message else f'{base} ({message})'}
    if error_code:
        body['errorCode'] = error_code
    return json_response(400, body)


def response_302(*, location: str) -> LambdaResponse:
    return {
        'statusCode': 302,
        'headers': {'Location': location, **CORS_HEADERS},
        'body': json.dumps({}),  # no body needed for redirects
    }


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to resolve short links

    This Lambda handler follows this procedure to redirect clients:
    - Step 1: Extract short ID from request path
    - Step 2: Resolve the short ID to its destination URL
    - Step 3: Redirect client to the destination URL

    HTTP responses:
        302: Successful redirect
            headers:
                Location: destination URL
        400: Bad client request
            err: missing short ID in path parameters
        404: Short link not found
        503: Data store unavailable

    Args:
        event (LambdaEvent):
            API Gateway event payload containing the `id` path parameter.
        context (LambdaContext):
            AWS Lambda runtime context object (not used directly).

    Returns:
        LambdaResponse:
            API Gateway-compatible response including statusCode, headers, and body.

    Example:
        >>> event = {'pathParameters': {'id': 'Tq4ZbM0xWe'}}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        302
        >>> response['headers']['Location']
        'https://example.com/my-page'
    """
    # 1- Extract short ID from request's path
    short_id = (event.get('pathParameters') or {}).get('id')
    if not short_id:
        logger.info('Missing short ID in path. Responding with 400.', extra={'event': MISSING_SHORT_ID})
        return response_400(message="missing 'id' in path", error_code=MISSING_SHORT_ID)

    # 2- Resolve short ID (NotFoundError is answered with 404 by guarantee_500_response)
    service = get_service(load_config())
    url = service.resolve(short_id)

    # 3- Redirect client to destination URL
    logger.info(
        'Redirecting client to destination URL. Responding with 302.',
        extra={'shortId': short_id, 'event': REDIRECT_SUCCESS},
    )
    return response_302(location=url)
