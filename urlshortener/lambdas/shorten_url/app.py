import json
import logging
from urllib.parse import unquote

from urlshortener.types import LambdaEvent, LambdaContext, LambdaResponse
from urlshortener.dao.factory import short_url_dao_from_config
from urlshortener.dao.exceptions import DataStoreError
from urlshortener.exceptions import ConfigurationError, ShortCodeCollisionError, ValidationError
from urlshortener.services import ShorteningService
from urlshortener.utils import load_config, app_prefix, path_parameter, guarantee_500_response
from urlshortener.utils.responses import response_400, response_500, response_shortened
from urlshortener.lambdas.shorten_url.constants import (
    INVALID_JSON_BODY,
    MISSING_LONG_URL,
    INVALID_LONG_URL,
    SHORTEN_SUCCESS,
    STORAGE_UNAVAILABLE,
    CONFIGURATION_ERROR,
    SHORTCODE_COLLISION,
)


logger = logging.getLogger(__name__)


class BadRequestBody(Exception):
    pass


def extract_long_url(event: LambdaEvent) -> str | None:
    """Return the long URL from the legacy path parameter or the JSON body

    Raises:
        BadRequestBody: If the body is not a JSON object.
    """
    path_long_url = path_parameter(event, 'longUrl')
    if path_long_url is not None:
        return unquote(path_long_url)

    try:
        body = json.loads(event.get('body') or '{}')
    except json.JSONDecodeError as e:
        raise BadRequestBody('Invalid JSON body') from e
    if not isinstance(body, dict):
        raise BadRequestBody('Invalid JSON body')
    return body.get('longUrl')


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to shorten URLs

    This Lambda handler follows this procedure to shorten URLs:
    - Step 1: Extract the long URL from the request (JSON body or legacy path parameter)
    - Step 2: Load configuration and build the store DAO
    - Step 3: Create (or reuse) the short URL via ShorteningService
    - Step 4: Respond with 201 (created) or 200 (already existed)

    Routes:
        POST /url              body: {"longUrl": "<string>"}
        POST /url/{longUrl}    legacy; URL-encoded long URL in the path

    HTTP responses:
        201: Short URL created
            shortUrl: shortcode
            longUrl: original long URL
            ttl: expiry as epoch seconds
        200: Long URL was already shortened (same body, existing record)
        400: Bad client request
            error: invalid JSON body or missing longUrl
        500: Internal server error
            error: storage unavailable, configuration error or shortcode collision

    Args:
        event (LambdaEvent):
            API Gateway event payload in Lambda Proxy format.
        context (LambdaContext):
            AWS Lambda context object containing runtime information.

    Returns:
        LambdaResponse:
            API Gateway-compatible response including statusCode, headers, and body.

    Example:
        >>> event = {'body': '{"longUrl": "https://example.com/very/long/url"}'}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        201
        >>> json.loads(response['body'])['shortUrl']
        '8ec596c44bd62b6b'
    """
    # 1- Extract long URL from request
    try:
        long_url = extract_long_url(event)
    except BadRequestBody as e:
        logger.info('Invalid JSON body. Responding with 400.', extra={'event': INVALID_JSON_BODY})
        return response_400(str(e), error_code=INVALID_JSON_BODY)

    if not isinstance(long_url, str) or not long_url:
        logger.info('Missing "longUrl" in request. Responding with 400.', extra={'event': MISSING_LONG_URL})
        return response_400('longUrl is required', error_code=MISSING_LONG_URL)

    # 2- Get application's config and build the store DAO
    try:
        app_config = load_config('shorten_url')
        service = ShorteningService(dao=short_url_dao_from_config(app_config, prefix=app_prefix()))
    except ConfigurationError as error:
        logger.exception('Failed to configure shorten URL function. Responding with 500.', extra={'event': CONFIGURATION_ERROR})
        return response_500(error_code=error.error_code)
    except DataStoreError:
        logger.exception('Data store unavailable. Responding with 500.', extra={'event': STORAGE_UNAVAILABLE})
        return response_500(error_code=STORAGE_UNAVAILABLE)

    # 3- Create (or reuse) the short URL
    try:
        result = service.create(long_url)
    except ValidationError as error:
        logger.info('Invalid long URL. Responding with 400.', extra={'event': INVALID_LONG_URL, 'reason': str(error)})
        return response_400(str(error), error_code=INVALID_LONG_URL)
    except ShortCodeCollisionError:
        logger.exception('Shortcode collision. Responding with 500.', extra={'event': SHORTCODE_COLLISION})
        return response_500(error_code=SHORTCODE_COLLISION)
    except DataStoreError:
        logger.exception('Data store unavailable. Responding with 500.', extra={'event': STORAGE_UNAVAILABLE})
        return response_500(error_code=STORAGE_UNAVAILABLE)

    # 4- Respond to user
    short_url = result.short_url
    logger.info(
        'Shortened URL. Responding with %s.',
        201 if result.created else 200,
        extra={'shortcode': short_url.shortcode, 'created': result.created, 'event': SHORTEN_SUCCESS},
    )
    return response_shortened(
        shortcode=short_url.shortcode,
        long_url=short_url.target,
        ttl=short_url.expires_at,
        created=result.created,
    )
