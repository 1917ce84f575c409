import logging

from urlshortener.types import LambdaEvent, LambdaContext, LambdaResponse
from urlshortener.dao.factory import short_url_dao_from_config, cache_dao_from_config
from urlshortener.dao.exceptions import DataStoreError, ShortURLNotFoundError
from urlshortener.exceptions import ConfigurationError
from urlshortener.services import ResolutionService
from urlshortener.utils import load_config, app_prefix, path_parameter, guarantee_500_response
from urlshortener.utils.responses import response_301, response_400, response_404, response_500
from urlshortener.lambdas.redirect_url.constants import (
    MISSING_SHORTCODE,
    SHORT_URL_NOT_FOUND,
    REDIRECT_SUCCESS,
    STORAGE_UNAVAILABLE,
    CONFIGURATION_ERROR,
)


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to redirect URLs

    This Lambda handler follows this procedure to redirect URLs:
    - Step 1: Extract shortcode from request path
    - Step 2: Load configuration and build the store and cache DAOs
    - Step 3: Resolve the shortcode (cache first, then store)
    - Step 4: Redirect client to the long URL

    Route:
        GET /url/{shortUrl}

    HTTP responses:
        301: Successful redirect
            headers:
                Location: long URL
        400: Bad client request
            error: missing shortcode in path parameters
        404: Not found
            error: URL not found
        500: Internal server error
            error: storage unavailable or configuration error

    Args:
        event (LambdaEvent):
            API Gateway event payload containing the shortUrl path parameter.
        context (LambdaContext):
            AWS Lambda runtime context object (not used directly).

    Returns:
        LambdaResponse:
            API Gateway-compatible response including statusCode, headers, and body.

    Example:
        >>> event = {'pathParameters': {'shortUrl': '8ec596c44bd62b6b'}}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        301
        >>> response['headers']['Location']
        'https://example.com/very/long/url'
    """
    # 1- Extract shortcode from request's path
    shortcode = path_parameter(event, 'shortUrl')
    if not shortcode:
        logger.info('Missing "shortUrl" in path. Responding with 400.', extra={'event': MISSING_SHORTCODE})
        return response_400('shortUrl is required', error_code=MISSING_SHORTCODE)
    logger.debug('Client requested short URL.', extra={'shortcode': shortcode})

    # 2- Get application's config and build DAOs
    try:
        app_config = load_config('redirect_url')
        store = short_url_dao_from_config(app_config, prefix=app_prefix())
        cache = cache_dao_from_config(app_config, store, prefix=app_prefix())
    except ConfigurationError as error:
        logger.exception('Failed to configure redirect URL function. Responding with 500.', extra={'event': CONFIGURATION_ERROR})
        return response_500(error_code=error.error_code)
    except DataStoreError:
        logger.exception('Data store or cache unavailable. Responding with 500.', extra={'event': STORAGE_UNAVAILABLE})
        return response_500(error_code=STORAGE_UNAVAILABLE)

    # 3- Resolve shortcode
    service = ResolutionService(dao=store, cache=cache)
    try:
        long_url = service.resolve(shortcode)
    except ShortURLNotFoundError:
        logger.info(
            'Short URL record not found. Responding with 404.',
            extra={'shortcode': shortcode, 'event': SHORT_URL_NOT_FOUND},
        )
        return response_404()
    except DataStoreError:
        logger.exception(
            'Data store or cache unavailable. Responding with 500.',
            extra={'shortcode': shortcode, 'event': STORAGE_UNAVAILABLE},
        )
        return response_500(error_code=STORAGE_UNAVAILABLE)

    # 4- Redirect client to long URL
    logger.info(
        'Redirecting client to target URL. Responding with 301.',
        extra={'shortcode': shortcode, 'event': REDIRECT_SUCCESS},
    )
    return response_301(location=long_url)
