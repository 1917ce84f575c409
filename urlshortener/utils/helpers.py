"""Small helpers shared by the Lambda handlers and the services.

Functions:
    path_parameter(event, name) -> str | None
        Read an API Gateway path parameter (None when absent or empty)
    expires_at_from_now(ttl) -> int
        Absolute epoch-seconds expiry `ttl` seconds from now
    require_environment(*names) -> Callable
        Decorator: fail fast when environment variables are missing
    guarantee_500_response(handler) -> Callable
        Decorator: turn unexpected handler exceptions into HTTP 500 responses
"""

import os
import time
import logging
import functools
from typing import Any
from collections.abc import Callable

from urlshortener.constants import TTL, UNKNOWN_INTERNAL_SERVER_ERROR
from urlshortener.exceptions import MissingEnvironmentVariableError
from urlshortener.utils.runtime import running_locally
from urlshortener.utils.responses import response_500


logger = logging.getLogger(__name__)


def path_parameter(event: dict[str, Any], name: str) -> str | None:
    """Return a path parameter of a proxy event.

    API Gateway sends `"pathParameters": null` for routes without parameters.

    Example:
        >>> path_parameter({'pathParameters': {'shortUrl': '8ec596c44bd62b6b'}}, 'shortUrl')
        '8ec596c44bd62b6b'
        >>> path_parameter({'pathParameters': None}, 'shortUrl') is None
        True
    """
    return (event.get('pathParameters') or {}).get(name) or None


def expires_at_from_now(ttl: int = TTL.ONE_YEAR) -> int:
    """Return the absolute expiry (epoch seconds) `ttl` seconds from now.

    Example:
        >>> # at 2025-10-15T00:00:00Z
        >>> expires_at_from_now()
        1792022400
    """
    return int(time.time()) + ttl


def require_environment(*names: str) -> Callable:
    """Decorator: raise MissingEnvironmentVariableError unless all `names` are set and non-empty.

    The check runs on every call, not at decoration time, so tests and warm
    Lambda containers see the current environment.
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            missing = ', '.join(f"'{name}'" for name in names if not os.environ.get(name))
            if missing:
                raise MissingEnvironmentVariableError(f'Missing required environment variables: {missing}')
            return func(*args, **kwargs)

        return wrapper

    return decorator


def guarantee_500_response(handler: Callable) -> Callable:
    """Decorator: respond with HTTP 500 when a Lambda handler raises

    When running locally the exception is re-raised so SAM prints the traceback.
    """

    @functools.wraps(handler)
    def wrapper(event: dict, context: Any) -> dict:
        try:
            return handler(event, context)
        except Exception:
            if running_locally():
                raise
            logger.exception(
                'Unhandled exception in Lambda handler. Responding with 500.',
                extra={'event': UNKNOWN_INTERNAL_SERVER_ERROR, 'handler': handler.__module__},
            )
            return response_500()

    return wrapper
