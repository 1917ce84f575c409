"""API Gateway (Lambda proxy) response builders.

Every response is JSON with the CORS headers required by the web front-end,
except redirects which carry no body.
"""

import json
from typing import Any

from urlshortener.constants import UNKNOWN_INTERNAL_SERVER_ERROR


CORS_HEADERS = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Headers': 'Content-Type',
    'Access-Control-Allow-Methods': 'OPTIONS,POST,GET',
}


def response_json(status_code: int, body: dict[str, Any], headers: dict[str, str] | None = None) -> dict:
    return {
        'statusCode': status_code,
        'headers': {'Content-Type': 'application/json', **CORS_HEADERS, **(headers or {})},
        'body': json.dumps(body),
    }


def response_shortened(*, shortcode: str, long_url: str, ttl: int, created: bool) -> dict:
    body = {'shortUrl': shortcode, 'longUrl': long_url, 'ttl': ttl}
    return response_json(201 if created else 200, body)


def response_301(*, location: str) -> dict:
    return {
        'statusCode': 301,
        'headers': {'Location': location, **CORS_HEADERS},
        'body': '',
    }


def response_400(message: str, error_code: str | None = None) -> dict:
    body = {'error': message}
    if error_code:
        body['errorCode'] = error_code
    return response_json(400, body)


def response_404(message: str = 'URL not found') -> dict:
    return response_json(404, {'error': message})


def response_500(error_code: str = UNKNOWN_INTERNAL_SERVER_ERROR) -> dict:
    return response_json(500, {'error': 'Internal server error', 'errorCode': error_code})
